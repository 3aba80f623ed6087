"""CLI para cargar un CSV de empleados desde disco.

Usage:
    employee-ingest --file employees.csv [--db-url sqlite:///employees.db]
"""

import argparse
import logging
from typing import Optional, Sequence

from sqlalchemy.orm import sessionmaker

from employee_api import models  # noqa: F401
from employee_api.core.config import get_settings
from employee_api.core.errors import EmployeeApiError
from employee_api.db import Base, build_engine
from employee_api.ingestion import ingest_employees
from employee_api.repository import EmployeeRepository
from employee_api.resources import FileResource

logger = logging.getLogger("employee_api.cli")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Ingest an employee CSV into the database")
    parser.add_argument("--file", required=True, help="Path to CSV file")
    parser.add_argument(
        "--db-url", default=None, help="SQLAlchemy URL (defaults to the configured database)"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    engine = build_engine(args.db_url or settings.sqlalchemy_url)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    try:
        with Session() as db:
            total = ingest_employees(FileResource(args.file), EmployeeRepository(db))
    except EmployeeApiError as e:
        logger.error("Ingestion failed: %s", e)
        return 1
    finally:
        engine.dispose()
    logger.info("Done. %d rows ingested.", total)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
