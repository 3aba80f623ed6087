# employee_api/ingestion.py
"""CSV -> EmployeeIn -> Employee -> INSERT masivo."""
import logging
from datetime import date
from typing import Optional

from employee_api.csv_parser import load_employees_from_csv
from employee_api.dates import to_birth_day
from employee_api.models import Employee
from employee_api.repository import EmployeeRepository
from employee_api.resources import TextResource
from employee_api.schemas import EmployeeIn

logger = logging.getLogger("ingestion")


def to_employee(payload: EmployeeIn, today: Optional[date] = None) -> Employee:
    employee = Employee()
    apply_update(employee, payload, today)
    return employee


def apply_update(employee: Employee, payload: EmployeeIn, today: Optional[date] = None) -> Employee:
    """Pisa todos los campos mutables; el id no se toca."""
    employee.first_name = payload.first_name
    employee.last_name = payload.last_name
    employee.city = payload.city
    employee.state = payload.state
    employee.location = payload.location
    # una fecha irreconocible queda en NULL, no aborta
    employee.birth_day = to_birth_day(payload.birth_date, today)
    return employee


def ingest_employees(
    resource: TextResource,
    repository: EmployeeRepository,
    today: Optional[date] = None,
) -> int:
    """Carga un CSV completo y lo persiste en un solo lote.

    ParseError / ResourceNotFoundError (lectura) y StorageError (escritura)
    se propagan tal cual. Devuelve la cantidad de filas guardadas.
    """
    today = today or date.today()
    inputs = load_employees_from_csv(resource)
    employees = [to_employee(p, today) for p in inputs]
    missing_birth_day = sum(1 for e in employees if e.birth_day is None)
    total = repository.batch_insert(employees)
    logger.info("ingestion_complete", extra={
        "source": resource.name, "rows": total, "missing_birth_day": missing_birth_day,
    })
    return total
