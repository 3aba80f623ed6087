# employee_api/repository.py
"""Acceso a la tabla ``employee``.

Todo error de SQLAlchemy sale de acá como StorageError, así las rutas no
dependen del driver.
"""
import logging
from typing import Optional

from sqlalchemy import extract, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from employee_api.core.errors import StorageError
from employee_api.models import Employee

logger = logging.getLogger("repository")

INSERT_COLUMNS = ["first_name", "last_name", "city", "state", "location", "birth_day"]

SORTABLE = {
    "id": Employee.id,
    "first_name": Employee.first_name,
    "last_name": Employee.last_name,
    "city": Employee.city,
    "state": Employee.state,
    "location": Employee.location,
    "birth_day": Employee.birth_day,
    # nombres camelCase que aceptaba la API original
    "firstName": Employee.first_name,
    "lastName": Employee.last_name,
    "birthDay": Employee.birth_day,
}


class EmployeeRepository:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, event: str, exc: SQLAlchemyError, message: str):
        self.db.rollback()
        logger.error(event, exc_info=exc, extra={"error": str(exc)})
        raise StorageError(message) from exc

    def batch_insert(self, employees: list[Employee]) -> int:
        """Inserta todos los empleados con un único INSERT masivo.

        El lote es atómico: si la base rechaza una fila, se hace rollback de
        todo y se lanza StorageError. Sin reintentos.
        """
        if not employees:
            return 0
        rows = [{c: getattr(e, c) for c in INSERT_COLUMNS} for e in employees]
        try:
            self.db.execute(insert(Employee), rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("batch_insert_failed", e, "Batch insert failed due to database access error.")
        logger.info("batch_insert", extra={"rows": len(rows)})
        return len(rows)

    def find_by_id(self, employee_id: int) -> Optional[Employee]:
        try:
            return self.db.get(Employee, employee_id)
        except SQLAlchemyError as e:
            self._fail("find_by_id_failed", e, f"Failed to retrieve employee {employee_id}")

    def save(self, employee: Employee) -> Employee:
        try:
            self.db.add(employee)
            self.db.commit()
            self.db.refresh(employee)
        except SQLAlchemyError as e:
            self._fail("save_failed", e, "Failed to save employee")
        return employee

    def delete(self, employee: Employee) -> None:
        try:
            self.db.delete(employee)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete_failed", e, f"Failed to delete employee {employee.id}")

    def _page(self, where, offset: int, limit: int, sort_by: str) -> tuple[list[Employee], int]:
        order = SORTABLE[sort_by]
        stmt = select(Employee)
        count_stmt = select(func.count()).select_from(Employee)
        if where is not None:
            stmt = stmt.where(where)
            count_stmt = count_stmt.where(where)
        stmt = stmt.order_by(order, Employee.id).offset(offset).limit(limit)
        rows = list(self.db.scalars(stmt).all())
        total = self.db.scalar(count_stmt) or 0
        return rows, total

    def find_all(self, offset: int, limit: int, sort_by: str = "id") -> tuple[list[Employee], int]:
        try:
            return self._page(None, offset, limit, sort_by)
        except SQLAlchemyError as e:
            self._fail("find_all_failed", e, "Failed to retrieve employees")

    def find_by_birth_month(
        self, month: int, offset: int, limit: int, sort_by: str = "id"
    ) -> tuple[list[Employee], int]:
        """Página de empleados que cumplen años en ``month``; el total usa el mismo filtro."""
        try:
            return self._page(extract("month", Employee.birth_day) == month, offset, limit, sort_by)
        except SQLAlchemyError as e:
            self._fail(
                "find_by_birth_month_failed", e, "Failed to retrieve employees by birthday month"
            )
