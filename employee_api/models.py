from datetime import date
from typing import Optional
from sqlalchemy import String, Integer, Date, Index
from sqlalchemy.orm import Mapped, mapped_column
from employee_api.db import Base

class Employee(Base):
    __tablename__ = "employee"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    birth_day: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("ix_employee_birth_day", "birth_day"),
    )

    def __repr__(self) -> str:
        return f"Employee(id={self.id!r}, first_name={self.first_name!r}, last_name={self.last_name!r})"
