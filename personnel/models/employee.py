"""Employee ORM — canonical employee identity record.

Invariants:
    - emp_no is caller-supplied (no autoincrement)
    - All attributes non-nullable; updates replace every mutable attribute
"""

from datetime import date

from sqlalchemy import Date, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from personnel.core.domain_types import Gender
from personnel.db.base import Base


class Employee(Base):
    """Employee identity — subject of every temporal relation."""
    __tablename__ = "employees"

    emp_no: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    first_name: Mapped[str] = mapped_column(String(14), nullable=False)
    last_name: Mapped[str] = mapped_column(String(16), nullable=False)
    gender: Mapped[Gender] = mapped_column(
        Enum(
            Gender, name="gender", native_enum=False, length=1,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
