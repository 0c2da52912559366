"""Salary ORM — effective-dated salary history.

Invariants:
    - Primary key is (emp_no, from_date): two salaries cannot start on the same day
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from personnel.db.base import Base


class Salary(Base):
    __tablename__ = "salaries"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
