"""Title ORM — effective-dated job title history.

Invariants:
    - Primary key is (emp_no, from_date)
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from personnel.db.base import Base


class Title(Base):
    __tablename__ = "titles"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    title: Mapped[str] = mapped_column(String(50), nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
