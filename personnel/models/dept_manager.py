"""DeptManager ORM — effective-dated department management.

Invariants:
    - Primary key is the composite identity (emp_no, dept_no, from_date)
    - At most one row per (emp_no, dept_no) pair (uq_dept_manager_pair)
    - At most one current manager per department is NOT enforced here;
      the resolver reports violations as AmbiguousCurrentStateError
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from personnel.db.base import Base


class DeptManager(Base):
    __tablename__ = "dept_manager"
    __table_args__ = (
        UniqueConstraint("emp_no", "dept_no", name="uq_dept_manager_pair"),
        Index("ix_dept_manager_dept_no", "dept_no"),
    )

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    dept_no: Mapped[str] = mapped_column(
        String(4), ForeignKey("departments.dept_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
