"""Initial schema — employees, departments and the four effective-dated relations.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Relation tables use their composite identity as primary key. dept_emp and
dept_manager also carry a unique (emp_no, dept_no) constraint. Foreign keys
cascade on delete as a backstop to the identity store's explicit cascade.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _emp_fk() -> sa.Column:
    return sa.Column(
        "emp_no", sa.Integer,
        sa.ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )


def _dept_fk() -> sa.Column:
    return sa.Column(
        "dept_no", sa.String(4),
        sa.ForeignKey("departments.dept_no", ondelete="CASCADE"),
        primary_key=True,
    )


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("emp_no", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("birth_date", sa.Date, nullable=False),
        sa.Column("first_name", sa.String(14), nullable=False),
        sa.Column("last_name", sa.String(16), nullable=False),
        sa.Column("gender", sa.String(1), nullable=False),
        sa.Column("hire_date", sa.Date, nullable=False),
        sa.CheckConstraint("gender IN ('M', 'F')", name="ck_employees_gender"),
    )

    op.create_table(
        "departments",
        sa.Column("dept_no", sa.String(4), primary_key=True),
        sa.Column("dept_name", sa.String(40), nullable=False, unique=True),
    )

    for table in ("dept_emp", "dept_manager"):
        op.create_table(
            table,
            _emp_fk(),
            _dept_fk(),
            sa.Column("from_date", sa.Date, primary_key=True),
            sa.Column("to_date", sa.Date, nullable=True),
            sa.UniqueConstraint("emp_no", "dept_no", name=f"uq_{table}_pair"),
        )
        op.create_index(f"ix_{table}_dept_no", table, ["dept_no"])

    op.create_table(
        "salaries",
        _emp_fk(),
        sa.Column("from_date", sa.Date, primary_key=True),
        sa.Column("salary", sa.Integer, nullable=False),
        sa.Column("to_date", sa.Date, nullable=True),
    )

    op.create_table(
        "titles",
        _emp_fk(),
        sa.Column("from_date", sa.Date, primary_key=True),
        sa.Column("title", sa.String(50), nullable=False),
        sa.Column("to_date", sa.Date, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("titles")
    op.drop_table("salaries")
    for table in ("dept_manager", "dept_emp"):
        op.drop_index(f"ix_{table}_dept_no", table_name=table)
        op.drop_table(table)
    op.drop_table("departments")
    op.drop_table("employees")
