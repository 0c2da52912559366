"""Employee stored procedures used by the procedure employee writer.

Revision ID: 002_employee_procedures
Revises: 001_initial
Create Date: 2026-10-19

PostgreSQL only; other dialects skip this revision. The procedures write the
employees table alone: relation rows are removed by the identity store before
sp_delete_employee runs.
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002_employee_procedures"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_SIGNATURE = (
    "p_emp_no INTEGER, p_birth_date DATE, p_first_name VARCHAR, "
    "p_last_name VARCHAR, p_gender VARCHAR, p_hire_date DATE"
)

_PROCEDURES = [
    f"""
    CREATE OR REPLACE PROCEDURE sp_insert_employee({_SIGNATURE})
    LANGUAGE plpgsql AS $$
    BEGIN
        INSERT INTO employees (emp_no, birth_date, first_name, last_name, gender, hire_date)
        VALUES (p_emp_no, p_birth_date, p_first_name, p_last_name, p_gender, p_hire_date);
    END;
    $$
    """,
    f"""
    CREATE OR REPLACE PROCEDURE sp_update_employee({_SIGNATURE})
    LANGUAGE plpgsql AS $$
    BEGIN
        UPDATE employees
           SET birth_date = p_birth_date,
               first_name = p_first_name,
               last_name = p_last_name,
               gender = p_gender,
               hire_date = p_hire_date
         WHERE emp_no = p_emp_no;
    END;
    $$
    """,
    """
    CREATE OR REPLACE PROCEDURE sp_delete_employee(p_emp_no INTEGER)
    LANGUAGE plpgsql AS $$
    BEGIN
        DELETE FROM employees WHERE emp_no = p_emp_no;
    END;
    $$
    """,
]


def _is_postgres() -> bool:
    return op.get_bind().dialect.name == "postgresql"


def upgrade() -> None:
    if not _is_postgres():
        return
    for ddl in _PROCEDURES:
        op.execute(ddl)


def downgrade() -> None:
    if not _is_postgres():
        return
    op.execute("DROP PROCEDURE IF EXISTS sp_delete_employee(INTEGER)")
    op.execute(
        "DROP PROCEDURE IF EXISTS sp_update_employee"
        "(INTEGER, DATE, VARCHAR, VARCHAR, VARCHAR, DATE)"
    )
    op.execute(
        "DROP PROCEDURE IF EXISTS sp_insert_employee"
        "(INTEGER, DATE, VARCHAR, VARCHAR, VARCHAR, DATE)"
    )
