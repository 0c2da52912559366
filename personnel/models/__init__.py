"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relation rows reference employees/departments by value (emp_no, dept_no);
      Employee and Department hold no collections of their histories

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from personnel.models.employee import Employee  # noqa: F401
from personnel.models.department import Department  # noqa: F401
from personnel.models.dept_emp import DeptEmp  # noqa: F401
from personnel.models.dept_manager import DeptManager  # noqa: F401
from personnel.models.salary import Salary  # noqa: F401
from personnel.models.title import Title  # noqa: F401
