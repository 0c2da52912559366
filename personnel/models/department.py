"""Department ORM — canonical department identity record.

Invariants:
    - dept_no is a 4-character code
    - dept_name is globally unique (unique constraint backs the store check)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from personnel.db.base import Base


class Department(Base):
    __tablename__ = "departments"

    dept_no: Mapped[str] = mapped_column(String(4), primary_key=True)
    dept_name: Mapped[str] = mapped_column(
        String(40), nullable=False, unique=True,
    )
