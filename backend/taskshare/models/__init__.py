"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM objects never leave infrastructure/repositories.py; services see records

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from taskshare.models.user import User  # noqa: F401
from taskshare.models.task_list import TaskList  # noqa: F401
from taskshare.models.task_list_member import TaskListMember  # noqa: F401
from taskshare.models.todo import ToDo  # noqa: F401
