"""Base model and mixins shared by the railway tables."""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# e_status value of an active record; anything else is soft-deleted
ACTIVE_STATUS = 0


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class StatusMixin:
    """Mixin for the soft-delete status and secondary sort columns."""

    e_status: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=ACTIVE_STATUS,
    )
    e_sort: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
