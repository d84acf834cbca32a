# Declarative base shared by users and notes
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(DeclarativeBase):
    """Every row gets a UUID key and created/updated timestamps."""

    __abstract__ = True

    # native uuid on postgres, CHAR(32) elsewhere
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"

    def touch(self) -> None:
        """Mark the row as modified now."""
        self.updated_at = utcnow()
