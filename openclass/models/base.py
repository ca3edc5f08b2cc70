# openclass/models/base.py
from datetime import datetime, timezone
import uuid

from sqlalchemy.orm import as_declarative, declared_attr
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@as_declarative()
class Base:
    __abstract__ = True  # Prevents creating a table for the base class

    id: Mapped[str]

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    # Opaque string identifiers; seed data uses fixed readable ids
    id = mapped_column(String(64), primary_key=True, index=True, default=new_id)
    created_at = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
