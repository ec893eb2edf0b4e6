"""Key/value model backing the database storage backend."""

from datetime import datetime

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from knittracker.db import Base
from knittracker.utils import utcnow


class KeyValue(Base):
    """
    One opaque blob stored under a string key.
    """

    __tablename__ = "key_values"

    #: The storage key.
    key: Mapped[str] = mapped_column(String, primary_key=True)
    #: The stored bytes.
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    #: The date and time the value was last written.
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )
