from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from fishfindr.models.base import Base


class Location(Base):
    """A reported catch position.

    ``pk`` only records insertion order so that listings are stable;
    clients address a location by its opaque ``id``.
    """

    __tablename__ = "locations"

    pk: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(sa.String, unique=True, nullable=False)
    latitude: Mapped[float] = mapped_column(sa.Float, nullable=False)
    longitude: Mapped[float] = mapped_column(sa.Float, nullable=False)
    timestamp: Mapped[str] = mapped_column(sa.String, nullable=False)

    def __repr__(self) -> str:
        return f"Location(id={self.id!r}, latitude={self.latitude}, longitude={self.longitude})"
