from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from devevent.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Event(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "events"
    __table_args__ = (Index("ix_events_date_time", "date", "time"),)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    # URL-safe key derived from title; see services.normalize.generate_slug
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    overview: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    venue: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)

    # Fixed width: only ever written normalized, YYYY-MM-DD and HH:MM (24h)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)

    mode: Mapped[str] = mapped_column(Text, nullable=False)
    audience: Mapped[str] = mapped_column(Text, nullable=False)
    agenda: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    organizer: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, slug={self.slug}, date={self.date} {self.time})>"
