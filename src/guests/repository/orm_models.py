from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.guests.dtos import GuestStatus
from src.models.base import Base, TimeStamp, utcnow


class SeatingTable(Base, TimeStamp):
    __tablename__ = TableNames.TABLES.value
    __table_args__ = (
        CheckConstraint("capacity BETWEEN 1 AND 50", name="ck_tables_capacity_range"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Back-reference only: a table never owns the lifecycle of its guests
    guests: Mapped[list["Guest"]] = relationship(
        "Guest", back_populates="table", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<SeatingTable {self.name} ({self.capacity})>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value
    __table_args__ = (
        CheckConstraint(
            "number_of_people BETWEEN 0 AND 20", name="ck_guests_number_of_people_range"
        ),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    group_family: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    number_of_people: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    status: Mapped[str] = mapped_column(
        Enum(
            GuestStatus,
            name="guest_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=GuestStatus.PENDING,
        nullable=False,
        index=True,
    )
    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)

    table_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.TABLES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    table: Mapped["SeatingTable | None"] = relationship("SeatingTable", back_populates="guests")

    rsvp_token: Mapped["RsvpToken | None"] = relationship(
        "RsvpToken",
        back_populates="guest",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def __repr__(self) -> str:
        return f"<Guest {self.first_name} {self.last_name} - {self.status}>"


class RsvpToken(Base):
    __tablename__ = TableNames.RSVP_TOKENS.value

    token: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    # unique: at most one token per guest
    guest_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    guest: Mapped["Guest"] = relationship("Guest", back_populates="rsvp_token")

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<RsvpToken for guest {self.guest_id} used={self.is_used}>"
