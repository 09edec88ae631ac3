"""ORM Schema definitions for PhoneCall-Graph.

Two tables are mapped:
- caller: a person placing calls, owning an ordered list of phone calls
- phone_call: a single call with a timestamp, the dialed number and a list of topic labels

Example:
    from phonecall_graph.orm.schema import Caller, PhoneCall

    call = PhoneCall(phone_number="123-456-7890", topics=["Support"])
    caller = Caller(name="John Doe", phone_calls=[call])
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

from phonecall_graph.exceptions import EmptyValueError
from phonecall_graph.util import utc_now


class Base(DeclarativeBase):
    pass


class Caller(Base):
    """Caller table"""

    __tablename__ = "caller"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (CheckConstraint("length(name) > 0", name="ck_caller_name_not_empty"),)

    # Relationships
    phone_calls: Mapped[list["PhoneCall"]] = relationship(
        back_populates="caller", cascade="all, delete-orphan", order_by="PhoneCall.id"
    )

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        if not value:
            raise EmptyValueError(key)
        return value

    def __repr__(self) -> str:
        return f"Caller(id={self.id!r}, name={self.name!r})"


class PhoneCall(Base):
    """Phone call table with its topic labels"""

    __tablename__ = "phone_call"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    call_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )
    phone_number: Mapped[str] = mapped_column(Text, nullable=False)
    topics: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, default=list, server_default=text("'{}'::text[]")
    )
    caller_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("caller.id", ondelete="SET NULL"), nullable=True, index=True
    )

    __table_args__ = (CheckConstraint("length(phone_number) > 0", name="ck_phone_call_number_not_empty"),)

    # Relationships
    caller: Mapped[Optional["Caller"]] = relationship(back_populates="phone_calls")

    @validates("phone_number")
    def _validate_phone_number(self, key: str, value: str) -> str:
        if not value:
            raise EmptyValueError(key)
        return value

    def __repr__(self) -> str:
        return f"PhoneCall(id={self.id!r}, phone_number={self.phone_number!r}, topics={self.topics!r})"


__all__ = [
    "Base",
    "Caller",
    "PhoneCall",
]
