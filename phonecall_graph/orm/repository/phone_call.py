"""PhoneCall repository for PhoneCall-Graph.

Implements lookups over phone calls, including queries against
the text[] topics column.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from phonecall_graph.orm.repository.base import GenericRepository
from phonecall_graph.orm.schema import PhoneCall


class PhoneCallRepository(GenericRepository[PhoneCall]):
    """Repository for PhoneCall entity."""

    def __init__(self, session: Session, model_cls: type[PhoneCall] = PhoneCall):
        super().__init__(session, model_cls)

    def get_by_phone_number(self, phone_number: str) -> list[PhoneCall]:
        """Retrieve all calls made from the given phone number, oldest first."""
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.phone_number == phone_number)
            .order_by(self.model_cls.call_time)
        )
        return list(self.session.execute(stmt).scalars().all())

    def get_all_with_caller(self) -> list[PhoneCall]:
        """Retrieve all calls ordered by ID with their caller eagerly loaded."""
        stmt = select(self.model_cls).options(selectinload(self.model_cls.caller)).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_by_caller_id(self, caller_id: int) -> list[PhoneCall]:
        """Retrieve all calls belonging to a caller.

        Args:
            caller_id: The caller ID.

        Returns:
            List of phone calls ordered by ID.
        """
        stmt = select(self.model_cls).where(self.model_cls.caller_id == caller_id).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_by_topic(self, topic: str) -> list[PhoneCall]:
        """Retrieve all calls tagged with the given topic.

        Uses PostgreSQL array containment (``topics @> ARRAY[topic]``).
        """
        stmt = select(self.model_cls).where(self.model_cls.topics.contains([topic])).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_unassigned(self) -> list[PhoneCall]:
        """Retrieve calls that are not linked to any caller."""
        stmt = select(self.model_cls).where(self.model_cls.caller_id.is_(None)).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_between(self, start: datetime, end: datetime) -> list[PhoneCall]:
        """Retrieve calls whose call_time lies in [start, end)."""
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.call_time >= start, self.model_cls.call_time < end)
            .order_by(self.model_cls.call_time)
        )
        return list(self.session.execute(stmt).scalars().all())
