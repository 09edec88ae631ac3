"""Caller repository for PhoneCall-Graph."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from phonecall_graph.orm.repository.base import GenericRepository
from phonecall_graph.orm.schema import Caller, PhoneCall


class CallerRepository(GenericRepository[Caller]):
    """Repository for Caller entity with phone call relationship loading."""

    def __init__(self, session: Session, model_cls: type[Caller] = Caller):
        super().__init__(session, model_cls)

    def get_by_name(self, name: str) -> list[Caller]:
        """Retrieve every caller with the given name.

        Names are not unique, so a list is returned.
        """
        stmt = select(self.model_cls).where(self.model_cls.name == name).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_with_phone_calls(self, caller_id: int) -> Caller | None:
        """Retrieve a caller with its phone calls eagerly loaded.

        Args:
            caller_id: The caller ID.

        Returns:
            The caller with phone calls loaded, None if not found.
        """
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.id == caller_id)
            .options(selectinload(self.model_cls.phone_calls))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def count_phone_calls(self, caller_id: int) -> int:
        stmt = select(func.count()).select_from(PhoneCall).where(PhoneCall.caller_id == caller_id)
        return self.session.execute(stmt).scalar_one()
