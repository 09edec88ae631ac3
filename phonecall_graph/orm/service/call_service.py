"""Call Service for PhoneCall-Graph.

Writes callers together with their phone calls in a single transaction and
reads them back through a cleared session, so every read reflects what was
actually persisted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from phonecall_graph.orm.schema import Caller, PhoneCall
from phonecall_graph.orm.service.base import BaseService
from phonecall_graph.orm.uow import CallUnitOfWork

logger = logging.getLogger("PhoneCall-Graph")


@dataclass
class RegisteredCaller:
    """Identifiers assigned by the database when a caller is registered."""

    caller_id: int
    phone_call_ids: list[int]


class CallService(BaseService):
    """Service for recording phone calls and the callers who made them.

    Example:
        ```python
        service = CallService(session_factory)
        registered = service.register_caller(
            "John Doe",
            [{"phone_number": "123-456-7890", "topics": ["Support"]}],
        )
        calls = service.list_calls()
        ```
    """

    def _create_uow(self) -> CallUnitOfWork:
        return CallUnitOfWork(self.session_factory)

    def register_caller(self, name: str, phone_calls: list[dict[str, Any]]) -> RegisteredCaller:
        """Insert a caller and its phone calls in one atomic unit.

        Args:
            name: Caller name. Must not be empty.
            phone_calls: Keyword arguments for each PhoneCall
                (``phone_number`` and optionally ``call_time`` and ``topics``).

        Returns:
            The caller id and the phone call ids, in input order.
        """
        with self._create_uow() as uow:
            calls = [PhoneCall(**item) for item in phone_calls]
            uow.phone_calls.add_all(calls)
            caller = uow.callers.add(Caller(name=name, phone_calls=calls))
            uow.flush()
            registered = RegisteredCaller(caller_id=caller.id, phone_call_ids=[call.id for call in calls])
            uow.commit()
            uow.clear()

        logger.debug(
            f"Registered caller {registered.caller_id} with {len(registered.phone_call_ids)} phone call(s)"
        )
        return registered

    def record_call(
        self,
        phone_number: str,
        topics: list[str] | None = None,
        call_time: datetime | None = None,
        caller_id: int | None = None,
    ) -> int:
        """Insert a single phone call, optionally linked to an existing caller.

        Returns:
            The id assigned to the new phone call.
        """
        kwargs: dict[str, Any] = {"phone_number": phone_number, "topics": list(topics or [])}
        if call_time is not None:
            kwargs["call_time"] = call_time

        with self._create_uow() as uow:
            call = PhoneCall(**kwargs)
            if caller_id is not None:
                caller = uow.callers.get_by_id(caller_id)
                if caller is None:
                    raise ValueError(f"Caller {caller_id} not found.")  # noqa: TRY003
                call.caller = caller
            uow.phone_calls.add(call)
            uow.flush()
            call_id = call.id
            uow.commit()
            uow.clear()

        logger.debug(f"Recorded phone call {call_id}")
        return call_id

    def list_calls(self) -> list[PhoneCall]:
        """Load all phone calls from the database, ordered by id.

        The returned calls are detached from any session. Their ``caller`` is loaded
        eagerly so it stays readable; nothing else is lazily loaded afterwards.
        """
        with self._create_uow() as uow:
            return uow.phone_calls.get_all_with_caller()

    def get_topics(self, phone_call_id: int) -> set[str]:
        """Return the topics stored on a phone call.

        Raises:
            ValueError: If the phone call does not exist.
        """
        with self._create_uow() as uow:
            call = uow.phone_calls.get_by_id(phone_call_id)
            if call is None:
                raise ValueError(f"Phone call {phone_call_id} not found.")  # noqa: TRY003
            return set(call.topics)
