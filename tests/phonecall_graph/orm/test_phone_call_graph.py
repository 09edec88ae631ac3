"""Round-trip tests for the caller -> phone call graph and the topics column."""

from datetime import timedelta

import pytest

from phonecall_graph.orm.schema import Caller, PhoneCall
from phonecall_graph.orm.uow import CallUnitOfWork
from phonecall_graph.util import utc_now

pytestmark = pytest.mark.database


def test_add_caller_and_calls(session_factory):
    with CallUnitOfWork(session_factory) as uow:
        call1 = PhoneCall(call_time=utc_now(), phone_number="123-456-7890")
        call2 = PhoneCall(call_time=utc_now() - timedelta(minutes=30), phone_number="987-654-3210")

        uow.phone_calls.add(call1)
        uow.phone_calls.add(call2)

        caller = Caller(name="John Doe", phone_calls=[call1, call2])
        uow.callers.add(caller)

        uow.commit()

        # Forget tracked instances so the next read hits the database.
        uow.clear()

        calls = uow.phone_calls.get_all()

        assert len(calls) == 2
        assert calls[0].id > 0
        assert calls[1].id > 0
        assert calls[0].caller_id == calls[1].caller_id
        assert calls[0].caller_id is not None
        assert {call.phone_number for call in calls} == {"123-456-7890", "987-654-3210"}


def test_add_call_with_topics(session_factory):
    with CallUnitOfWork(session_factory) as uow:
        call1 = PhoneCall(call_time=utc_now(), phone_number="123-456-7890", topics=["Support", "Billing"])

        uow.phone_calls.add(call1)

        uow.commit()
        uow.clear()

        calls = uow.phone_calls.get_all()

        assert len(calls) == 1
        assert len(calls[0].topics) == 2
        assert "Support" in calls[0].topics
        assert "Billing" in calls[0].topics


def test_linked_calls_reference_their_caller(session_factory):
    with CallUnitOfWork(session_factory) as uow:
        calls = [PhoneCall(phone_number=f"555-000-000{i}") for i in range(3)]
        caller = uow.callers.add(Caller(name="Jane Roe", phone_calls=calls))
        uow.commit()
        caller_id = caller.id
        uow.clear()

        persisted = uow.phone_calls.get_by_caller_id(caller_id)

        assert len(persisted) == 3
        assert all(call.caller_id == caller_id for call in persisted)


def test_clear_forces_reload_from_database(session_factory):
    with CallUnitOfWork(session_factory) as uow:
        call = uow.phone_calls.add(PhoneCall(phone_number="123-456-7890", topics=["Support"]))
        uow.commit()

        call.topics.append("Billing")
        uow.clear()

        reloaded = uow.phone_calls.get_by_id(call.id)

        assert reloaded is not call
        assert reloaded.topics == ["Support"]


def test_call_without_topics_reads_back_empty_list(session_factory):
    with CallUnitOfWork(session_factory) as uow:
        call = uow.phone_calls.add(PhoneCall(phone_number="123-456-7890"))
        uow.commit()
        call_id = call.id
        uow.clear()

        reloaded = uow.phone_calls.get_by_id(call_id)

        assert reloaded.topics == []
        assert reloaded.call_time is not None
        assert reloaded.caller_id is None
