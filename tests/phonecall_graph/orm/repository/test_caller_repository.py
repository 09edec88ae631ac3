import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from phonecall_graph.orm.repository.caller import CallerRepository
from phonecall_graph.orm.schema import Caller, PhoneCall

pytestmark = pytest.mark.database


@pytest.fixture
def caller_repository(db_session: Session) -> CallerRepository:
    return CallerRepository(db_session)


@pytest.fixture
def john_doe(db_session: Session) -> Caller:
    caller = Caller(
        name="John Doe",
        phone_calls=[PhoneCall(phone_number="123-456-7890"), PhoneCall(phone_number="987-654-3210")],
    )
    db_session.add(caller)
    db_session.commit()
    return caller


def test_add_assigns_id(caller_repository: CallerRepository, db_session: Session):
    caller = caller_repository.add(Caller(name="Jane Roe"))
    db_session.flush()

    assert caller.id > 0
    assert caller_repository.exists(caller.id)


def test_get_by_name(caller_repository: CallerRepository, john_doe: Caller):
    results = caller_repository.get_by_name("John Doe")

    assert [caller.id for caller in results] == [john_doe.id]
    assert caller_repository.get_by_name("Nobody") == []


def test_get_with_phone_calls(caller_repository: CallerRepository, john_doe: Caller, db_session: Session):
    caller_id = john_doe.id
    db_session.expunge_all()

    result = caller_repository.get_with_phone_calls(caller_id)

    assert result is not None
    assert "phone_calls" not in inspect(result).unloaded
    assert [call.phone_number for call in result.phone_calls] == ["123-456-7890", "987-654-3210"]


def test_get_with_phone_calls_not_found(caller_repository: CallerRepository):
    assert caller_repository.get_with_phone_calls(999_999) is None


def test_count_phone_calls(caller_repository: CallerRepository, john_doe: Caller):
    assert caller_repository.count_phone_calls(john_doe.id) == 2


def test_delete_caller_removes_owned_calls(caller_repository: CallerRepository, john_doe: Caller, db_session: Session):
    assert caller_repository.delete_by_id(john_doe.id) is True
    db_session.flush()

    assert caller_repository.count() == 0
    assert db_session.query(PhoneCall).count() == 0
    assert caller_repository.delete_by_id(john_doe.id) is False
