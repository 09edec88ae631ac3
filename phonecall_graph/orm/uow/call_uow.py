"""Unit of Work over callers and their phone calls."""

from sqlalchemy.orm import Session, sessionmaker

from phonecall_graph.orm.repository.caller import CallerRepository
from phonecall_graph.orm.repository.phone_call import PhoneCallRepository
from phonecall_graph.orm.uow.base import BaseUnitOfWork


class CallUnitOfWork(BaseUnitOfWork):
    """Unit of Work grouping Caller and PhoneCall writes into one transaction.

    Provides lazy-initialized repositories sharing the same session.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        super().__init__(session_factory)
        self._caller_repo: CallerRepository | None = None
        self._phone_call_repo: PhoneCallRepository | None = None

    def _reset_repositories(self) -> None:
        self._caller_repo = None
        self._phone_call_repo = None

    @property
    def callers(self) -> CallerRepository:
        """Get the Caller repository.

        Raises:
            SessionNotSetError: If session is not initialized.
        """
        return self._get_repository("_caller_repo", CallerRepository)

    @property
    def phone_calls(self) -> PhoneCallRepository:
        """Get the PhoneCall repository.

        Raises:
            SessionNotSetError: If session is not initialized.
        """
        return self._get_repository("_phone_call_repo", PhoneCallRepository)
