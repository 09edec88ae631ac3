from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.orm import Session, sessionmaker


class BaseService(ABC):
    """Abstract base class for all service implementations.

    Services own a session factory and open a fresh Unit of Work per operation.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        """Initialize the service.

        Args:
            session_factory: SQLAlchemy sessionmaker for database connections.
        """
        self.session_factory = session_factory

    @abstractmethod
    def _create_uow(self) -> Any:
        """Create a new Unit of Work instance.

        Subclasses must implement this to return their specific UoW type.
        """
        ...
