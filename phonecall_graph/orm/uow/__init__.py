"""Unit of Work (UoW) pattern implementations for PhoneCall-Graph.

- BaseUnitOfWork: Abstract base class with common patterns
- CallUnitOfWork: For writing and reading callers with their phone calls
"""

from phonecall_graph.orm.uow.base import BaseUnitOfWork
from phonecall_graph.orm.uow.call_uow import CallUnitOfWork

__all__ = [
    "BaseUnitOfWork",
    "CallUnitOfWork",
]
