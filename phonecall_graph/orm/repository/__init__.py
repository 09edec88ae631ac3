"""Repository module for PhoneCall-Graph ORM.

This module provides repository classes for data access layer operations.
"""

from phonecall_graph.orm.repository.base import GenericRepository
from phonecall_graph.orm.repository.caller import CallerRepository
from phonecall_graph.orm.repository.phone_call import PhoneCallRepository

__all__ = [
    "CallerRepository",
    "GenericRepository",
    "PhoneCallRepository",
]
