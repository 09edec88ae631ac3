from phonecall_graph.orm.service.base import BaseService
from phonecall_graph.orm.service.call_service import CallService, RegisteredCaller

__all__ = [
    "BaseService",
    "CallService",
    "RegisteredCaller",
]
