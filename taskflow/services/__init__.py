"""Use-case services and the composition root that wires them to storage."""

from taskflow.services.auth_service import AuthService
from taskflow.services.container import ServiceContainer, build_container
from taskflow.services.task_service import TaskService


__all__ = [
    "AuthService",
    "ServiceContainer",
    "TaskService",
    "build_container",
]
