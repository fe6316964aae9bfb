"""Repository implementations for the domain storage contracts."""

from taskflow.repositories.backendless import BackendlessAuthRepository, BackendlessTaskRepository
from taskflow.repositories.memory import InMemoryAuthRepository, InMemoryTaskRepository


__all__ = [
    "BackendlessAuthRepository",
    "BackendlessTaskRepository",
    "InMemoryAuthRepository",
    "InMemoryTaskRepository",
]
