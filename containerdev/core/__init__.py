"""Core functionality for containerdev."""

from .container_runner import ContainerRunner
from .resolver import ProfileResolver
from .supervisor import CancelToken, InterruptHandler, Supervisor

__all__ = [
    'CancelToken',
    'ContainerRunner',
    'InterruptHandler',
    'ProfileResolver',
    'Supervisor'
]
