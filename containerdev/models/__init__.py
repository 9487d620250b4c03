"""Models for containerdev."""

from .config import Config, ContainerProfile
from .run_options import RunOptions

__all__ = [
    'Config',
    'ContainerProfile',
    'RunOptions'
]
