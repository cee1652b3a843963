"""Storage modules for the fitness coach engine."""

from fitness_coach.storage.base import BaseStorage, get_data_dir
from fitness_coach.storage.programs import ProgramStorage
from fitness_coach.storage.sessions import SessionStorage

__all__ = [
    "BaseStorage",
    "get_data_dir",
    "ProgramStorage",
    "SessionStorage",
]
