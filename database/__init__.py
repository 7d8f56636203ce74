"""
Локальное хранилище дневника настроения
"""

from .manager import KeyValueStore
from .repository import MoodRepository

__all__ = [
    'KeyValueStore',
    'MoodRepository'
]
