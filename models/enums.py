# models/enums.py

from enum import Enum
from typing import Optional, Union


class MoodCategory(Enum):
    """Категории настроения"""
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"

    @property
    def emoji(self) -> str:
        return MOOD_EMOJI[self]

    @classmethod
    def parse(cls, value: Union[str, "MoodCategory", None]) -> Optional["MoodCategory"]:
        """Категория из имени или эмодзи; None если значение не распознано"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        value = value.strip()
        if not value:
            return None
        for category, emoji in MOOD_EMOJI.items():
            if value == emoji:
                return category
        try:
            return cls(value.lower())
        except ValueError:
            return None


MOOD_EMOJI = {
    MoodCategory.HAPPY: "😊",
    MoodCategory.NEUTRAL: "😐",
    MoodCategory.SAD: "😢",
}


class Consistency(Enum):
    """Согласованность локального и удалённого хранилищ после операции"""
    CONSISTENT = "consistent"
    LOCAL_ONLY = "local_only"      # запись есть локально, сервер мог её не получить
    REMOTE_STALE = "remote_stale"  # запись удалена локально, сервер мог её сохранить
    REMOTE_ONLY = "remote_only"    # локальный список не прочитан, показаны только записи сервера
    UNCHANGED = "unchanged"        # ни одно хранилище не изменено
