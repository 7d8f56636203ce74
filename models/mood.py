# models/mood.py

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from models.enums import MoodCategory
from utils.datetime_utils import now_utc, parse_timestamp, to_iso


class MoodValidationError(ValueError):
    """Ошибка валидации записи настроения"""
    pass


@dataclass
class MoodEntry:
    """Запись дневника настроения"""
    id: str
    mood: MoodCategory
    timestamp: datetime
    note: Optional[str] = None
    image: Optional[str] = None
    synced: bool = False  # подтверждена сервером; на сервер не передаётся

    def __post_init__(self):
        if self.id is None or str(self.id) == "":
            raise MoodValidationError("id записи не может быть пустым")
        self.id = str(self.id)

        mood = MoodCategory.parse(self.mood)
        if mood is None:
            raise MoodValidationError(f"Неизвестное настроение: {self.mood!r}")
        self.mood = mood

        if not isinstance(self.timestamp, datetime):
            raise MoodValidationError("timestamp должен быть datetime")

        if self.note == "":
            self.note = None
        if self.image == "":
            self.image = None

    @property
    def emoji(self) -> str:
        return self.mood.emoji

    @classmethod
    def create(cls, mood: MoodCategory, note: Optional[str] = None,
               image: Optional[str] = None) -> "MoodEntry":
        """Новая запись с сгенерированным id и текущим временем"""
        return cls(
            id=str(uuid.uuid4()),
            mood=mood,
            timestamp=now_utc(),
            note=note,
            image=image,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация для локального хранилища"""
        return {
            "id": self.id,
            "mood": self.mood.value,
            "note": self.note,
            "date": to_iso(self.timestamp),
            "image": self.image,
            "synced": self.synced,
        }

    def to_remote_dict(self) -> Dict[str, Any]:
        """Поля, которые уходят на сервер (без ссылки на фото)"""
        return {
            "id": self.id,
            "mood": self.mood.value,
            "note": self.note or "",
            "date": to_iso(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], tz_name: str = "UTC") -> "MoodEntry":
        try:
            timestamp = parse_timestamp(data.get("date") or data.get("timestamp"), tz_name)
        except ValueError as e:
            raise MoodValidationError(str(e)) from e
        return cls(
            id=data.get("id"),
            mood=data.get("mood"),
            timestamp=timestamp,
            note=data.get("note"),
            image=data.get("image"),
            synced=bool(data.get("synced", False)),
        )
