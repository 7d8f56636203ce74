from pydantic import BaseModel, field_validator
from typing import List, Optional, Union

from models.enums import MoodCategory

# Модели обмена с удалённым хранилищем записей


class RemoteMoodRecord(BaseModel):
    """Запись в том виде, в каком её отдаёт и принимает сервер"""
    id: str
    mood: str
    note: Optional[str] = None
    date: str
    image: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v: Union[str, int]):
        # id всегда строка: числовые id сервера приводятся здесь, а не при слиянии
        if isinstance(v, bool) or v is None:
            raise ValueError('id должен быть строкой или числом')
        if isinstance(v, (int, float)):
            v = str(v)
        if not isinstance(v, str) or not v.strip():
            raise ValueError('id не может быть пустым')
        return v.strip()

    @field_validator('mood')
    @classmethod
    def validate_mood(cls, v):
        category = MoodCategory.parse(v)
        if category is None:
            raise ValueError(f'Неизвестное настроение: {v}')
        return category.value

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class SaveResponse(BaseModel):
    ok: bool


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    records: int = 0


def parse_remote_list(payload) -> List[RemoteMoodRecord]:
    """Проверка ответа GET /moods; ValueError если это не список записей"""
    if not isinstance(payload, list):
        raise ValueError('Ожидался JSON-массив записей')
    return [RemoteMoodRecord.model_validate(item) for item in payload]
