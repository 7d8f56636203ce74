# models/results.py

from dataclasses import dataclass, field
from typing import Any, List, Optional

from models.enums import Consistency
from models.mood import MoodEntry


@dataclass
class OperationResult:
    """Базовый результат операции, который видит слой интерфейса"""
    message: str = ""
    consistency: Consistency = Consistency.CONSISTENT

    @property
    def ok(self) -> bool:
        return False


@dataclass
class Ok(OperationResult):
    """Операция завершена успешно"""
    value: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass
class ValidationFailure(OperationResult):
    """Неверный ввод; хранилища не тронуты"""
    consistency: Consistency = Consistency.UNCHANGED


@dataclass
class LoadFailure(OperationResult):
    """Не удалось загрузить записи; entries - последний успешно загруженный список"""
    entries: List[MoodEntry] = field(default_factory=list)
    consistency: Consistency = Consistency.UNCHANGED


@dataclass
class SaveFailure(OperationResult):
    """
    Сохранение не завершено.

    local_saved=True означает, что запись уже в локальном хранилище
    (consistency=LOCAL_ONLY) и откат не выполняется.
    """
    entry: Optional[MoodEntry] = None
    local_saved: bool = False


@dataclass
class DeleteFailure(OperationResult):
    """
    Удаление не подтверждено.

    local_removed=True означает, что запись уже удалена локально,
    а сервер мог её сохранить (consistency=REMOTE_STALE).
    """
    entry_id: str = ""
    local_removed: bool = False


@dataclass
class ClearFailure(OperationResult):
    """Полная очистка недоступна в режиме с сервером"""
    consistency: Consistency = Consistency.UNCHANGED
