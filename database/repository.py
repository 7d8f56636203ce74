# database/repository.py

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List

from core.exceptions import LocalStoreCorruptionError
from database.manager import KeyValueStore
from models.mood import MoodEntry, MoodValidationError

logger = logging.getLogger(__name__)


class MoodRepository:
    """
    Список записей в локальном хранилище.

    Весь список хранится одним JSON-блобом под фиксированным ключом и
    перезаписывается целиком при каждом изменении. Чтение-изменение-запись
    выполняется под блокировкой, поэтому вызовы из разных мест кода
    выполняются по очереди. Несколько процессов над одним файлом не
    поддерживаются.
    """

    def __init__(self, store: KeyValueStore, key: str, tz_name: str = "UTC"):
        self.store = store
        self.key = key
        self.tz_name = tz_name
        self._lock = asyncio.Lock()

    async def read_all(self) -> List[MoodEntry]:
        async with self._lock:
            return await self._read_unlocked()

    async def write_all(self, entries: List[MoodEntry]) -> None:
        async with self._lock:
            await self._write_unlocked(entries)

    async def update(self, mutate: Callable[[List[MoodEntry]], List[MoodEntry]]) -> List[MoodEntry]:
        """Прочитать список, применить mutate и записать результат целиком"""
        async with self.locked() as entries:
            updated = mutate(list(entries))
            await self._write_unlocked(updated)
            return updated

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[List[MoodEntry]]:
        """Снимок списка, удерживающий блокировку до выхода из блока"""
        async with self._lock:
            yield await self._read_unlocked()

    async def clear(self) -> None:
        async with self._lock:
            await self.store.remove(self.key)
            logger.info("🗑️ Локальный список записей очищен")

    async def _read_unlocked(self) -> List[MoodEntry]:
        raw = await self.store.get(self.key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise LocalStoreCorruptionError(f"Повреждён список записей: {e}") from e
        if not isinstance(items, list):
            raise LocalStoreCorruptionError("Список записей должен быть JSON-массивом")

        entries = []
        for item in items:
            if not isinstance(item, dict):
                raise LocalStoreCorruptionError(f"Неверная запись в хранилище: {item!r}")
            try:
                entries.append(MoodEntry.from_dict(item, self.tz_name))
            except MoodValidationError as e:
                raise LocalStoreCorruptionError(f"Неверная запись {item.get('id')}: {e}") from e
        return entries

    async def _write_unlocked(self, entries: List[MoodEntry]) -> None:
        blob = json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)
        await self.store.set(self.key, blob)
        logger.debug(f"💾 Сохранено записей локально: {len(entries)}")
