# services/journal_service.py

import asyncio
import logging
from typing import List, Optional

from core.exceptions import LocalStoreError, RemoteStoreError
from database.repository import MoodRepository
from models.enums import Consistency, MoodCategory
from models.mood import MoodEntry, MoodValidationError
from models.results import (
    ClearFailure,
    DeleteFailure,
    LoadFailure,
    Ok,
    OperationResult,
    SaveFailure,
    ValidationFailure,
)
from services.reconciler import find_orphans, merge_entries
from services.remote_client import RemoteMoodClient
from ui import messages

logger = logging.getLogger(__name__)


class MoodJournalService:
    """
    Сервис дневника настроения: загрузка, сохранение и удаление записей

    Работает в двух режимах:
    - с сервером: сервер решает, какие записи существуют, локальное
      хранилище хранит фото и копию списка;
    - без сервера (remote=None): локальное хранилище - единственный источник.

    Каждая операция ловит ошибки хранилищ и возвращает результат
    (Ok / ValidationFailure / LoadFailure / SaveFailure / DeleteFailure),
    исключения наружу не выходят. Операции выполняются строго по одной.
    """

    def __init__(self, repository: MoodRepository, remote: Optional[RemoteMoodClient] = None,
                 tz_name: str = "UTC"):
        self.repository = repository
        self.remote = remote
        self.tz_name = tz_name
        # Последний успешно загруженный список; при ошибке загрузки не меняется
        self.entries: List[MoodEntry] = []
        self._lock = asyncio.Lock()

    @property
    def local_only(self) -> bool:
        return self.remote is None

    def get_entry(self, entry_id: str) -> Optional[MoodEntry]:
        entry_id = str(entry_id)
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    # ===== ЗАГРУЗКА =====

    async def load(self) -> OperationResult:
        """Загрузить записи и слить их с локальными данными"""
        async with self._lock:
            if self.local_only:
                try:
                    entries = await self.repository.read_all()
                except LocalStoreError as e:
                    logger.error(f"❌ Ошибка чтения локального хранилища: {e}")
                    return LoadFailure(messages.with_reason(messages.LOAD_FAILED, e),
                                       entries=list(self.entries))
                self.entries = entries
                logger.info(f"📂 Загружено записей: {len(entries)}")
                return Ok(value=list(entries))

            try:
                remote_records = await self.remote.fetch_all()
            except RemoteStoreError as e:
                logger.error(f"❌ Ошибка загрузки записей: {e}")
                return LoadFailure(messages.with_reason(messages.LOAD_FAILED, e),
                                   entries=list(self.entries))

            # Сервер решает, какие записи существуют; без локальных данных теряются только фото
            local_error = None
            try:
                local_entries = await self.repository.read_all()
            except LocalStoreError as e:
                logger.warning(f"⚠️ Локальное хранилище недоступно, показаны записи сервера: {e}")
                local_error = e
                local_entries = []

            try:
                merged = merge_entries(remote_records, local_entries, self.tz_name)
            except MoodValidationError as e:
                logger.error(f"❌ Ошибка загрузки записей: {e}")
                return LoadFailure(messages.with_reason(messages.LOAD_FAILED, e),
                                   entries=list(self.entries))

            self.entries = merged
            logger.info(f"📂 Загружено записей: {len(merged)} (локально: {len(local_entries)})")
            if local_error is not None:
                return Ok(messages.with_reason(messages.LOAD_LOCAL_FAILED, local_error),
                          consistency=Consistency.REMOTE_ONLY, value=list(merged))
            return Ok(value=list(merged))

    # ===== СОХРАНЕНИЕ =====

    async def save(self, mood, note: Optional[str] = None,
                   image: Optional[str] = None) -> OperationResult:
        """
        Сохранить новую запись.

        Запись сначала дописывается в локальный список, затем весь список
        отправляется на сервер. Если сервер недоступен, локальная запись
        остаётся (SaveFailure с consistency=LOCAL_ONLY).
        """
        category = MoodCategory.parse(mood)
        if category is None:
            logger.info("⚠️ Сохранение без выбранного настроения отклонено")
            return ValidationFailure(messages.MOOD_REQUIRED)

        async with self._lock:
            entry = MoodEntry.create(category, note=note, image=image)

            try:
                updated = await self.repository.update(lambda entries: entries + [entry])
            except LocalStoreError as e:
                logger.error(f"❌ Ошибка локального сохранения: {e}")
                return SaveFailure(messages.with_reason(messages.MOOD_NOT_SAVED, e),
                                   consistency=Consistency.UNCHANGED)

            if self.local_only:
                self.entries = updated
                logger.info(f"💾 Запись {entry.id} сохранена локально")
                return Ok(messages.MOOD_SAVED, value=entry)

            try:
                await self.remote.submit_all(updated)
            except RemoteStoreError as e:
                logger.warning(f"⚠️ Запись {entry.id} сохранена локально, но не на сервере: {e}")
                return SaveFailure(messages.with_reason(messages.MOOD_SAVED_LOCALLY, e),
                                   consistency=Consistency.LOCAL_ONLY,
                                   entry=entry, local_saved=True)

            marked = await self._mark_synced({item.id for item in updated})
            if marked is not None:
                updated = marked
                entry.synced = True
            self.entries = updated
            logger.info(f"💾 Запись {entry.id} сохранена")
            return Ok(messages.MOOD_SAVED, value=entry)

    async def _mark_synced(self, ids) -> Optional[List[MoodEntry]]:
        """Отметить записи как отправленные; None, если локальный список не обновлён"""
        def mark(entries):
            for item in entries:
                if item.id in ids:
                    item.synced = True
            return entries

        try:
            return await self.repository.update(mark)
        except LocalStoreError as e:
            # Метка влияет только на очистку сирот
            logger.warning(f"⚠️ Не удалось отметить записи как отправленные: {e}")
            return None

    # ===== УДАЛЕНИЕ =====

    async def remove(self, entry_id: str) -> OperationResult:
        """
        Удалить запись (подтверждение пользователя запрашивает вызывающий код).

        Локальное удаление выполняется независимо от ответа сервера.
        """
        entry_id = str(entry_id)
        async with self._lock:
            remote_error = None
            if not self.local_only:
                try:
                    await self.remote.delete(entry_id)
                except RemoteStoreError as e:
                    if e.status == 404:
                        logger.info(f"ℹ️ Записи {entry_id} уже нет на сервере")
                    else:
                        remote_error = e
                        logger.warning(f"⚠️ Сервер не удалил запись {entry_id}: {e}")

            try:
                await self.repository.update(
                    lambda entries: [item for item in entries if item.id != entry_id]
                )
            except LocalStoreError as e:
                logger.error(f"❌ Ошибка локального удаления {entry_id}: {e}")
                if self.local_only or remote_error is not None:
                    consistency = Consistency.UNCHANGED
                else:
                    consistency = Consistency.LOCAL_ONLY
                return DeleteFailure(messages.with_reason(messages.RECORD_NOT_DELETED, e),
                                     consistency=consistency, entry_id=entry_id)

            self.entries = [item for item in self.entries if item.id != entry_id]

            if remote_error is not None:
                return DeleteFailure(messages.with_reason(messages.RECORD_DELETED_LOCALLY, remote_error),
                                     consistency=Consistency.REMOTE_STALE,
                                     entry_id=entry_id, local_removed=True)

            logger.info(f"🗑️ Запись {entry_id} удалена")
            return Ok(messages.RECORD_DELETED, value=entry_id)

    # ===== ОЧИСТКА =====

    async def clear_all(self) -> OperationResult:
        """Стереть весь локальный список (только режим без сервера)"""
        async with self._lock:
            if not self.local_only:
                return ClearFailure(messages.CLEAR_UNAVAILABLE)
            try:
                await self.repository.clear()
            except LocalStoreError as e:
                logger.error(f"❌ Ошибка очистки истории: {e}")
                return ClearFailure(messages.with_reason(messages.CLEAR_FAILED, e))
            self.entries = []
            return Ok(messages.HISTORY_CLEARED)

    async def prune_orphans(self) -> OperationResult:
        """
        Удалить локальные записи, которые сервер подтверждал, но больше не хранит.

        Неотправленные записи не трогаются. Запускается только явно.
        """
        async with self._lock:
            if self.local_only:
                return Ok(value=0)
            try:
                remote_records = await self.remote.fetch_all()
                removed = []

                def prune(entries):
                    removed.extend(find_orphans(remote_records, entries))
                    orphan_ids = {item.id for item in removed}
                    return [item for item in entries if item.id not in orphan_ids]

                await self.repository.update(prune)
            except (RemoteStoreError, LocalStoreError) as e:
                logger.error(f"❌ Ошибка очистки сирот: {e}")
                return LoadFailure(messages.with_reason(messages.LOAD_FAILED, e),
                                   entries=list(self.entries))

            if removed:
                logger.info(f"🧹 Удалено локальных записей без пары на сервере: {len(removed)}")
            return Ok(value=len(removed))
