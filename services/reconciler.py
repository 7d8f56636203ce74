# services/reconciler.py

"""
Слияние удалённых и локальных записей.

Сервер решает, какие записи существуют и в каком порядке они идут;
локальное хранилище дополняет их ссылкой на фото. Ключ соединения - id
записи, на обеих границах это строка.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from models.mood import MoodEntry
from shared.models import RemoteMoodRecord

logger = logging.getLogger(__name__)


def merge_entries(remote: Sequence[RemoteMoodRecord], local: Iterable[MoodEntry],
                  tz_name: str = "UTC") -> List[MoodEntry]:
    """
    Объединить записи сервера с локальными.

    Порядок и состав берутся с сервера. Фото: непустое значение сервера,
    иначе локальное, иначе None. Локальные записи без пары на сервере
    не попадают в результат.
    """
    local_by_id: Dict[str, MoodEntry] = {entry.id: entry for entry in local}
    merged = []
    seen = set()

    for record in remote:
        if record.id in seen:
            logger.warning(f"⚠️ Сервер вернул запись {record.id} повторно, пропускаем")
            continue
        seen.add(record.id)

        entry = MoodEntry.from_dict(record.model_dump(), tz_name)
        local_entry = local_by_id.get(record.id)
        entry.image = record.image or (local_entry.image if local_entry else None)
        entry.synced = True
        merged.append(entry)

    orphans = len(set(local_by_id) - seen)
    if orphans:
        logger.debug(f"🔍 Локальных записей без пары на сервере: {orphans}")
    return merged


def find_orphans(remote: Sequence[RemoteMoodRecord], local: Iterable[MoodEntry]) -> List[MoodEntry]:
    """Подтверждённые сервером локальные записи, которых на сервере больше нет"""
    remote_ids = {record.id for record in remote}
    return [entry for entry in local if entry.synced and entry.id not in remote_ids]
