# database/manager.py

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import aiofiles
import aiofiles.os

from core.exceptions import LocalStoreError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Асинхронное key-value хранилище на устройстве.

    Все ключи лежат в одном JSON-файле {key: строка}. Значения - непрозрачные
    строки, сериализацию выполняет вызывающий код. Запись атомарна:
    сначала во временный файл, затем замена.
    """

    def __init__(self, path: Path, backup_dir: Optional[Path] = None):
        self.path = Path(path)
        self.backup_dir = Path(backup_dir) if backup_dir else self.path.parent / "backups"
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await self._read()
            return data.get(key)

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Значение хранилища должно быть строкой")
        async with self._lock:
            data = await self._read()
            data[key] = value
            await self._write(data)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await self._read()
            if key in data:
                del data[key]
                await self._write(data)

    async def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise LocalStoreError(f"Не удалось прочитать {self.path}: {e}") from e

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Ошибка парсинга JSON хранилища: {e}")
            await self._backup_corrupted()
            return {}

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            logger.warning("⚠️ Неверный формат файла хранилища")
            await self._backup_corrupted()
            return {}
        return data

    async def _write(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, ensure_ascii=False, indent=2))
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            raise LocalStoreError(f"Не удалось записать {self.path}: {e}") from e

    async def _backup_corrupted(self) -> None:
        """Перенос повреждённого файла в бэкапы; хранилище начинается с пустого"""
        backup_name = f"corrupted_{self.path.stem}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.json"
        backup_path = self.backup_dir / backup_name
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            await aiofiles.os.replace(self.path, backup_path)
        except OSError as e:
            raise LocalStoreError(f"Не удалось сохранить повреждённый файл: {e}") from e
        logger.warning(f"🔄 Повреждённый файл хранилища перемещён в {backup_path}")
