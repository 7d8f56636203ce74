import json
import logging
import threading
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)


class MoodRecordStore:
    """Хранилище записей сервера в JSON файле (упорядоченный список)"""

    def __init__(self, data_file: Path):
        self.data_file = Path(data_file)
        self._lock = threading.RLock()

        # Создаем директорию если её нет
        self.data_file.parent.mkdir(parents=True, exist_ok=True)

        # Инициализируем файл если его нет
        if not self.data_file.exists():
            self._save_json([])

    def _load_json(self) -> List[Dict]:
        """Загрузка записей из JSON файла"""
        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except json.JSONDecodeError as e:
            logger.error(f"❌ Ошибка парсинга {self.data_file}: {e}")
            raise
        return data if isinstance(data, list) else []

    def _save_json(self, records: List[Dict]):
        """Сохранение записей в JSON файл"""
        tmp_path = self.data_file.with_suffix(self.data_file.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.data_file)

    def list_records(self) -> List[Dict]:
        with self._lock:
            return self._load_json()

    def count(self) -> int:
        return len(self.list_records())

    def upsert_many(self, records: List[Dict]) -> int:
        """
        Сохранить присланный список: известные id обновляются на месте,
        новые дописываются в конец в порядке списка. Возвращает число новых.
        """
        with self._lock:
            stored = self._load_json()
            index = {str(record.get('id')): i for i, record in enumerate(stored)}
            created = 0

            for record in records:
                record_id = str(record['id'])
                if record_id in index:
                    previous = stored[index[record_id]]
                    # фото клиента не передаётся; сохранённое значение не затираем
                    if not record.get('image') and previous.get('image'):
                        record = {**record, 'image': previous['image']}
                    stored[index[record_id]] = record
                else:
                    index[record_id] = len(stored)
                    stored.append(record)
                    created += 1

            self._save_json(stored)
            logger.info(f"💾 Принято записей: {len(records)}, новых: {created}")
            return created

    def delete(self, record_id: str) -> bool:
        with self._lock:
            stored = self._load_json()
            remaining = [record for record in stored if str(record.get('id')) != str(record_id)]
            if len(remaining) == len(stored):
                return False
            self._save_json(remaining)
            logger.info(f"🗑️ Запись {record_id} удалена")
            return True
