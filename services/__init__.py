# services/__init__.py

"""
Модуль сервисов дневника настроения

Сборка сервиса дневника из конфигурации: локальное хранилище,
клиент сервера (если задан MOOD_REMOTE_URL) и слияние записей.
"""

import logging
from typing import Optional

from config import AppConfig, get_config
from database import KeyValueStore, MoodRepository
from .journal_service import MoodJournalService
from .remote_client import RemoteMoodClient

logger = logging.getLogger(__name__)


def create_journal_service(config: Optional[AppConfig] = None) -> MoodJournalService:
    """Создать сервис дневника по конфигурации"""
    config = config or get_config()

    store = KeyValueStore(config.storage.store_path, backup_dir=config.storage.backup_dir)
    repository = MoodRepository(store, config.storage.storage_key, tz_name=config.display_timezone)

    remote = None
    if config.remote.enabled:
        remote = RemoteMoodClient(
            config.remote.base_url,
            request_timeout=config.remote.request_timeout,
            retries=config.remote.retries
        )
        logger.info(f"🌐 Сервер записей: {config.remote.base_url}")
    else:
        logger.info("📱 Режим без сервера: записи хранятся только на устройстве")

    return MoodJournalService(repository, remote=remote, tz_name=config.display_timezone)


# Экспорты для удобства
__all__ = [
    'MoodJournalService',
    'RemoteMoodClient',
    'create_journal_service'
]
