#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Journal - Configuration
Централизованная конфигурация с валидацией
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

# Ключ локального хранилища, под которым лежит весь список записей
STORAGE_KEY = "@moodList:key"

@dataclass
class RemoteConfig:
    """Конфигурация удалённого хранилища записей"""
    base_url: Optional[str] = None
    request_timeout: Optional[float] = 15.0  # None - без таймаута
    retries: int = 1  # число попыток; 1 - без повторов

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

@dataclass
class StorageConfig:
    """Конфигурация локального хранилища"""
    data_dir: Path
    backup_dir: Path
    export_dir: Path
    store_file: str = "local_store.json"
    storage_key: str = STORAGE_KEY

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file

@dataclass
class BackendConfig:
    """Конфигурация сервера записей"""
    host: str = "0.0.0.0"
    port: int = 8080
    data_file: Path = Path("data/backend_moods.json")
    debug_mode: bool = False

class AppConfig:
    """Главный класс конфигурации"""

    def __init__(self, env: Optional[Dict[str, str]] = None):
        self._env = os.environ if env is None else env
        self.environment = Environment(self._get('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._env.get(key, default)

    def _get_bool(self, key: str, default: str) -> bool:
        return self._get(key, default).lower() == 'true'

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(self._get('DATA_DIR', 'data'))
        self.backup_dir = Path(self._get('BACKUP_DIR', 'backups'))
        self.export_dir = Path(self._get('EXPORT_DIR', 'exports'))
        self.log_dir = Path(self._get('LOG_DIR', 'logs'))

        # Удалённое хранилище; пустой URL - локальный режим без сервера
        timeout = self._get('MOOD_REMOTE_TIMEOUT', '15')
        self.remote = RemoteConfig(
            base_url=(self._get('MOOD_REMOTE_URL') or '').rstrip('/') or None,
            request_timeout=float(timeout) if timeout and timeout.lower() != 'none' else None,
            retries=int(self._get('MOOD_REMOTE_RETRIES', '1'))
        )

        # Локальное хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            backup_dir=self.backup_dir,
            export_dir=self.export_dir,
            store_file=self._get('LOCAL_STORE_FILE', 'local_store.json')
        )

        # Сервер записей
        self.backend = BackendConfig(
            host=self._get('BACKEND_HOST', '0.0.0.0'),
            port=int(self._get('BACKEND_PORT', '8080')),
            data_file=Path(self._get('BACKEND_DATA_FILE', str(self.data_dir / 'backend_moods.json'))),
            debug_mode=self._get_bool('DEBUG_MODE', 'false')
        )

        # Отображение
        self.display_timezone = self._get('DISPLAY_TIMEZONE', 'UTC')

        # Логирование
        self.log_level = LogLevel(self._get('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = self._get_bool('LOG_TO_FILE', 'false')
        self.log_format = self._get(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.remote.base_url and not self.remote.base_url.startswith(('http://', 'https://')):
            errors.append(f"MOOD_REMOTE_URL должен начинаться с http:// или https://: {self.remote.base_url}")

        if self.remote.request_timeout is not None and self.remote.request_timeout <= 0:
            errors.append("MOOD_REMOTE_TIMEOUT должен быть положительным числом")

        if self.remote.retries < 1:
            errors.append("MOOD_REMOTE_RETRIES должен быть не меньше 1")

        if not 1024 <= self.backend.port <= 65535:
            errors.append(f"Порт {self.backend.port} вне допустимого диапазона (1024-65535)")

        if self.display_timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестный часовой пояс DISPLAY_TIMEZONE: {self.display_timezone}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [
            self.data_dir,
            self.backup_dir,
            self.export_dir
        ]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stderr
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'aiohttp': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'urllib3': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"mood_journal_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def is_local_only(self) -> bool:
        """Режим без сервера: локальное хранилище - единственный источник"""
        return not self.remote.enabled

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'remote': {
                'base_url': self.remote.base_url,
                'request_timeout': self.remote.request_timeout,
                'retries': self.remote.retries
            },
            'store_path': str(self.storage.store_path),
            'backend': {
                'host': self.backend.host,
                'port': self.backend.port,
                'data_file': str(self.backend.data_file)
            },
            'display_timezone': self.display_timezone,
            'log_level': self.log_level.value
        }

# Глобальный экземпляр конфигурации (создаётся при первом обращении)
_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Получить глобальную конфигурацию"""
    global _config
    if _config is None:
        _config = AppConfig()
        logging.getLogger(__name__).debug("⚙️ Конфигурация загружена: %s", _config.to_dict())
    return _config

def reset_config():
    """Сбросить глобальную конфигурацию (перечитать окружение)"""
    global _config
    _config = None

__all__ = [
    'AppConfig',
    'get_config',
    'reset_config',
    'Environment',
    'LogLevel',
    'RemoteConfig',
    'StorageConfig',
    'BackendConfig',
    'STORAGE_KEY'
]
