#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Journal - Exceptions
Исключения хранилищ; сервис дневника переводит их в результаты операций
"""

# ===== EXCEPTIONS =====

class JournalError(Exception):
    """Базовое исключение дневника настроения"""
    pass

class LocalStoreError(JournalError):
    """Локальное хранилище недоступно"""
    pass

class LocalStoreCorruptionError(LocalStoreError):
    """Повреждены данные локального хранилища"""
    pass

class RemoteStoreError(JournalError):
    """Ошибка удалённого хранилища записей"""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status

class RemoteUnavailableError(RemoteStoreError):
    """Сервер недоступен: сеть, таймаут или статус не 2xx"""
    pass

class RemotePayloadError(RemoteStoreError):
    """Сервер вернул некорректный ответ"""
    pass

class RemoteRejectedError(RemoteStoreError):
    """Сервер ответил {ok: false}"""
    pass
