#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Journal - Backend
Сервер записей дневника настроения: GET/POST/DELETE /moods
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request

from backend.storage import MoodRecordStore
from config import get_config
from shared.models import HealthCheck, RemoteMoodRecord, SaveResponse

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def get_store(request: Request) -> MoodRecordStore:
    return request.app.state.store


def create_app(data_file: Optional[Path] = None) -> FastAPI:
    """Создание FastAPI приложения сервера записей"""
    if data_file is None:
        data_file = get_config().backend.data_file

    app = FastAPI(
        title="Mood Journal Backend",
        description="Хранилище записей дневника настроения",
        version=VERSION
    )
    app.state.store = MoodRecordStore(data_file)
    logger.info(f"📂 Записи сервера: {data_file}")

    @app.get("/health", response_model=HealthCheck)
    async def health(store: MoodRecordStore = Depends(get_store)):
        """Health check endpoint"""
        return HealthCheck(
            status="healthy",
            service="mood-journal-backend",
            version=VERSION,
            records=store.count()
        )

    @app.get("/moods", response_model=List[RemoteMoodRecord])
    async def list_moods(store: MoodRecordStore = Depends(get_store)):
        """Все записи в порядке сохранения"""
        try:
            return store.list_records()
        except ValueError as e:
            raise HTTPException(status_code=500, detail=f"Ошибка чтения записей: {e}")

    @app.post("/moods", response_model=SaveResponse)
    async def save_moods(records: List[RemoteMoodRecord], store: MoodRecordStore = Depends(get_store)):
        """Принять полный список записей клиента"""
        try:
            store.upsert_many([record.model_dump() for record in records])
        except (OSError, ValueError) as e:
            logger.error(f"❌ Ошибка сохранения записей: {e}")
            return SaveResponse(ok=False)
        return SaveResponse(ok=True)

    @app.delete("/moods")
    async def delete_mood(id: str = Query(..., min_length=1), store: MoodRecordStore = Depends(get_store)):
        """Удалить запись по id"""
        try:
            deleted = store.delete(id)
        except (OSError, ValueError) as e:
            raise HTTPException(status_code=500, detail=f"Ошибка удаления записи: {e}")
        if not deleted:
            raise HTTPException(status_code=404, detail="Запись не найдена")
        return {"ok": True}

    return app
