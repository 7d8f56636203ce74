# services/remote_client.py

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from core.exceptions import (
    RemotePayloadError,
    RemoteRejectedError,
    RemoteUnavailableError,
)
from models.mood import MoodEntry
from shared.models import RemoteMoodRecord, SaveResponse, parse_remote_list
from utils.decorators import retry_on_exception

logger = logging.getLogger(__name__)


class RemoteMoodClient:
    """
    HTTP-клиент удалённого хранилища записей.

    GET /moods            -> упорядоченный массив записей
    POST /moods           -> {"ok": bool}, тело - полный список записей
    DELETE /moods?id=<id> -> только статус
    """

    def __init__(self, base_url: str, request_timeout: Optional[float] = 15.0,
                 retries: int = 1, retry_delay: float = 0.5):
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.retries = retries
        self._request = retry_on_exception(
            retries=retries,
            delay=retry_delay,
            exceptions=(RemoteUnavailableError,)
        )(self._request_once)

    @property
    def moods_url(self) -> str:
        return f"{self.base_url}/moods"

    async def fetch_all(self) -> List[RemoteMoodRecord]:
        status, payload = await self._request("GET", self.moods_url)
        try:
            records = parse_remote_list(payload)
        except ValueError as e:
            raise RemotePayloadError(f"Некорректный список записей: {e}", status) from e
        logger.debug(f"📥 Получено записей с сервера: {len(records)}")
        return records

    async def submit_all(self, entries: List[MoodEntry]) -> None:
        body = [entry.to_remote_dict() for entry in entries]
        status, payload = await self._request("POST", self.moods_url, json_body=body)
        try:
            response = SaveResponse.model_validate(payload)
        except ValueError as e:
            raise RemotePayloadError(f"Некорректный ответ на сохранение: {e}", status) from e
        if not response.ok:
            raise RemoteRejectedError("Сервер отказался сохранить записи", status)
        logger.debug(f"📤 Отправлено записей на сервер: {len(body)}")

    async def delete(self, entry_id: str) -> None:
        await self._request("DELETE", self.moods_url, params={"id": str(entry_id)}, expect_body=False)
        logger.debug(f"🗑️ Запись {entry_id} удалена на сервере")

    async def health(self) -> Dict[str, Any]:
        _, payload = await self._request("GET", f"{self.base_url}/health")
        return payload if isinstance(payload, dict) else {"status": "unknown"}

    async def _request_once(self, method: str, url: str, json_body: Any = None,
                            params: Optional[Dict[str, str]] = None,
                            expect_body: bool = True):
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, json=json_body, params=params) as response:
                    if not 200 <= response.status < 300:
                        raise RemoteUnavailableError(
                            f"{method} {url}: HTTP {response.status}", response.status
                        )
                    if not expect_body:
                        return response.status, None
                    try:
                        payload = await response.json(content_type=None)
                    except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
                        raise RemotePayloadError(
                            f"{method} {url}: ответ не JSON", response.status
                        ) from e
                    return response.status, payload
        except asyncio.TimeoutError as e:
            raise RemoteUnavailableError(f"{method} {url}: превышено время ожидания") from e
        except aiohttp.ClientError as e:
            raise RemoteUnavailableError(f"{method} {url}: {e}") from e
