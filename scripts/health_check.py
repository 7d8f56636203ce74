#!/usr/bin/env python3
"""
Скрипт проверки состояния дневника настроения
Использование: python scripts/health_check.py [--remote] [--local] [--json]
"""

import sys
import asyncio
import argparse
import json
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, Any

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import AppConfig, get_config
from core.exceptions import LocalStoreError, RemoteStoreError
from database import KeyValueStore, MoodRepository
from services.remote_client import RemoteMoodClient


class HealthChecker:
    def __init__(self, config: AppConfig):
        self.config = config
        self.start_time = time.time()

    async def check_local_store(self) -> Dict[str, Any]:
        """Проверка чтения локального хранилища"""
        store = KeyValueStore(self.config.storage.store_path, backup_dir=self.config.storage.backup_dir)
        repository = MoodRepository(store, self.config.storage.storage_key, self.config.display_timezone)
        try:
            entries = await repository.read_all()
        except LocalStoreError as e:
            return {"status": "unhealthy", "error": str(e)}
        return {
            "status": "healthy",
            "path": str(self.config.storage.store_path),
            "entries": len(entries),
            "unsynced": sum(1 for entry in entries if not entry.synced)
        }

    async def check_remote(self) -> Dict[str, Any]:
        """Проверка доступности сервера записей"""
        if not self.config.remote.enabled:
            return {"status": "healthy", "mode": "local_only"}
        client = RemoteMoodClient(self.config.remote.base_url,
                                  request_timeout=self.config.remote.request_timeout)
        try:
            response = await client.health()
        except RemoteStoreError as e:
            return {"status": "offline", "url": self.config.remote.base_url, "error": str(e)}
        return {"status": "healthy", "url": self.config.remote.base_url, "response": response}

    async def run(self, local: bool = True, remote: bool = True) -> Dict[str, Any]:
        checks = {}
        if local:
            checks["local_store"] = await self.check_local_store()
        if remote:
            checks["remote"] = await self.check_remote()

        statuses = [check["status"] for check in checks.values()]
        overall_status = "healthy" if all(s == "healthy" for s in statuses) else "unhealthy"

        return {
            "overall_status": overall_status,
            "timestamp": datetime.now().isoformat(),
            "execution_time": round(time.time() - self.start_time, 2),
            "checks": checks
        }


def format_human_readable(result: Dict[str, Any]) -> str:
    """Форматирование результата в человекочитаемом виде"""
    overall = result.get("overall_status", "unknown")
    emoji = "✅" if overall == "healthy" else "❌"
    lines = [f"\n{emoji} Общий статус: {overall.upper()}",
             f"🕐 Время проверки: {result.get('timestamp', 'unknown')}"]

    for check_name, check_result in result.get("checks", {}).items():
        status = check_result.get("status", "unknown")
        emoji = "✅" if status == "healthy" else "❌"
        lines.append(f"{emoji} {check_name.upper()}: {status}")
        if "error" in check_result:
            lines.append(f"   ❌ Ошибка: {check_result['error']}")

    return "\n".join(lines) + "\n"


def main():
    """Главная функция"""
    parser = argparse.ArgumentParser(description='Проверка состояния дневника настроения')
    parser.add_argument('--remote', action='store_true', help='Только проверка сервера')
    parser.add_argument('--local', action='store_true', help='Только проверка локального хранилища')
    parser.add_argument('--json', action='store_true', help='Вывод в формате JSON')
    args = parser.parse_args()

    check_all = not (args.remote or args.local)
    checker = HealthChecker(get_config())
    result = asyncio.run(checker.run(local=check_all or args.local, remote=check_all or args.remote))

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(format_human_readable(result))

    sys.exit(0 if result["overall_status"] == "healthy" else 2)


if __name__ == "__main__":
    main()
