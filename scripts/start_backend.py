#!/usr/bin/env python3
"""
Запуск сервера записей дневника настроения
Использование: python scripts/start_backend.py
"""

import sys
from pathlib import Path

import uvicorn

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.app import create_app
from config import get_config
from utils.logger import setup_logger


def main():
    config = get_config()
    config.ensure_directories()
    setup_logger(config)

    print("🚀 Запуск сервера записей дневника настроения")
    print(f"🌐 Порт: {config.backend.port}")
    print(f"🏠 Хост: {config.backend.host}")
    print(f"📂 Данные: {config.backend.data_file}")

    uvicorn.run(
        create_app(config.backend.data_file),
        host=config.backend.host,
        port=config.backend.port,
        log_level="info" if config.backend.debug_mode else "warning"
    )


if __name__ == "__main__":
    main()
