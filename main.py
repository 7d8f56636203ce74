#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Journal - командная строка
Запись настроения, история, удаление, отчёт и экспорт

Использование:
    python main.py add --mood 😊 --note "отличный день" --image file://a.jpg
    python main.py list
    python main.py delete <id>
"""

import argparse
import asyncio
import logging
import sys
from typing import Callable, List, Optional

from config import AppConfig, get_config
from models.results import OperationResult
from services import MoodJournalService, create_journal_service
from services.data_export import export_to_file
from services.mood_report import build_report
from ui import messages
from utils.logger import setup_logger

logger = logging.getLogger(__name__)


def ask_confirmation(prompt: str) -> bool:
    """Подтверждение необратимого действия"""
    try:
        answer = input(f"{prompt} [y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes", "д", "да")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Дневник настроения")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Записать настроение")
    add.add_argument("--mood", default="", help="happy | neutral | sad или 😊 😐 😢")
    add.add_argument("--note", default=None, help="Заметка")
    add.add_argument("--image", default=None, help="Ссылка на фото (URI)")

    subparsers.add_parser("list", help="История записей")

    show = subparsers.add_parser("show", help="Показать запись")
    show.add_argument("id")

    delete = subparsers.add_parser("delete", help="Удалить запись")
    delete.add_argument("id")
    delete.add_argument("--yes", action="store_true", help="Не спрашивать подтверждение")

    clear = subparsers.add_parser("clear", help="Очистить всю историю (режим без сервера)")
    clear.add_argument("--yes", action="store_true", help="Не спрашивать подтверждение")

    subparsers.add_parser("report", help="Отчёт о настроении")

    export = subparsers.add_parser("export", help="Экспорт записей")
    export.add_argument("--format", choices=["json", "csv"], default="json")

    subparsers.add_parser("prune", help="Удалить локальные записи, которых нет на сервере")
    return parser


def _print_result(result: OperationResult) -> int:
    if result.message:
        stream = sys.stdout if result.ok else sys.stderr
        print(result.message, file=stream)
    return 0 if result.ok else 1


async def run_command(args: argparse.Namespace, service: MoodJournalService, config: AppConfig,
                      confirm: Callable[[str], bool] = ask_confirmation) -> int:
    tz_name = config.display_timezone

    if args.command == "add":
        return _print_result(await service.save(args.mood, note=args.note, image=args.image))

    if args.command in ("delete", "clear"):
        if not args.yes and not confirm(messages.DELETE_CONFIRM):
            print("Отменено")
            return 0
        if args.command == "delete":
            return _print_result(await service.remove(args.id))
        return _print_result(await service.clear_all())

    if args.command == "prune":
        result = await service.prune_orphans()
        if result.ok:
            print(f"🧹 Удалено записей: {result.value}")
            return 0
        return _print_result(result)

    # Остальные команды работают со свежим списком
    result = await service.load()
    if not result.ok:
        _print_result(result)
        return 1
    if result.message:
        print(result.message, file=sys.stderr)
    entries = result.value

    if args.command == "list":
        print(messages.history_message(entries, tz_name))
    elif args.command == "show":
        entry = service.get_entry(args.id)
        if entry is None:
            print(f"Запись {args.id} не найдена", file=sys.stderr)
            return 1
        print(messages.entry_message(entry, tz_name))
    elif args.command == "report":
        print(messages.report_message(build_report(entries)))
    elif args.command == "export":
        path = export_to_file(entries, config.export_dir, args.format, tz_name)
        print(f"📤 Экспорт сохранён: {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    config.ensure_directories()
    setup_logger(config)

    service = create_journal_service(config)
    return asyncio.run(run_command(args, service, config))


if __name__ == "__main__":
    sys.exit(main())
