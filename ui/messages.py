from typing import Dict, List

from models.mood import MoodEntry
from utils.datetime_utils import format_local_date

# Тексты уведомлений для слоя интерфейса

MOOD_REQUIRED = "Пожалуйста, выберите настроение"
MOOD_SAVED = "Настроение сохранено!"
MOOD_SAVED_LOCALLY = "Запись сохранена на устройстве, но не отправлена на сервер"
MOOD_NOT_SAVED = "Не удалось сохранить запись"
RECORD_DELETED = "Запись удалена!"
RECORD_DELETED_LOCALLY = "Запись удалена на устройстве, но сервер не подтвердил удаление"
RECORD_NOT_DELETED = "Не удалось удалить запись"
LOAD_FAILED = "Не удалось загрузить записи"
LOAD_LOCAL_FAILED = "Локальные данные недоступны, фото не показаны"
HISTORY_CLEARED = "История очищена"
CLEAR_FAILED = "Не удалось очистить историю"
CLEAR_UNAVAILABLE = "Очистка всей истории недоступна при работе с сервером"
DELETE_CONFIRM = "Удалить запись? Это действие нельзя отменить."
NO_MOODS = "Записей пока нет."


def with_reason(message: str, reason) -> str:
    return f"{message}: {reason}" if reason else message


def entry_message(entry: MoodEntry, tz_name: str = "UTC") -> str:
    lines = [f"{format_local_date(entry.timestamp, tz_name)}  {entry.emoji}  [{entry.id}]"]
    if entry.note:
        lines.append(f"  {entry.note}")
    if entry.image:
        lines.append(f"  📷 {entry.image}")
    return "\n".join(lines)


def history_message(entries: List[MoodEntry], tz_name: str = "UTC") -> str:
    if not entries:
        return NO_MOODS
    return "\n".join(entry_message(entry, tz_name) for entry in entries)


def report_message(report: Dict) -> str:
    # report - словарь из services.mood_report.build_report
    if not report.get("total"):
        return NO_MOODS
    counts = report["counts"]
    lines = [f"📊 Отчёт о настроении: {report['total']} записей"]
    for mood, count in counts.items():
        lines.append(f"  {report['emoji'][mood]} {mood}: {count} ({report['shares'][mood]}%)")
    lines.append(f"С заметкой: {report['with_note']}, с фото: {report['with_image']}")
    if report.get("dominant"):
        lines.append(f"Чаще всего: {report['emoji'][report['dominant']]} {report['dominant']}")
    return "\n".join(lines)
