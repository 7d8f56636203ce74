from datetime import datetime
from typing import Union

import pytz

UTC = pytz.utc

# Форматы, в которых старые версии приложения сохраняли дату записи
LEGACY_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def now_utc() -> datetime:
    return datetime.now(UTC)


def parse_timestamp(value: Union[str, datetime], tz_name: str = "UTC") -> datetime:
    """
    Разбор момента записи в datetime с часовым поясом.

    Принимает ISO-8601 (в т.ч. с суффиксом Z) и локальные строки вида
    "YYYY-MM-DD HH:MM:SS". Время без пояса считается временем в tz_name.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            dt = None
            for fmt in LEGACY_FORMATS:
                try:
                    dt = datetime.strptime(raw, fmt)
                    break
                except ValueError:
                    continue
            if dt is None:
                raise ValueError(f"Неверный формат даты: {value!r}")
    else:
        raise ValueError(f"Неверный формат даты: {value!r}")

    if dt.tzinfo is None:
        dt = pytz.timezone(tz_name).localize(dt)
    return dt.astimezone(UTC)


def to_iso(dt: datetime) -> str:
    return dt.astimezone(UTC).isoformat()


def format_local_date(dt: datetime, tz_name: str = "UTC", fmt: str = "%d.%m.%Y") -> str:
    return dt.astimezone(pytz.timezone(tz_name)).strftime(fmt)
