# services/mood_report.py

from typing import Any, Dict, List

from models.enums import MoodCategory
from models.mood import MoodEntry
from utils.datetime_utils import to_iso


def build_report(entries: List[MoodEntry]) -> Dict[str, Any]:
    """Сводка по списку записей: количество и доля каждого настроения"""
    total = len(entries)
    counts = {category.value: 0 for category in MoodCategory}
    for entry in entries:
        counts[entry.mood.value] += 1

    shares = {
        mood: round(count / total * 100, 1) if total else 0.0
        for mood, count in counts.items()
    }

    dominant = None
    if total:
        # при равенстве побеждает категория, которая идёт раньше в MoodCategory
        dominant = max(counts, key=lambda mood: counts[mood])

    timestamps = sorted(entry.timestamp for entry in entries)
    return {
        "total": total,
        "counts": counts,
        "shares": shares,
        "emoji": {category.value: category.emoji for category in MoodCategory},
        "dominant": dominant,
        "with_note": sum(1 for entry in entries if entry.note),
        "with_image": sum(1 for entry in entries if entry.image),
        "first": to_iso(timestamps[0]) if timestamps else None,
        "last": to_iso(timestamps[-1]) if timestamps else None,
    }
