# services/data_export.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from models.mood import MoodEntry
from utils.datetime_utils import format_local_date, to_iso

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["id", "date", "local_date", "mood", "emoji", "note", "image"]


def _rows(entries: List[MoodEntry], tz_name: str) -> List[dict]:
    return [
        {
            "id": entry.id,
            "date": to_iso(entry.timestamp),
            "local_date": format_local_date(entry.timestamp, tz_name, "%Y-%m-%d %H:%M"),
            "mood": entry.mood.value,
            "emoji": entry.emoji,
            "note": entry.note or "",
            "image": entry.image or "",
        }
        for entry in entries
    ]


def export_entries(entries: List[MoodEntry], format: str = "json",
                   tz_name: str = "UTC") -> Optional[bytes]:
    """Экспорт записей в JSON или CSV; None для неподдерживаемого формата"""
    rows = _rows(entries, tz_name)

    if format.lower() == "json":
        export_data = {
            "export_info": {
                "format": "json",
                "exported_at": datetime.now().isoformat(),
                "total": len(rows)
            },
            "entries": rows
        }
        logger.info(f"📤 JSON экспорт подготовлен ({len(rows)} записей)")
        return json.dumps(export_data, ensure_ascii=False, indent=2).encode('utf-8')

    elif format.lower() == "csv":
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        logger.info(f"📊 CSV экспорт подготовлен ({len(rows)} записей)")
        return df.to_csv(index=False).encode('utf-8')

    logger.warning(f"⚠️ Неподдерживаемый формат экспорта: {format}")
    return None


def export_to_file(entries: List[MoodEntry], export_dir: Path, format: str = "json",
                   tz_name: str = "UTC") -> Optional[Path]:
    data = export_entries(entries, format, tz_name)
    if data is None:
        return None
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"moods_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{format.lower()}"
    filename.write_bytes(data)
    return filename
