import datetime
import math
import re
from typing import Any

from openpyxl.utils.datetime import to_excel

from modules.models import ZERO_TIME

MINUTES_PER_DAY = 24 * 60

HHMM_RE = re.compile(r"^\d{1,2}:\d{2}$")
DECIMAL_HOURS_RE = re.compile(r"^\d+\.\d+$")
WHOLE_HOURS_RE = re.compile(r"^\d+$")


def _format_minutes(total_minutes: int) -> str:
    return f"{total_minutes // 60}:{total_minutes % 60:02d}"


def _from_day_fraction(value: float) -> str:
    """Fracción de día estilo Excel -> H:MM"""
    if not math.isfinite(value) or value < 0:
        return ZERO_TIME
    return _format_minutes(int(round(value * MINUTES_PER_DAY)))


def format_time(value: Any) -> str:
    """Normaliza el valor de una celda de horas al formato canónico H:MM.

    Acepta números (fracción de día de Excel), celdas de hora que el lector
    devuelve como time/timedelta/datetime y texto en los formatos "H:MM",
    "H.hh" (horas decimales) o "H". Cualquier otra cosa vale "0:00".
    """
    if value is None or isinstance(value, bool):
        return ZERO_TIME

    if isinstance(value, (datetime.datetime, datetime.time, datetime.timedelta)):
        try:
            return _from_day_fraction(float(to_excel(value)))
        except (TypeError, ValueError, OverflowError):
            return ZERO_TIME

    if isinstance(value, (int, float)):
        return _from_day_fraction(float(value))

    text = str(value).strip()
    if not text:
        return ZERO_TIME
    if HHMM_RE.match(text):
        return text
    if DECIMAL_HOURS_RE.match(text):
        whole, fraction = text.split(".")
        hours = int(whole)
        minutes = int(round(float(f"0.{fraction}") * 60))
        if minutes == 60:
            hours, minutes = hours + 1, 0
        return f"{hours}:{minutes:02d}"
    if WHOLE_HOURS_RE.match(text):
        return f"{text}:00"
    return ZERO_TIME


def _component(part: str) -> float:
    try:
        number = float(part.strip())
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_hours(value: Any) -> float:
    """H:MM -> horas decimales; componentes vacíos o inválidos cuentan como 0"""
    if value is None:
        return 0.0
    parts = str(value).split(":")
    hours = _component(parts[0])
    minutes = _component(parts[1]) if len(parts) > 1 else 0.0
    return hours + minutes / 60
