# employee_api/dates.py
"""Normalización de fechas de nacimiento.

Los CSV que llegan de planillas mezclan fechas numéricas (``5/1/1990``) con
meses abreviados y años de dos dígitos (``5-Jan-30``). Cada regla se prueba en
orden y la primera que reconoce el texto gana.
"""
import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from employee_api.core.errors import DateFormatUnrecognized

logger = logging.getLogger("dates")

MONTH_ABBR = {name.lower(): i for i, name in enumerate(calendar.month_abbr) if name}


@dataclass(frozen=True)
class DateRule:
    name: str
    pattern: re.Pattern
    build: Callable[[re.Match, date], date]


def _numeric(m: re.Match, today: date) -> date:
    return date(int(m["year"]), int(m["month"]), int(m["day"]))


def resolve_two_digit_year(yy: int, today: date) -> int:
    """Año en [today.year - 100, today.year - 1] que termina en ``yy``."""
    anchor = today.year - 100
    year = anchor - anchor % 100 + yy
    if year < anchor:
        year += 100
    return year


def _abbreviated(m: re.Match, today: date) -> date:
    month = MONTH_ABBR.get(m["month"].lower())
    if month is None:
        raise ValueError(f"unknown month {m['month']!r}")
    return date(resolve_two_digit_year(int(m["year"]), today), month, int(m["day"]))


def _numeric_rule(month_digits: str, day_digits: str) -> DateRule:
    m_fmt = "M" if month_digits == "1" else "MM"
    d_fmt = "D" if day_digits == "1" else "DD"
    pattern = re.compile(
        rf"(?P<month>\d{{{month_digits}}})/(?P<day>\d{{{day_digits}}})/(?P<year>\d{{4}})",
        re.ASCII,  # solo dígitos 0-9
    )
    return DateRule(f"{m_fmt}/{d_fmt}/YYYY", pattern, _numeric)


DATE_RULES: tuple[DateRule, ...] = (
    _numeric_rule("1", "1"),
    _numeric_rule("2", "1"),
    _numeric_rule("1", "2"),
    _numeric_rule("2", "2"),
    DateRule("D-MMM-YY", re.compile(r"(?P<day>\d)-(?P<month>[A-Za-z]{3})-(?P<year>\d{2})", re.ASCII), _abbreviated),
    DateRule("DD-MMM-YY", re.compile(r"(?P<day>\d{2})-(?P<month>[A-Za-z]{3})-(?P<year>\d{2})", re.ASCII), _abbreviated),
)


def parse_date(text: Optional[str], today: Optional[date] = None) -> date:
    """Devuelve la fecha o lanza DateFormatUnrecognized."""
    if text is None:
        raise DateFormatUnrecognized(text)
    today = today or date.today()
    s = str(text).strip()
    for rule in DATE_RULES:
        m = rule.pattern.fullmatch(s)
        if m is None:
            continue
        try:
            return rule.build(m, today)
        except ValueError:
            # 13/1/2020, 2/30/2020...
            continue
    raise DateFormatUnrecognized(text)


def to_birth_day(text: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """Como parse_date, pero una fecha irreconocible devuelve None."""
    try:
        return parse_date(text, today)
    except DateFormatUnrecognized as e:
        logger.warning("invalid_birthday_format", extra={"value": e.value})
        return None


def normalize_date(text: Optional[str], today: Optional[date] = None) -> Optional[str]:
    """Fecha canónica ``YYYY-MM-DD`` o None. Nunca lanza."""
    parsed = to_birth_day(text, today)
    return parsed.isoformat() if parsed is not None else None
