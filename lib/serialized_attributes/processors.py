# serialized_attributes/processors.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""defines generic type conversion functions, as used by the bind and
result processors of :mod:`serialized_attributes.types`.

They all share one common characteristic: they are total.  Input that
can't be parsed degrades to the zero value of the target type rather
than raising.  ``None`` and blank strings are handled by the caller
(see :func:`.is_blank`) before these functions are reached.

"""

from __future__ import annotations

import datetime
from decimal import Decimal
import math
import re
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional

NUMERIC_RE = re.compile(
    r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)
INTEGER_RE = re.compile(r"[+-]?\d+$")

# XML schema dateTime, with the time and zone portions optional
TIMESTAMP_RE = re.compile(
    r"\s*(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[Tt ](\d{1,2}):(\d{2})(?::(\d{2})(?:[.,](\d+))?)?)?"
    r"\s*([Zz]|[+-]\d{2}(?::?\d{2})?)?\s*$"
)

FALSE_STRINGS = frozenset(["", "0", "f", "false", "n", "no", "off"])


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _leading_number(value: str) -> Optional[str]:
    m = NUMERIC_RE.match(value)
    if m is None:
        return None
    else:
        return m.group(1)


def to_string(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except (ValueError, OverflowError):
        # int larger than the interpreter's digit limit
        return None


def to_integer(value: Any) -> int:
    if isinstance(value, int):
        # includes bool
        return int(value)
    elif isinstance(value, (float, Decimal)):
        number = value
    elif isinstance(value, str):
        text = _leading_number(value)
        if text is None:
            return 0
        elif INTEGER_RE.match(text):
            try:
                return int(text)
            except ValueError:
                # exceeds the integer string conversion limit
                return 0
        number = float(text)
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0

    try:
        return int(number)
    except (ValueError, OverflowError):
        # nan, inf, signaling Decimal
        return 0


def to_float(value: Any) -> float:
    if isinstance(value, str):
        text = _leading_number(value)
        if text is None:
            return 0.0
        number = float(text)
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    elif isinstance(value, (int, float, Decimal)):
        return bool(value)
    else:
        return True


def _parse_offset(zone: Optional[str]) -> datetime.tzinfo:
    if zone is None or zone in ("Z", "z"):
        return datetime.timezone.utc
    sign = -1 if zone[0] == "-" else 1
    digits = zone[1:].replace(":", "")
    hours = int(digits[0:2])
    minutes = int(digits[2:4] or 0)
    return datetime.timezone(
        sign * datetime.timedelta(hours=hours, minutes=minutes)
    )


def _as_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    else:
        return value.astimezone(datetime.timezone.utc)


def str_to_timestamp(value: str) -> Optional[datetime.datetime]:
    """Parse an XML schema dateTime string into an aware UTC datetime.

    Returns ``None`` if the string isn't a timestamp or names an
    impossible date.

    """
    m = TIMESTAMP_RE.match(value)
    if m is None:
        return None

    year, month, day, hour, minute, second, fraction, zone = m.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        result = datetime.datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            microsecond,
            tzinfo=_parse_offset(zone),
        )
        return result.astimezone(datetime.timezone.utc)
    except (ValueError, OverflowError):
        return None


def format_timestamp(value: datetime.datetime) -> str:
    """Render a datetime as the canonical stored form,
    ``YYYY-MM-DDTHH:MM:SS[.ffffff]Z`` in UTC."""

    value = _as_utc(value)
    text = "%04d-%02d-%02dT%02d:%02d:%02d" % (
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
    )
    if value.microsecond:
        text += ".%06d" % value.microsecond
    return text + "Z"


def to_datetime(value: Any) -> Optional[datetime.datetime]:
    if isinstance(value, datetime.datetime):
        try:
            return _as_utc(value)
        except (ValueError, OverflowError):
            # the UTC instant falls outside datetime.min / datetime.max
            return None
    elif isinstance(value, datetime.date):
        return datetime.datetime(
            value.year, value.month, value.day, tzinfo=datetime.timezone.utc
        )
    elif isinstance(value, str):
        return str_to_timestamp(value)
    else:
        return None


def to_timestamp(value: Any) -> Optional[str]:
    dt = to_datetime(value)
    if dt is None:
        return None
    else:
        return format_timestamp(dt)


COERCIONS: Dict[str, Callable[[Any], Any]] = {
    "string": to_string,
    "integer": to_integer,
    "float": to_float,
    "boolean": to_boolean,
    "timestamp": to_timestamp,
}
