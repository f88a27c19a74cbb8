"""Parse first-response SLA durations into signed fractional hours."""

import re

_DECIMAL = re.compile(r"[+-]?[0-9]+(?:[.,][0-9]+)?")
_CLOCK = re.compile(r"([+-])?([0-9]+)\s*:\s*([0-9]{1,2})")


def parse_duration(value: object) -> float | None:
    """Convert ``1.25``, ``-2,5`` or ``-1:30`` style values to hours.

    Blank and unparseable values both return None, which downstream means
    "no data" and is treated as SLA-compliant.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    if _DECIMAL.fullmatch(text):
        return float(text.replace(",", "."))

    match = _CLOCK.fullmatch(text)
    if match is None:
        return None

    sign, hours, minutes = match.groups()
    magnitude = int(hours) + int(minutes) / 60
    return -magnitude if sign == "-" else magnitude
