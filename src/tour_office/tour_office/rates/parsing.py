from __future__ import annotations

import math
import re
from typing import Tuple

_BLOCK_RE = re.compile(r"<Currency\b[^>]*\bKod\s*=\s*['\"](?P<code>[A-Z]{3})['\"][^>]*>(?P<body>.*?)</Currency>", re.S)


def parse_decimal_smart(text: object) -> float:
    """Parse a number written with either decimal convention.

    When both ``,`` and ``.`` appear, whichever comes last is the decimal
    separator and the other one groups thousands. A lone comma is a decimal
    comma. Empty or unparseable input gives 0.

    >>> parse_decimal_smart("1.234,56"), parse_decimal_smart("1,234.56"), parse_decimal_smart("12,50")
    (1234.56, 1234.56, 12.5)
    """

    s = re.sub(r"\s", "", str(text or "").replace("\u00a0", ""))
    if not s:
        return 0.0

    if "," in s and "." in s:
        if s.rfind(",") > s.rfind("."):
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif "," in s:
        s = s.replace(",", ".", 1)

    try:
        value = float(s)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _tag(body: str, name: str) -> str:
    m = re.search(rf"<{name}>(.*?)</{name}>", body, re.S)
    return m.group(1).strip() if m else ""


def _per_unit_selling(body: str) -> float:
    try:
        unit = max(1, int(_tag(body, "Unit") or "1"))
    except ValueError:
        unit = 1
    raw = _tag(body, "ForexSelling") or _tag(body, "BanknoteSelling")
    rate = parse_decimal_smart(raw)
    if rate <= 0:
        return 0.0
    return rate / unit


def parse_tcmb_xml(text: str) -> Tuple[float, float]:
    """Return ``(usd_try, sar_try)`` per one unit from a TCMB ``today.xml``.

    Missing or malformed currency blocks yield 0 for that currency.
    """

    found = {}
    for m in _BLOCK_RE.finditer(text or ""):
        found.setdefault(m.group("code"), m.group("body"))

    usd_try = _per_unit_selling(found["USD"]) if "USD" in found else 0.0
    sar_try = _per_unit_selling(found["SAR"]) if "SAR" in found else 0.0
    return usd_try, sar_try


def positive_or_zero(value: object) -> float:
    """Coerce a JSON rate value; anything non-positive or non-numeric is 0."""

    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number <= 0:
        return 0.0
    return number
