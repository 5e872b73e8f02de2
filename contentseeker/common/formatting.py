from __future__ import annotations

import re
from decimal import ROUND_HALF_EVEN, Decimal

from contentseeker.config import SIZE_SUFFIXES
from .exceptions import ValidationError

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$")


def human_readable_size(num: int) -> str:
    """Convert bytes to a human readable string using binary prefixes.

    Examples:
    - 123 -> '123 B'
    - 2048 -> '2.0 KB'
    - 5_242_880 -> '5.0 MB'
    """
    try:
        n = int(num)
    except Exception:
        return str(num)

    if n < 1024:
        return f"{n} B"

    units = ["KB", "MB", "GB", "TB", "PB"]
    value = n / 1024.0
    for u in units:
        if value < 1024.0:
            # show one decimal for values < 10, else no decimals
            if value < 10:
                return f"{value:.1f} {u}"
            return f"{value:.0f} {u}"
        value /= 1024.0

    return f"{value:.1f} PB"


def parse_size(text: str | int) -> int:
    """Parse a byte count written as an integer or with a binary suffix.

    Accepts '1048576', '100MB', '5k', '2 GB' (case-insensitive, 1K = 1024).
    """
    if isinstance(text, int):
        return text
    m = _SIZE_RE.match(text or "")
    if not m:
        raise ValidationError(f"Tamanho inválido: {text!r}")
    number, suffix = m.groups()
    multiplier = SIZE_SUFFIXES.get(suffix.upper())
    if multiplier is None:
        raise ValidationError(f"Sufixo de tamanho desconhecido: {suffix!r}")
    return int(number) * multiplier


def scale_size(size: int, divisor: int, digits: int) -> Decimal:
    """Return size / divisor rounded half-to-even to `digits` places."""
    quantum = Decimal(1).scaleb(-digits)
    return (Decimal(size) / Decimal(divisor)).quantize(quantum, rounding=ROUND_HALF_EVEN)
