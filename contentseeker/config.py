"""Configuration defaults and constants for the ContentSeeker package."""
from __future__ import annotations

from typing import Dict

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

# Files strictly larger than this are never opened
DEFAULT_MAX_FILE_SIZE = 100 * MIB

# Matched files up to this size are hashed with MD5, larger ones with SHA256
DEFAULT_MD5_THRESHOLD = 50 * MIB

DEFAULT_FRACTION_DIGITS = 2
FRACTION_DIGITS_CHOICES = (2, 3, 4)

DEFAULT_COMPARE_METHOD = "partialmatchignorecase"
DEFAULT_SIZE_UNIT = "KB"

# Printed instead of the report when nothing matched
NO_MATCHES_MARKER = "---"

HASH_BLOCK_SIZE = 65536

LOG_FORMAT_ENV = "CONTENTSEEKER_LOG_FORMAT"

# Suffix -> multiplier accepted by size literals ("100MB", "5k", ...)
SIZE_SUFFIXES: Dict[str, int] = {
    "": 1,
    "B": 1,
    "K": KIB,
    "KB": KIB,
    "M": MIB,
    "MB": MIB,
    "G": GIB,
    "GB": GIB,
}
