from __future__ import annotations

import os
from pathlib import Path

from contentseeker.common.models import SizeProbe
from contentseeker.logging_cfg import get_logger

logger = get_logger("core.probe")


def probe_size(path: Path | str) -> SizeProbe:
    """Lê o tamanho em bytes; ficheiros que desapareceram ou sem permissão contam como 0."""
    try:
        return SizeProbe(size=os.stat(path).st_size)
    except OSError as e:
        logger.debug("Size probe failed for %s: %s", path, e)
        return SizeProbe(size=0, error=e.strerror or str(e))


def size_of(path: Path | str) -> int:
    return probe_size(path).size
