"""
Tipos partilhados e type aliases para o ContentSeeker.
"""

from __future__ import annotations

from typing import Callable


# (percentagem 0-100, caminho atual)
ProgressCallback = Callable[[float, str], None]
