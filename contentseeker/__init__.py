"""ContentSeeker package root.

Expose the scan entry point and the configuration model at package level.
Keep this file small and explicit to make `import contentseeker` lightweight.
"""

from .common.models import CompareMethod, ScanConfiguration, SizeUnit
from .core.runner import run_scan

__version__ = "1.0.0"

__all__ = [
    "CompareMethod",
    "ScanConfiguration",
    "SizeUnit",
    "run_scan",
]
