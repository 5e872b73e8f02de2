from __future__ import annotations

import time
from typing import Optional

from contentseeker.common.formatting import human_readable_size
from contentseeker.common.models import ScanConfiguration, ScanReport, ScanStatistics
from contentseeker.common.types import ProgressCallback
from contentseeker.core.matcher import ContentMatcher
from contentseeker.core.reporting import build_report
from contentseeker.core.scanner import FileScanner
from contentseeker.logging_cfg import get_logger, log_call, set_correlation_id

logger = get_logger("core.runner")


@log_call()
def run_scan(config: ScanConfiguration, progress_cb: Optional[ProgressCallback] = None) -> ScanReport:
    """Executa um scan completo: procura de conteúdo seguida do cálculo de hashes.

    Raises:
        InvalidPatternError: Se a expressão não for uma regex válida
        EnumerationError: Se a pasta não produzir ficheiros
    """
    set_correlation_id()
    start = time.perf_counter()

    # Compilar antes de enumerar para falhar cedo
    matcher = ContentMatcher(config.search_expression, config.compare_method)
    stats = ScanStatistics()
    scanner = FileScanner(config, matcher=matcher, progress_cb=progress_cb, stats=stats)

    matched = scanner.scan()
    rows = build_report(matched, config, stats)

    stats.duration_seconds = round(time.perf_counter() - start, 3)
    logger.info(
        "Scan finished: %d discovered, %d oversize (> %s), %d unreadable, %d matched, %d hash failures in %.3fs",
        stats.discovered,
        stats.skipped_oversize,
        human_readable_size(config.max_file_size),
        stats.unreadable,
        stats.matched,
        stats.hash_failures,
        stats.duration_seconds,
    )
    return ScanReport(rows=rows, stats=stats)
