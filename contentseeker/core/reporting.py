from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Iterable, Optional

from rich.table import Table

from contentseeker.common.formatting import scale_size
from contentseeker.common.models import (
    HashAlgorithm,
    ReportRow,
    ScanConfiguration,
    ScanStatistics,
    SizeUnit,
)
from contentseeker.core.probe import probe_size
from contentseeker.logging_cfg import get_logger
from contentseeker.verification.hasher import hash_file

logger = get_logger("core.reporting")


def select_algorithm(always_strong: bool, size: int, threshold: int) -> HashAlgorithm:
    if always_strong:
        return HashAlgorithm.SHA256
    return HashAlgorithm.MD5 if size <= threshold else HashAlgorithm.SHA256


def build_row(path: Path, config: ScanConfiguration) -> ReportRow:
    """Monta a linha do relatório para um ficheiro com correspondência.

    O hash é sempre calculado sobre o conteúdo completo, numa leitura nova.
    Se falhar, a linha é emitida na mesma com ``hash=None``.
    """
    size = probe_size(path).size
    algorithm = select_algorithm(config.always_use_strong_hash, size, config.md5_threshold)
    logger.debug("Hashing %s (%d bytes) with %s", path, size, algorithm.value)
    outcome = hash_file(path, algorithm)
    return ReportRow(
        path=str(path),
        scaled_size=scale_size(size, config.size_unit.divisor, config.fraction_digits),
        size=size,
        algorithm=algorithm,
        hash=outcome.digest,
        error=outcome.error,
    )


def build_report(
    paths: Iterable[Path],
    config: ScanConfiguration,
    stats: Optional[ScanStatistics] = None,
) -> list[ReportRow]:
    rows = []
    for path in paths:
        row = build_row(path, config)
        if row.hash is None and stats is not None:
            stats.hash_failures += 1
        rows.append(row)
    return rows


# --- Renderização ---

COLUMNS = ("Path", "{size}", "Algo", "Hash")


def _headers(unit: SizeUnit) -> list[str]:
    return [c.format(size=unit.column_label) for c in COLUMNS]


def render_table(rows: list[ReportRow], unit: SizeUnit) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    path_h, size_h, algo_h, hash_h = _headers(unit)
    table.add_column(path_h, overflow="fold")
    table.add_column(size_h, justify="right", no_wrap=True)
    table.add_column(algo_h, no_wrap=True)
    table.add_column(hash_h, overflow="fold")
    for r in rows:
        table.add_row(r.path, str(r.scaled_size), r.algorithm.value, r.hash or "")
    return table


def render_csv(rows: list[ReportRow], unit: SizeUnit) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(_headers(unit))
    for r in rows:
        writer.writerow([r.path, str(r.scaled_size), r.algorithm.value, r.hash or ""])
    return buf.getvalue()


def render_json(rows: list[ReportRow], unit: SizeUnit) -> str:
    payload = [
        {
            "path": r.path,
            "size": str(r.scaled_size),
            "size_unit": unit.value,
            "size_bytes": r.size,
            "algorithm": r.algorithm.value,
            "hash": r.hash,
            "error": r.error,
        }
        for r in rows
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)
