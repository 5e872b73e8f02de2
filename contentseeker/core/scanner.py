from __future__ import annotations

import locale
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from contentseeker.common.exceptions import EnumerationError, ValidationError
from contentseeker.common.models import MatchOutcome, ScanConfiguration, ScanStatistics
from contentseeker.common.types import ProgressCallback
from contentseeker.core.matcher import ContentMatcher
from contentseeker.core.probe import probe_size
from contentseeker.logging_cfg import get_logger

logger = get_logger("core.scanner")


def enumerate_files(root: Path) -> list[Path]:
    """Lista recursivamente todos os ficheiros regulares sob `root`, pela ordem de descoberta.

    Raises:
        EnumerationError: Se a pasta não existir, não for acessível ou não contiver ficheiros
    """
    root = Path(root)
    if not root.is_dir():
        raise EnumerationError(str(root), f"Pasta inexistente ou inacessível: {root}")
    try:
        files = [p for p in root.rglob("*") if p.is_file()]
    except OSError as e:
        raise EnumerationError(str(root), f"Erro ao percorrer {root}: {e}") from e
    if not files:
        raise EnumerationError(str(root), f"Nenhum ficheiro encontrado em {root}")
    return files


class FileScanner:
    """Percorre a árvore e devolve os ficheiros cujo conteúdo corresponde à pesquisa.

    ``progress_cb`` recebe ``(percent, current_path)``: percentagem 0-100 e o
    caminho prestes a ser processado (vazio na chamada final com 100).
    """

    def __init__(
        self,
        config: ScanConfiguration,
        matcher: Optional[ContentMatcher] = None,
        progress_cb: Optional[ProgressCallback] = None,
        stats: Optional[ScanStatistics] = None,
    ):
        self.config = config
        self.matcher = matcher or ContentMatcher(config.search_expression, config.compare_method)
        self.progress_cb = progress_cb
        self.stats = stats if stats is not None else ScanStatistics()
        self.logger = logger

    def scan(self) -> list[Path]:
        """Workflow principal: enumerar, filtrar por tamanho e procurar a primeira linha que corresponde.

        Returns:
            Ficheiros com correspondência, pela ordem de descoberta

        Raises:
            EnumerationError: Se a pasta raiz não produzir ficheiros
        """
        files = enumerate_files(self.config.root_folder)
        total = len(files)
        self.stats.discovered = total
        self.logger.info("Scanning %d files under %s", total, self.config.root_folder)

        matched: list[Path] = []
        for i, path in enumerate(files):
            self._report_progress(i * 100.0 / total, str(path))

            if self._exceeds_ceiling(path):
                self.stats.skipped_oversize += 1
                continue

            outcome = self.match_file(path)
            if outcome.error:
                self.stats.unreadable += 1
            if outcome.matched:
                self.logger.debug("Match in %s at line %d", path, outcome.line_number)
                matched.append(path)

        self.stats.matched = len(matched)
        self._report_progress(100.0, "")
        return matched

    def _exceeds_ceiling(self, path: Path) -> bool:
        size = probe_size(path).size
        if size > self.config.max_file_size:
            self.logger.debug("Skipping %s (%d bytes > %d)", path, size, self.config.max_file_size)
            return True
        return False

    def match_file(self, path: Path) -> MatchOutcome:
        """Lê o ficheiro linha a linha e pára na primeira linha que corresponde.

        Cada linha é descodificada isoladamente; uma linha que não descodifica
        é ignorada (conta em ``lines_read``) sem afetar as restantes. Só um
        erro de abertura ou leitura do ficheiro resulta em "sem correspondência".
        """
        encoding = self.config.encoding or locale.getpreferredencoding(False)
        undecodable: list[int] = []
        try:
            with open(path, "rb") as f:
                outcome = self.matcher.first_match(self._decoded_lines(f, encoding, undecodable))
        except OSError as e:
            self.logger.debug("Unreadable content in %s: %s", path, e)
            return MatchOutcome(matched=False, error=str(e))
        except LookupError as e:
            raise ValidationError(f"Codificação desconhecida: {encoding}") from e

        if undecodable:
            self.logger.debug("Skipped %d undecodable line(s) in %s", len(undecodable), path)
            if not outcome.matched:
                return replace(
                    outcome, error=f"{len(undecodable)} linha(s) não descodificáveis como {encoding}"
                )
        return outcome

    @staticmethod
    def _decoded_lines(
        stream: BinaryIO, encoding: str, undecodable: list[int]
    ) -> Iterator[Optional[str]]:
        # \n, \r\n e \r terminam uma linha; a linha fica None se não descodificar
        number = 0
        for raw in stream:
            for piece in raw.splitlines(keepends=True):
                number += 1
                try:
                    yield piece.decode(encoding)
                except UnicodeDecodeError:
                    undecodable.append(number)
                    yield None

    def _report_progress(self, percent: float, current: str) -> None:
        if self.progress_cb:
            self.progress_cb(percent, current)
