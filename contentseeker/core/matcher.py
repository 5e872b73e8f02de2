"""Comparação linha-a-linha entre o conteúdo de um ficheiro e a expressão de pesquisa.

Os modos ``partialmatch*`` tratam a expressão como regex (``re.search``).
No modo ``partialmatchignorecase`` o texto do padrão é convertido para
minúsculas antes de compilar, tal como a linha; não se usa
``re.IGNORECASE``, pelo que classes como ``\\W`` ou ``[A-Z]`` mudam de
significado nesse modo.
"""

from __future__ import annotations

import functools
import re
from typing import Iterable, Optional, Pattern

from contentseeker.common.exceptions import InvalidPatternError
from contentseeker.common.models import CompareMethod, MatchOutcome


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


@functools.lru_cache(maxsize=64)
def _compile(pattern: str, method: CompareMethod) -> Optional[Pattern[str]]:
    if not method.is_regex:
        return None
    text = pattern.lower() if method.folds_case else pattern
    try:
        return re.compile(text)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


class ContentMatcher:
    """Avalia linhas contra uma expressão segundo um dos quatro métodos."""

    def __init__(self, pattern: str, method: CompareMethod | str):
        self.pattern = pattern
        self.method = CompareMethod.parse(method)
        self._folded = pattern.lower()
        # Falha já aqui (antes do scan) se a regex for inválida
        self._regex = _compile(pattern, self.method)

    def matches(self, line: Optional[str]) -> bool:
        if line is None:
            return False
        if self.method is CompareMethod.EQUAL:
            return line == self.pattern
        if self.method is CompareMethod.EQUAL_IGNORE_CASE:
            return line.lower() == self._folded
        if self.method is CompareMethod.PARTIAL_MATCH:
            return self._regex.search(line) is not None
        return self._regex.search(line.lower()) is not None

    def first_match(self, lines: Iterable[Optional[str]]) -> MatchOutcome:
        """Percorre `lines` e pára na primeira linha que corresponde.

        Os terminadores de linha são removidos antes da comparação. O
        iterável não é consumido para além da linha encontrada.
        """
        count = 0
        for line in lines:
            count += 1
            if line is None:
                continue
            if self.matches(_strip_terminator(line)):
                return MatchOutcome(matched=True, line_number=count, lines_read=count)
        return MatchOutcome(matched=False, lines_read=count)


def matches(line: Optional[str], pattern: str, method: CompareMethod | str) -> bool:
    return ContentMatcher(pattern, method).matches(line)
