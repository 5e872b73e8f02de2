"""Utilitários de validação para os parâmetros do scan.

Todas as funções devolvem o valor validado (normalizado quando aplicável)
e levantam ``ValidationError`` caso contrário.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, TypeVar

from .exceptions import ValidationError


T = TypeVar('T')


# ============================================================================
# PATH VALIDATION
# ============================================================================

def validate_directory(path: Path | str, name: str = "path") -> Path:
    """Valida que um caminho não está vazio e aponta para um diretório.

    Args:
        path: Caminho a validar
        name: Nome do parâmetro (para mensagens de erro)

    Returns:
        Path validado (não resolvido, para preservar caminhos relativos)

    Raises:
        ValidationError: Se vazio, inexistente ou não for diretório
    """
    if not path or not str(path).strip():
        raise ValidationError(f"{name} não pode estar vazio")

    p = Path(path)

    if not p.exists():
        raise ValidationError(f"{name} não existe: {p}", {"path": str(p)})

    if not p.is_dir():
        raise ValidationError(f"{name} deve ser um diretório: {p}", {"path": str(p)})

    return p


# ============================================================================
# NUMERIC VALIDATION
# ============================================================================

def validate_non_negative(value: int, name: str = "value") -> int:
    """Valida que um número é não-negativo (>= 0)."""
    if value < 0:
        raise ValidationError(f"{name} não pode ser negativo, obtido: {value}")
    return value


def validate_choice(value: T, choices: Iterable[T], name: str = "value") -> T:
    """Valida que um valor pertence a um conjunto fechado de opções."""
    allowed = list(choices)
    if value not in allowed:
        raise ValidationError(
            f"{name} deve ser um de {', '.join(str(c) for c in allowed)}, obtido: {value}"
        )
    return value


# ============================================================================
# STRING VALIDATION
# ============================================================================

def validate_not_empty(value: str, name: str = "value") -> str:
    """Valida que uma string não está vazia.

    Uma string só com espaços é aceite: pode ser uma expressão de
    pesquisa legítima.
    """
    if not value:
        raise ValidationError(f"{name} não pode estar vazio")
    return value
