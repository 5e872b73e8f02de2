"""Hierarquia de exceções customizadas do ContentSeeker.

Este módulo centraliza todas as exceções específicas do projeto. Apenas
erros de configuração e de enumeração são fatais; os erros por ficheiro
(``FileOperationError`` e derivados) são recuperados localmente pelo scan.
"""

from __future__ import annotations

from typing import Any, Optional


# ============================================================================
# BASE EXCEPTIONS
# ============================================================================

class ContentSeekerError(Exception):
    """Exceção base para todos os erros do ContentSeeker."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# ============================================================================
# CONFIGURATION ERRORS (fatais)
# ============================================================================

class ConfigurationError(ContentSeekerError):
    """Parâmetro obrigatório vazio ou valor de configuração inválido."""
    pass


class ValidationError(ConfigurationError):
    """Erro de validação de dados de entrada."""
    pass


class InvalidPatternError(ConfigurationError):
    """Expressão de pesquisa que não compila como regex."""

    def __init__(self, pattern: str, reason: str = ""):
        msg = f"Expressão de pesquisa inválida: {pattern!r}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, {"pattern": pattern})
        self.pattern = pattern


# ============================================================================
# ENUMERATION ERRORS (fatais)
# ============================================================================

class EnumerationError(ContentSeekerError):
    """Pasta inacessível ou sem ficheiros para analisar."""

    def __init__(self, path: str, reason: str):
        super().__init__(reason, {"path": path})
        self.path = path


# ============================================================================
# PER-FILE ERRORS (recuperáveis)
# ============================================================================

class FileOperationError(ContentSeekerError):
    """Erro base para operações com ficheiros."""

    def __init__(self, path: str, message: str, details: Optional[dict] = None):
        details = details or {}
        details["path"] = path
        super().__init__(message, details)
        self.path = path


class HashError(FileOperationError):
    """Falha ao calcular o hash de uma fonte de bytes."""

    def __init__(self, path: str, algorithm: str, reason: str = ""):
        msg = f"Falha ao calcular {algorithm} de {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(path, msg, {"algorithm": algorithm})
        self.algorithm = algorithm
        self.reason = reason


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_exception_chain(exc: BaseException, include_traceback: bool = False) -> str:
    """Formata uma exceção com toda a cadeia de causas.

    Args:
        exc: Exceção a formatar
        include_traceback: Se deve incluir o traceback completo

    Returns:
        String formatada com a exceção e suas causas
    """
    import traceback

    if include_traceback:
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    messages = []
    current: Optional[BaseException] = exc
    while current is not None:
        if isinstance(current, ContentSeekerError):
            messages.append(str(current))
        else:
            messages.append(f"{type(current).__name__}: {current}")
        current = getattr(current, "__cause__", None)

    return " -> ".join(messages)
