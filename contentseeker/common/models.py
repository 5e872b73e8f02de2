from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

from contentseeker import config
from .exceptions import ValidationError
from .validation import (
    validate_choice,
    validate_directory,
    validate_non_negative,
    validate_not_empty,
)


class CompareMethod(str, Enum):
    EQUAL = "equal"
    EQUAL_IGNORE_CASE = "equalignorecase"
    PARTIAL_MATCH = "partialmatch"
    PARTIAL_MATCH_IGNORE_CASE = "partialmatchignorecase"

    @classmethod
    def parse(cls, value: "str | CompareMethod") -> "CompareMethod":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    @property
    def is_regex(self) -> bool:
        return self in (CompareMethod.PARTIAL_MATCH, CompareMethod.PARTIAL_MATCH_IGNORE_CASE)

    @property
    def folds_case(self) -> bool:
        return self in (CompareMethod.EQUAL_IGNORE_CASE, CompareMethod.PARTIAL_MATCH_IGNORE_CASE)


class HashAlgorithm(str, Enum):
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    RIPEMD160 = "RIPEMD160"
    MAC_TRIPLE_DES = "MACTripleDES"


class SizeUnit(str, Enum):
    KB = "KB"
    MB = "MB"
    GB = "GB"

    @classmethod
    def parse(cls, value: "str | SizeUnit") -> "SizeUnit":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())

    @property
    def divisor(self) -> int:
        return {
            SizeUnit.KB: config.KIB,
            SizeUnit.MB: config.MIB,
            SizeUnit.GB: config.GIB,
        }[self]

    @property
    def column_label(self) -> str:
        return f"Size, {self.value}"


@dataclass(frozen=True)
class ScanConfiguration:
    """Snapshot imutável dos parâmetros de um scan."""
    root_folder: Path
    search_expression: str
    max_file_size: int = config.DEFAULT_MAX_FILE_SIZE
    md5_threshold: int = config.DEFAULT_MD5_THRESHOLD
    always_use_strong_hash: bool = False
    size_unit: SizeUnit = SizeUnit.KB
    fraction_digits: int = config.DEFAULT_FRACTION_DIGITS
    compare_method: CompareMethod = CompareMethod.PARTIAL_MATCH_IGNORE_CASE
    encoding: Optional[str] = None

    @classmethod
    def create(
        cls,
        root_folder: Path | str,
        search_expression: str,
        max_file_size: int = config.DEFAULT_MAX_FILE_SIZE,
        md5_threshold: int = config.DEFAULT_MD5_THRESHOLD,
        always_use_strong_hash: bool = False,
        size_unit: "SizeUnit | str" = SizeUnit.KB,
        fraction_digits: int = config.DEFAULT_FRACTION_DIGITS,
        compare_method: "CompareMethod | str" = CompareMethod.PARTIAL_MATCH_IGNORE_CASE,
        encoding: Optional[str] = None,
    ) -> "ScanConfiguration":
        """Valida os parâmetros e constrói a configuração.

        Raises:
            ValidationError: Se algum parâmetro for vazio ou inválido
        """
        validate_not_empty(str(root_folder or ""), "folderPath")
        validate_not_empty(search_expression, "searchExpr")
        root = validate_directory(root_folder, "folderPath")
        validate_non_negative(max_file_size, "maxFileSz")
        validate_non_negative(md5_threshold, "md5Thresh")
        validate_choice(fraction_digits, config.FRACTION_DIGITS_CHOICES, "fractPartSigns")
        try:
            unit = SizeUnit.parse(size_unit)
            method = CompareMethod.parse(compare_method)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return cls(
            root_folder=root,
            search_expression=search_expression,
            max_file_size=max_file_size,
            md5_threshold=md5_threshold,
            always_use_strong_hash=always_use_strong_hash,
            size_unit=unit,
            fraction_digits=fraction_digits,
            compare_method=method,
            encoding=encoding,
        )


@dataclass(frozen=True)
class SizeProbe:
    size: int
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class HashOutcome:
    algorithm: HashAlgorithm
    digest: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.digest is not None


@dataclass(frozen=True)
class MatchOutcome:
    matched: bool
    line_number: Optional[int] = None
    lines_read: int = 0
    error: Optional[str] = None


@dataclass(frozen=True)
class ReportRow:
    path: str
    scaled_size: Decimal
    size: int
    algorithm: HashAlgorithm
    hash: Optional[str] = None  # None quando o hash falhou
    error: Optional[str] = None


@dataclass
class ScanStatistics:
    discovered: int = 0
    skipped_oversize: int = 0
    unreadable: int = 0
    matched: int = 0
    hash_failures: int = 0
    duration_seconds: float = 0.0


@dataclass
class ScanReport:
    rows: list[ReportRow] = field(default_factory=list)
    stats: ScanStatistics = field(default_factory=ScanStatistics)

    @property
    def has_matches(self) -> bool:
        return bool(self.rows)
