from pathlib import Path

import pytest

from contentseeker.common.exceptions import ValidationError
from contentseeker.common.models import CompareMethod, ScanConfiguration, SizeUnit
from contentseeker.config import DEFAULT_MAX_FILE_SIZE, DEFAULT_MD5_THRESHOLD


def test_create_with_defaults(tmp_path):
    cfg = ScanConfiguration.create(tmp_path, "needle")

    assert cfg.root_folder == Path(tmp_path)
    assert cfg.max_file_size == DEFAULT_MAX_FILE_SIZE == 100 * 1024 * 1024
    assert cfg.md5_threshold == DEFAULT_MD5_THRESHOLD == 50 * 1024 * 1024
    assert cfg.always_use_strong_hash is False
    assert cfg.size_unit is SizeUnit.KB
    assert cfg.fraction_digits == 2
    assert cfg.compare_method is CompareMethod.PARTIAL_MATCH_IGNORE_CASE
    assert cfg.encoding is None


def test_configuration_is_immutable(tmp_path):
    cfg = ScanConfiguration.create(tmp_path, "needle")
    with pytest.raises(AttributeError):
        cfg.search_expression = "other"


def test_create_parses_names(tmp_path):
    cfg = ScanConfiguration.create(tmp_path, "x", size_unit="gb", compare_method="Equal")
    assert cfg.size_unit is SizeUnit.GB
    assert cfg.compare_method is CompareMethod.EQUAL


@pytest.mark.parametrize(
    "kwargs, fragment",
    [
        ({"root_folder": "", "search_expression": "x"}, "folderPath"),
        ({"search_expression": ""}, "searchExpr"),
        ({"search_expression": "x", "max_file_size": -1}, "maxFileSz"),
        ({"search_expression": "x", "md5_threshold": -1}, "md5Thresh"),
        ({"search_expression": "x", "fraction_digits": 5}, "fractPartSigns"),
        ({"search_expression": "x", "size_unit": "TB"}, "TB"),
        ({"search_expression": "x", "compare_method": "fuzzy"}, "fuzzy"),
    ],
)
def test_create_rejects_invalid(tmp_path, kwargs, fragment):
    kwargs.setdefault("root_folder", tmp_path)
    with pytest.raises(ValidationError) as exc_info:
        ScanConfiguration.create(**kwargs)
    assert fragment in str(exc_info.value)


def test_create_rejects_missing_or_file_root(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")

    with pytest.raises(ValidationError):
        ScanConfiguration.create(tmp_path / "missing", "x")
    with pytest.raises(ValidationError):
        ScanConfiguration.create(f, "x")


def test_size_unit_divisors_and_labels():
    assert SizeUnit.KB.divisor == 1024
    assert SizeUnit.MB.divisor == 1024 ** 2
    assert SizeUnit.GB.divisor == 1024 ** 3
    assert SizeUnit.MB.column_label == "Size, MB"


def test_compare_method_flags():
    assert CompareMethod.PARTIAL_MATCH.is_regex
    assert not CompareMethod.EQUAL_IGNORE_CASE.is_regex
    assert CompareMethod.EQUAL_IGNORE_CASE.folds_case
    assert not CompareMethod.PARTIAL_MATCH.folds_case
