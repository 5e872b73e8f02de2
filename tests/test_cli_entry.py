"""CLI smoke tests.

Run the single `contentseeker` command through typer's CliRunner: exit codes,
the `---` marker and the machine-readable report formats.
"""

import csv
import hashlib
import io
import json
import logging

import pytest
from typer.testing import CliRunner

from contentseeker.cli import app

runner = CliRunner()
FLAGS = ["--no-pause", "--no-cls"]


@pytest.fixture(autouse=True)
def _drop_console_handler():
    yield
    root = logging.getLogger()
    for h in [h for h in root.handlers if h.name == "contentseeker_console"]:
        root.removeHandler(h)
    pkg = logging.getLogger("contentseeker")
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
        h.close()
    pkg.setLevel(logging.NOTSET)


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.txt").write_text("hello WORLD")
    (tmp_path / "b.txt").write_text("goodbye")
    return tmp_path


def test_help_smoke():
    res = runner.invoke(app, ["--help"], env={"COLUMNS": "200"})
    assert res.exit_code == 0
    assert "--compare-method" in res.stdout
    assert "--max-file-sz" in res.stdout


def test_csv_report_lists_matching_file(tree):
    res = runner.invoke(app, [str(tree), "world", "--format", "csv", *FLAGS])

    assert res.exit_code == 0
    rows = list(csv.reader(io.StringIO(res.stdout)))
    assert rows[0] == ["Path", "Size, KB", "Algo", "Hash"]
    assert rows[1:] == [[str(tree / "a.txt"), "0.01", "MD5", hashlib.md5(b"hello WORLD").hexdigest()]]


def test_json_report_with_options(tree):
    res = runner.invoke(
        app,
        [str(tree), "hello WORLD", "--compare-method", "equal", "--sha256-always",
         "--file-sz-mod", "MB", "--fract-part-signs", "4", "--format", "json", *FLAGS],
    )

    assert res.exit_code == 0
    payload = json.loads(res.stdout)
    assert len(payload) == 1
    assert payload[0]["algorithm"] == "SHA256"
    assert payload[0]["size"] == "0.0000"
    assert payload[0]["size_unit"] == "MB"


def test_table_report(tree):
    res = runner.invoke(app, [str(tree), "world", *FLAGS], env={"COLUMNS": "300"})

    assert res.exit_code == 0
    assert "Size, KB" in res.stdout
    assert "MD5" in res.stdout
    assert "a.txt" in res.stdout
    assert "b.txt" not in res.stdout


def test_no_matches_prints_marker(tree):
    res = runner.invoke(app, [str(tree), "nothing-like-this", *FLAGS])

    assert res.exit_code == 0
    assert res.stdout.strip() == "---"


def test_size_ceiling_option(tmp_path):
    (tmp_path / "ten.txt").write_text("0123456789")

    res = runner.invoke(app, [str(tmp_path), "0", "--max-file-sz", "5", *FLAGS])

    assert res.exit_code == 0
    assert res.stdout.strip() == "---"


def test_empty_folder_exits_1(tmp_path):
    res = runner.invoke(app, [str(tmp_path), "world", *FLAGS])

    assert res.exit_code == 1
    assert "Nenhum ficheiro" in res.output


@pytest.mark.parametrize("args", [[], ["", "world"], ["."], [".", ""]])
def test_empty_required_parameter_exits_1(args):
    res = runner.invoke(app, [*args, *FLAGS])

    assert res.exit_code == 1
    assert "vazio" in res.output


def test_missing_folder_exits_1(tmp_path):
    res = runner.invoke(app, [str(tmp_path / "nope"), "x", *FLAGS])
    assert res.exit_code == 1


def test_invalid_regex_exits_1(tree):
    res = runner.invoke(app, [str(tree), "([", "--compare-method", "partialmatch", *FLAGS])

    assert res.exit_code == 1
    assert "inválida" in res.output


def test_invalid_size_literal_exits_1(tree):
    res = runner.invoke(app, [str(tree), "x", "--md5-thresh", "lots", *FLAGS])
    assert res.exit_code == 1


def test_fraction_digits_out_of_range_is_usage_error(tree):
    res = runner.invoke(app, [str(tree), "x", "--fract-part-signs", "7", *FLAGS])
    assert res.exit_code == 2


def test_log_dir_writes_rotating_log(tree):
    log_dir = tree.parent / f"{tree.name}_logs"

    res = runner.invoke(app, [str(tree), "world", "--log-dir", str(log_dir), "--format", "csv", *FLAGS])

    assert res.exit_code == 0
    text = (log_dir / "contentseeker.log").read_text(encoding="utf-8")
    assert "Scan finished" in text
