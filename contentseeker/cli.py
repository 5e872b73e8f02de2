"""
ContentSeeker CLI - procura ficheiros pelo conteúdo e lista tamanho e hash.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from . import config
from .common.exceptions import ConfigurationError, EnumerationError, format_exception_chain
from .common.formatting import parse_size
from .common.models import CompareMethod, ScanConfiguration, ScanReport, SizeUnit
from .core.reporting import render_csv, render_json, render_table
from .core.runner import run_scan
from .logging_cfg import configure_logging, get_logger

app = typer.Typer(
    help="🔎 ContentSeeker: procura ficheiros pelo conteúdo e calcula o respetivo hash.",
    rich_markup_mode="rich",
    add_completion=False,
)

HELP_SIZE = "Bytes, ou com sufixo K/KB/M/MB/G/GB (ex.: 100MB)."


class OutputFormat(str, Enum):
    TABLE = "table"
    CSV = "csv"
    JSON = "json"


def _print_report(console: Console, report: ScanReport, unit: SizeUnit, fmt: OutputFormat) -> None:
    if not report.has_matches:
        typer.echo(config.NO_MATCHES_MARKER)
        return
    if fmt is OutputFormat.CSV:
        typer.echo(render_csv(report.rows, unit), nl=False)
    elif fmt is OutputFormat.JSON:
        typer.echo(render_json(report.rows, unit))
    else:
        console.print(render_table(report.rows, unit))


@app.command()
def seek(
    folder_path: str = typer.Argument("", help="Pasta a percorrer recursivamente."),
    search_expr: str = typer.Argument("", help="Texto ou regex a procurar em cada linha."),
    max_file_sz: str = typer.Option("100MB", "--max-file-sz", help=f"Ficheiros maiores são ignorados. {HELP_SIZE}"),
    md5_thresh: str = typer.Option("50MB", "--md5-thresh", help=f"Até este tamanho usa MD5, acima SHA256. {HELP_SIZE}"),
    sha256_always: bool = typer.Option(False, "--sha256-always", help="Usa sempre SHA256."),
    do_cls: bool = typer.Option(True, "--do-cls/--no-cls", help="Limpa o ecrã antes de começar."),
    file_sz_mod: SizeUnit = typer.Option(SizeUnit.KB, "--file-sz-mod", case_sensitive=False, help="Unidade da coluna de tamanho."),
    fract_part_signs: int = typer.Option(config.DEFAULT_FRACTION_DIGITS, "--fract-part-signs", min=2, max=4, help="Casas decimais do tamanho."),
    compare_method: CompareMethod = typer.Option(
        CompareMethod.PARTIAL_MATCH_IGNORE_CASE, "--compare-method", case_sensitive=False, help="Método de comparação."
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", case_sensitive=False, help="Formato do relatório."),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Codificação do texto (por defeito a da plataforma)."),
    pause: bool = typer.Option(True, "--pause/--no-pause", help="Aguarda uma tecla no fim."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log detalhado (DEBUG)."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="auto | human | json"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Grava também um log rotativo nesta pasta."),
):
    """
    [bold magenta]🔍 Pesquisa por Conteúdo[/bold magenta]

    Percorre FOLDER_PATH, procura SEARCH_EXPR linha a linha em cada ficheiro
    e mostra Path, tamanho, algoritmo e hash (MD5 ou SHA256) de cada ficheiro
    com correspondência.
    """
    configure_logging(log_format, level=logging.DEBUG if verbose else logging.WARNING)
    if log_dir:
        get_logger("contentseeker", log_dir=log_dir, level=logging.DEBUG)
    logger = get_logger("cli")
    console = Console()
    err_console = Console(stderr=True)

    if do_cls:
        console.clear()

    try:
        scan_config = ScanConfiguration.create(
            root_folder=folder_path,
            search_expression=search_expr,
            max_file_size=parse_size(max_file_sz),
            md5_threshold=parse_size(md5_thresh),
            always_use_strong_hash=sha256_always,
            size_unit=file_sz_mod,
            fraction_digits=fract_part_signs,
            compare_method=compare_method,
            encoding=encoding,
        )
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=err_console,
            transient=True,
        ) as progress:
            task = progress.add_task("A procurar...", total=100)

            def prog_wrapper(pct: float, current: str):
                progress.update(task, completed=pct, description=escape(current or "Concluído"))

            report = run_scan(scan_config, progress_cb=prog_wrapper)
    except (ConfigurationError, EnumerationError) as e:
        logger.debug(format_exception_chain(e, include_traceback=True))
        err_console.print(f"[bold red]✘ {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)

    _print_report(console, report, scan_config.size_unit, output_format)

    if pause:
        typer.pause("Prima qualquer tecla para sair...")


def main():
    app()


if __name__ == "__main__":
    main()
