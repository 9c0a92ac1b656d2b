from __future__ import annotations

import pathlib
from datetime import date, datetime
from typing import Optional

import typer
import structlog
from rich.console import Console
from rich.markup import escape

from .config import load_config, CertgenConfig
from .engine.form import (
    CertificateData,
    SubmissionError,
    build_certificate,
    certificate_filename,
    certificate_lines,
)
from .validate.validators import format_cpf, is_valid_cpf, mask_cpf_partial

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="certgen — course certificate generator")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"certgen {__version__}")
        raise typer.Exit()


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter("date must be YYYY-MM-DD")


def _submit(
    cfg: CertgenConfig, cpf: str, name: str, email: str, course: str, issued: Optional[str]
) -> CertificateData:
    """Run the form checks; print the failure and exit 1 when they don't pass."""
    try:
        data = build_certificate(cpf, name, email, course, cfg.courses, today=_parse_date(issued))
    except SubmissionError as e:
        log.info("submission_rejected", reason=str(e))
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    log.info("submission_accepted", course=data.course_type)
    return data


def _fail(message: str, detail: str) -> None:
    console.print(f"[red]{message}: {escape(detail)}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .certgen.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    ctx.obj = {"config": load_config(config) if config else CertgenConfig()}
    if verbose:
        log.info("verbose_enabled")


@app.command()
def validate(cpf: str = typer.Argument(..., help="CPF, with or without punctuation")):
    """Check a CPF against its check digits (exit code 1 when invalid)."""
    if is_valid_cpf(cpf):
        console.print(f"[green]valid[/green] {format_cpf(cpf)}")
        return
    console.print(f"[red]invalid[/red] {escape(cpf)}")
    raise typer.Exit(code=1)


@app.command("format")
def format_(
    cpf: str = typer.Argument(..., help="CPF digits (punctuation is ignored)"),
    partial: bool = typer.Option(False, "--partial", help="Mask a partially typed CPF"),
):
    """Print a CPF as AAA.BBB.CCC-DD."""
    console.print(mask_cpf_partial(cpf) if partial else format_cpf(cpf))


@app.command()
def courses(ctx: typer.Context):
    """List the courses, talks and trainings certificates can be issued for."""
    cfg: CertgenConfig = ctx.obj["config"]
    for c in cfg.courses:
        console.print(f"{c.id}\t{c.label}", markup=False, highlight=False)


@app.command()
def generate(
    ctx: typer.Context,
    cpf: str = typer.Option(..., "--cpf", help="Holder's CPF"),
    name: str = typer.Option(..., "--name", help="Holder's full name"),
    email: str = typer.Option(..., "--email", help="Holder's email"),
    course: str = typer.Option(..., "--course", help="Course id (see `certgen courses`)"),
    out: pathlib.Path = typer.Option(pathlib.Path("."), "--out", help="Destination directory"),
    html: bool = typer.Option(False, "--html", help="Also write an HTML rendering"),
    png: bool = typer.Option(False, "--png", help="Also write the raw PNG image"),
    issued: Optional[str] = typer.Option(None, "--date", help="Issue date, YYYY-MM-DD (default: today)"),
):
    """Validate the form fields and export the certificate as PDF."""
    from .render.document import CertificateRenderer

    cfg: CertgenConfig = ctx.obj["config"]
    data = _submit(cfg, cpf, name, email, course, issued)
    renderer = CertificateRenderer(cfg)

    result = renderer.export_pdf(data, out / certificate_filename(data.name))
    if not result.success:
        _fail("Erro ao gerar o certificado", result.error_message)
    console.print(f"[green]Certificado gerado:[/green] {escape(result.output_path)}")

    if png:
        result = renderer.export_png(data, out / certificate_filename(data.name, "png"))
        if not result.success:
            _fail("Erro ao gerar a imagem", result.error_message)
        console.print(f"[green]Imagem gerada:[/green] {escape(result.output_path)}")

    if html:
        from .render.html import write_certificate_html
        html_path = out / certificate_filename(data.name, "html")
        try:
            write_certificate_html(data, html_path, cfg)
        except OSError as e:
            log.error("html_export_failed", path=str(html_path), error=str(e))
            _fail("Erro ao gerar o HTML", str(e))
        console.print(f"[green]HTML gerado:[/green] {escape(str(html_path))}")


@app.command()
def preview(
    ctx: typer.Context,
    cpf: str = typer.Option(..., "--cpf", help="Holder's CPF"),
    name: str = typer.Option(..., "--name", help="Holder's full name"),
    email: str = typer.Option(..., "--email", help="Holder's email"),
    course: str = typer.Option(..., "--course", help="Course id (see `certgen courses`)"),
    issued: Optional[str] = typer.Option(None, "--date", help="Issue date, YYYY-MM-DD (default: today)"),
):
    """Print the certificate text without writing any file."""
    cfg: CertgenConfig = ctx.obj["config"]
    data = _submit(cfg, cpf, name, email, course, issued)
    for _, text in certificate_lines(data, cfg.courses, cfg.workload_hours, cfg.fallback_label):
        console.print(text, markup=False, highlight=False)
    console.print(f"Certificado emitido para {data.email}", markup=False, highlight=False)
