import json
import logging
from pathlib import Path
from typing import Optional

import typer

from ..dsl.dsl_parser import ParseResult, parse_dsl, result_to_json
from ..geometry.shapes import PROJECTIONS, list_view_dims_multi, proj_axis_labels, project_board
from ..logging_config import setup_logging
from ..validators.intersections import shape_issues
# DXF exporter is imported inside the command to avoid hard dependency at import-time

app = typer.Typer(help="Deskdraft board DSL CLI")


# ---------------------------
# Helpers
# ---------------------------

def _load(inp: Path) -> ParseResult:
    return parse_dsl(Path(inp).read_text(encoding="utf-8"))


def _echo_errors(result: ParseResult) -> None:
    for err in result.errors:
        typer.echo(err, err=True)


# ---------------------------
# Commands
# ---------------------------

@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_file: Optional[Path] = typer.Option(None, help="Also write the log to this file"),
):
    setup_logging(logging.DEBUG if verbose else logging.WARNING,
                  str(log_file) if log_file else None)


@app.command()
def parse(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Board DSL source"),
    out: Optional[Path] = typer.Option(None, help="Output JSON (stdout when omitted)"),
):
    """Parse a DSL file into boards/errors/var_count JSON."""
    payload = json.dumps(result_to_json(_load(inp)), indent=2, ensure_ascii=False)
    if out is None:
        typer.echo(payload)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload, encoding="utf-8")
    typer.echo(f"Wrote {out}")


@app.command()
def check(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Board DSL source"),
):
    """
    Report parse errors and outline problems.
    Exit code 1 when anything was reported.
    """
    result = _load(inp)
    _echo_errors(result)
    issues = [msg for b in result.boards for msg in shape_issues(b)]
    for msg in issues:
        typer.echo(msg, err=True)
    typer.echo(f"{len(result.boards)} boards, {result.var_count} variables, "
               f"{len(result.errors)} errors, {len(issues)} shape issues")
    if result.errors or issues:
        raise typer.Exit(code=1)


@app.command()
def project(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Board DSL source"),
    direction: str = typer.Option("front", help="front|back|left|right|top|bottom"),
):
    """Print the orthographic projection rectangle of every board."""
    if direction not in PROJECTIONS:
        raise typer.BadParameter(f"must be one of {', '.join(PROJECTIONS)}", param_hint="--direction")
    result = _load(inp)
    _echo_errors(result)
    ax, ay = proj_axis_labels(direction)
    typer.echo(f"{direction}: {ax} / {ay}")
    for b in result.boards:
        p = project_board(b, direction)
        typer.echo(f"[{b.id}] {b.name}: {p.lx:g}, {p.ly:g}, {p.lw:g} x {p.lh:g}")


@app.command()
def views(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Board DSL source"),
):
    """Print list-view faces (explicit `view` or auto-detected) per board."""
    result = _load(inp)
    _echo_errors(result)
    for b in result.boards:
        faces = ", ".join(f"{f.label} {f.dw:g} x {f.dh:g}" for f in list_view_dims_multi(b))
        typer.echo(f"[{b.id}] {b.name}: {faces}")


@app.command("export-dxf")
def export_dxf_cmd(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Board DSL source"),
    out: Path = typer.Option(..., help="Output DXF path"),
    options: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Options YAML"),
):
    """
    Export board cut outlines to DXF (AC1018) with layers CUT / TEXT.
    """
    from ..config import load_options
    from ..packaging.dxf_exporter import export_dxf  # import here to keep CLI import light

    result = _load(inp)
    _echo_errors(result)
    out.parent.mkdir(parents=True, exist_ok=True)
    path = export_dxf(result.boards, str(out), load_options(options))
    typer.echo(f"Wrote DXF: {path} ({len(result.boards)} boards)")


if __name__ == "__main__":
    app()
