from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import typer

from layout_roles.config import load_spec
from layout_roles.core import input_artifact, run_convert, run_inspect
from layout_roles.page_utils import parse_page_ranges


def _spec_path_candidates(path: str | Path) -> Iterator[Path]:
    """Yield potential spec locations without hitting the filesystem."""
    candidate = Path(path)
    pkg_dir = Path(__file__).resolve().parent
    yield from (candidate, pkg_dir / candidate, pkg_dir.parent / candidate)


def _resolve_spec_path(path: str | Path) -> Path:
    """Pick the first existing pipeline spec from candidate locations."""
    return next((p for p in _spec_path_candidates(path) if p.exists()), Path(path))


def _format_timings(timings: Mapping[str, float]) -> str:
    return "\n".join(f"{n}: {t:.2f}s" for n, t in timings.items())


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:
        _exit_with_error(exc)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cli_overrides(
    out: Path | None,
    fmt: str | None,
    annotate_italic: bool,
    report: Path | None,
) -> dict[str, dict[str, Any]]:
    emit_opts: dict[str, Any] = {
        k: v
        for k, v in {
            "output_path": str(out) if out else None,
            "format": fmt,
            "annotate_italic": True if annotate_italic else None,
        }.items()
        if v is not None
    }
    report_opts: dict[str, Any] = {"output_path": str(report)} if report else {}
    return {
        k: v
        for k, v in {"emit_json": emit_opts, "run_report": report_opts}.items()
        if v
    }


def _run_convert(
    html_dir: Path,
    pages: str,
    out: Path | None,
    fmt: str | None,
    annotate_italic: bool,
    report: Path | None,
    spec: str,
    verbose: bool,
) -> None:
    s = load_spec(
        _resolve_spec_path(spec),
        overrides=_cli_overrides(out, fmt, annotate_italic, report),
    )
    artifact = input_artifact(html_dir, parse_page_ranges(pages), s)
    result, timings = run_convert(artifact, s)
    if verbose:
        print(_format_timings(timings))
    rows = (result.meta or {}).get("metrics", {}).get("classify_roles", {}).get("rows", 0)
    print(f"convert: OK ({rows} rows)")


app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def convert(
    html_dir: Path = typer.Argument(..., exists=True, file_okay=False, readable=True),
    pages: str = typer.Option(..., "--pages", help="Page numbers, e.g. 9-1295 or 3,5-7"),
    out: Path | None = typer.Option(None, "--out"),
    fmt: str | None = typer.Option(None, "--format", help="json or jsonl"),
    annotate_italic: bool = typer.Option(False, "--annotate-italic"),
    report: Path | None = typer.Option(None, "--report"),
    spec: str = typer.Option("pipeline.yaml", "--spec"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Classify the rows of each page and write the tagged rows."""
    _configure_logging(verbose)
    _safe(
        lambda: _run_convert(
            html_dir, pages, out, fmt, annotate_italic, report, spec, verbose
        )
    )


@app.command()
def inspect() -> None:
    """Print the registered passes."""
    print(json.dumps(run_inspect(), indent=2))


if __name__ == "__main__":
    app()
