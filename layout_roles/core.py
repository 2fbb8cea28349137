from __future__ import annotations

import json
import logging
import platform
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import fields, is_dataclass, replace
from importlib import import_module
from pathlib import Path
from typing import Any

from layout_roles import writer
from layout_roles.config import PipelineSpec
from layout_roles.framework import Artifact, Pass, registry
from layout_roles.reader import DEFAULT_PAGE_PATTERN, read_pages

logger = logging.getLogger(__name__)

# Steps that must appear before a given step when both are in the pipeline.
_PREREQUISITES: Mapping[str, str] = {
    "classify_roles": "html_parse",
    "emit_json": "classify_roles",
}


def _pass_steps(spec: PipelineSpec) -> list[str]:
    """Return pipeline steps, rejecting names with no registered pass."""
    regs = registry()
    unknown = [s for s in spec.pipeline if s not in regs]
    if unknown:
        raise KeyError(f"unknown steps: {unknown}")
    return list(spec.pipeline)


def _ensure_order(steps: Sequence[str]) -> None:
    """Raise when a step precedes the step whose output it consumes."""
    position = {s: i for i, s in enumerate(steps)}
    for step, before in _PREREQUISITES.items():
        if step in position and before in position and position[before] > position[step]:
            raise ValueError(f"{step} requires {before} to run beforehand")


def _enforce_invariants(spec: PipelineSpec) -> list[str]:
    steps = _pass_steps(spec)
    if not steps:
        raise ValueError("pipeline has no steps")
    _ensure_order(steps)
    return steps


def configure_pass(pass_obj: Pass, opts: Mapping[str, Any]) -> Pass:
    """Return a copy of ``pass_obj`` with matching dataclass fields replaced."""
    if not opts or not is_dataclass(pass_obj):
        return pass_obj
    names = {f.name for f in fields(pass_obj) if f.init}
    updates = {k: v for k, v in opts.items() if k in names}
    return replace(pass_obj, **updates) if updates else pass_obj


def _timed(p: Pass, a: Artifact, timings: dict[str, float]) -> Artifact:
    """Run ``p`` while recording its execution duration."""
    t0 = time.time()
    try:
        return p(a)
    finally:
        timings[p.name] = time.time() - t0


def input_artifact(
    html_dir: str | Path,
    pages: Iterable[int],
    spec: PipelineSpec | None = None,
) -> Artifact:
    """Read ``pages`` from ``html_dir`` into the pipeline's first artifact."""
    opts = (spec or PipelineSpec()).options.get("reader", {})
    pattern = opts.get("page_pattern", DEFAULT_PAGE_PATTERN)
    payload = read_pages(html_dir, pages, pattern)
    return Artifact(payload=payload, meta={"metrics": {}, "input": payload["source_dir"]})


def _maybe_write_output(a: Artifact, spec: PipelineSpec) -> None:
    """Persist emitted records when the pipeline ends with ``emit_json``."""
    if "emit_json" not in spec.pipeline:
        return
    opts = spec.options.get("emit_json", {})
    path = opts.get("output_path")
    if not path:
        logger.warning("emit_json has no output_path; nothing written")
        return
    writer.write_records(a.payload, path, opts.get("format", "json"))


# --- run report helpers ----------------------------------------------------


def _dependency_versions() -> dict[str, Any]:
    names = ("bs4", "pydantic", "yaml")

    def version(n: str) -> Any:
        try:
            return getattr(import_module(n), "__version__", None)
        except ImportError:
            return None

    return {n: version(n) for n in names}


def _env_snapshot() -> dict[str, Any]:
    return {
        "sys_version": sys.version,
        "platform": platform.platform(),
        "dependencies": _dependency_versions(),
    }


def assemble_report(
    timings: Mapping[str, float],
    meta: Mapping[str, Any],
    error: str | None = None,
) -> dict[str, Any]:
    """Purely assemble run report data without performing IO."""
    report: dict[str, Any] = {
        "timings": dict(timings),
        "metrics": {**dict(meta.get("metrics") or {}), "env": _env_snapshot()},
    }
    if error is not None:
        report["error"] = error
    return report


def write_run_report(spec: PipelineSpec, report: Mapping[str, Any]) -> None:
    """Write ``report`` to ``run_report.json`` honoring the options path."""
    path = Path(spec.options.get("run_report", {}).get("output_path", "run_report.json"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2), encoding="utf-8")


def run_convert(a: Artifact, spec: PipelineSpec) -> tuple[Artifact, dict[str, float]]:
    """Run declared passes, write the document, and persist a run report."""
    steps = _enforce_invariants(spec)
    timings: dict[str, float] = {}
    try:
        passes = [configure_pass(registry()[s], spec.options.get(s, {})) for s in steps]
        for p in passes:
            logger.debug("running %s", p.name)
            a = _timed(p, a, timings)
        _maybe_write_output(a, spec)
    except Exception as exc:
        write_run_report(spec, assemble_report(timings, a.meta or {}, error=str(exc)))
        raise
    write_run_report(spec, assemble_report(timings, a.meta or {}))
    return a, timings


def run_inspect() -> dict[str, dict[str, str]]:
    """Return a lightweight view of the registry for the CLI and tests."""
    return {
        name: {"input": str(p.input_type), "output": str(p.output_type)}
        for name, p in registry().items()
    }
