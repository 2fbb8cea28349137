from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Protocol, Type, runtime_checkable


@dataclass(frozen=True)
class Artifact:
    """Immutable carrier of a pass payload and its run metadata."""

    payload: Any
    meta: Dict[str, Any] | None = None


@runtime_checkable
class Pass(Protocol):
    name: str
    input_type: Type
    output_type: Type

    def __call__(self, a: Artifact) -> Artifact:
        """Transform ``a`` into the next artifact."""
        ...


_REGISTRY: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    """Register ``p`` under its name; re-registering the same name replaces it."""
    global _REGISTRY
    _REGISTRY = MappingProxyType({**dict(_REGISTRY), p.name: p})
    return p


def registry() -> Dict[str, Pass]:
    """Shallow copy of the registry for inspection and tests."""
    return dict(_REGISTRY)


def with_metrics(
    meta: Mapping[str, Any] | None, name: str, values: Mapping[str, Any]
) -> Dict[str, Any]:
    """Return a copy of ``meta`` with ``values`` recorded under ``metrics[name]``."""
    base = dict(meta or {})
    metrics = dict(base.get("metrics") or {})
    metrics[name] = {**(metrics.get(name) or {}), **values}
    base["metrics"] = metrics
    return base
