"""Nox automation sessions for layout_roles."""

from __future__ import annotations

import nox

nox.options.sessions = ("lint", "typecheck", "tests")
nox.options.reuse_existing_virtualenvs = True


@nox.session()
def lint(session: nox.Session) -> None:
    session.install("black", "flake8")
    session.run("black", "--check", "layout_roles", "tests")
    session.run("flake8", "--max-line-length", "100", "layout_roles", "tests")


@nox.session()
def typecheck(session: nox.Session) -> None:
    session.install("mypy", "types-PyYAML", "-e", ".")
    session.run("mypy", "layout_roles")


@nox.session()
def tests(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", "tests")
