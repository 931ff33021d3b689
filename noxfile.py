"""Nox configuration for sqlalchemy-serialized."""

from __future__ import annotations

import nox

PYTHON_VERSIONS = ["3.9", "3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """run the main test suite"""

    session.install("-e", ".[test]")

    posargs = list(session.posargs)
    cmd = ["pytest"]
    if "generate-junit" in posargs:
        # produce individual junit files that are per-interpreter
        posargs.remove("generate-junit")
        cmd.extend(["--junitxml", f"junit-py{session.python}.xml"])

    session.run(*cmd, *posargs)


@nox.session(name="pep8")
def test_pep8(session: nox.Session) -> None:
    """Run linting checks."""

    session.install("-e", ".[lint]")

    session.run("flake8", "./lib/", "./test/", "noxfile.py", "setup.py")
