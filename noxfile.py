import os
from pathlib import Path

import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "SPREADSHEET_ID",
    "SHEET_NAME",
    "GOOGLE_CLIENT_EMAIL",
    "GOOGLE_PRIVATE_KEY",
    "GOOGLE_SERVICE_ACCOUNT_JSON",
    "LOG_LEVEL",
]


def _set_env(session):
    """
    Propagate sheet-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "guestlist/", "tests/")
    session.run("black", "guestlist/", "tests/")
    session.run("flake8", "guestlist/", "tests/")
    session.run("mypy", "guestlist/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests against the in-memory table store.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_checkin.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
        "--cov=guestlist",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-fail-under=80",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run the HTTP API tests through FastAPI's TestClient.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_checkin.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
    )
