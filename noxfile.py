"""Nox sessions for multi-environment testing and quality assurance."""

import nox


@nox.session(python=["3.12", "3.13"])
def tests(session: nox.Session) -> None:
    """Run test suite with coverage reporting.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=config_locale",
        "--cov-report=term-missing:skip-covered",
        "--cov-fail-under=90",
    )


@nox.session(python=["3.13"])
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks.

    Args:
        session: The nox session object.
    """
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=["3.13"])
def typecheck(session: nox.Session) -> None:
    """Run basedpyright type checking.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".", "basedpyright")
    session.run("basedpyright")


@nox.session(python=["3.13"])
def properties(session: nox.Session) -> None:
    """Run the Hypothesis property tests with a larger example budget.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run("pytest", "tests/property", "--hypothesis-profile=thorough", "-p", "no:cacheprovider")


@nox.session(python=["3.13"])
def smoke(session: nox.Session) -> None:
    """Resolve the bundled fixture tree through the installed console script.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".")
    fixtures = "tests/fixtures/locale"
    session.run("config-locale", "-d", fixtures, "foo", "foo", "foo")
    session.run("config-locale", "-d", fixtures, "--show", "stems", "--format", "json", "foo", "all", "qa")
    session.run("config-locale", "-d", fixtures, "--show", "audit", "--algorithm", "permute", "foo", "bar")
