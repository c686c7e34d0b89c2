"""Python dev tools inferred from declared dependencies."""

from pathlib import Path

from wami.detector.tools import DevTool, ToolRegistry, tool_command
from wami.types import Command


class SphinxTool(DevTool):
    """Builds docs/ when the project has one, else the project root."""

    def __init__(self):
        super().__init__("sphinx", ["sphinx"])

    def commands(self, project_root: Path) -> list[Command]:
        docs_dir = "docs" if (Path(project_root) / "docs").is_dir() else "."
        return [
            tool_command(
                "docs-build",
                f"sphinx-build -b html {docs_dir} {docs_dir}/_build",
                "Build documentation with Sphinx",
            ),
        ]


RUFF = DevTool("ruff", ["ruff"], [
    ("ruff-check", "ruff check", "Run ruff linter"),
    ("ruff-check-fix", "ruff check --fix", "Run ruff linter and auto-fix issues"),
    ("ruff-format", "ruff format", "Format code with ruff"),
    ("ruff-format-check", "ruff format --check", "Check if code is formatted"),
])

PYTEST = DevTool("pytest", ["pytest"], [
    ("test", "pytest", "Run all tests"),
    ("test-verbose", "pytest -v", "Run tests with verbose output"),
    ("test-cov", "pytest --cov", "Run tests with coverage report"),
])

BLACK = DevTool("black", ["black"], [
    ("black", "black .", "Format code with black"),
    ("black-check", "black --check .", "Check if code is formatted"),
])

MYPY = DevTool("mypy", ["mypy"], [
    ("mypy", "mypy .", "Run mypy type checker"),
])

PYRIGHT = DevTool("pyright", ["pyright"], [
    ("pyright", "pyright", "Run pyright type checker"),
])

ISORT = DevTool("isort", ["isort"], [
    ("isort", "isort .", "Sort imports with isort"),
    ("isort-check", "isort --check-only .", "Check import sorting"),
])

FLAKE8 = DevTool("flake8", ["flake8"], [
    ("flake8", "flake8", "Run flake8 linter"),
])

PYLINT = DevTool("pylint", ["pylint"], [
    ("pylint", "pylint src", "Run pylint linter"),
])

COVERAGE = DevTool("coverage", ["coverage"], [
    ("coverage-run", "coverage run -m pytest", "Run tests with coverage"),
    ("coverage-report", "coverage report", "Show coverage report"),
    ("coverage-html", "coverage html", "Generate HTML coverage report"),
])

PRE_COMMIT = DevTool("pre-commit", ["pre-commit"], [
    ("pre-commit-install", "pre-commit install", "Install pre-commit hooks"),
    ("pre-commit-run", "pre-commit run --all-files", "Run pre-commit on all files"),
])

BANDIT = DevTool("bandit", ["bandit"], [
    ("bandit", "bandit -r .", "Run security checks with bandit"),
])


def build_python_tool_registry() -> ToolRegistry:
    return ToolRegistry([
        RUFF,
        PYTEST,
        BLACK,
        MYPY,
        PYRIGHT,
        ISORT,
        FLAKE8,
        PYLINT,
        COVERAGE,
        PRE_COMMIT,
        BANDIT,
        SphinxTool(),
    ])
