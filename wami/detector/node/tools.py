"""Node.js dev tools inferred from package.json dependencies."""

from pathlib import Path

from wami.detector.tools import DevTool, ToolRegistry, tool_command
from wami.types import Command


class TypeScriptTool(DevTool):
    """tsc commands, only offered when the project has a tsconfig.json."""

    def __init__(self):
        super().__init__("typescript", ["typescript"])

    def commands(self, project_root: Path) -> list[Command]:
        if not (Path(project_root) / "tsconfig.json").exists():
            return []
        return [
            tool_command("tsc", "tsc --noEmit", "Type check with TypeScript"),
            tool_command("tsc-build", "tsc", "Build TypeScript project"),
        ]


ESLINT = DevTool("eslint", ["eslint"], [
    ("eslint", "eslint .", "Lint code with ESLint"),
    ("eslint-fix", "eslint . --fix", "Lint and auto-fix issues"),
])

PRETTIER = DevTool("prettier", ["prettier"], [
    ("prettier-check", "prettier --check .", "Check code formatting"),
    ("prettier-write", "prettier --write .", "Format code with Prettier"),
])

BIOME = DevTool("biome", ["@biomejs/biome", "biome"], [
    ("biome-check", "biome check .", "Check code with Biome"),
    ("biome-check-fix", "biome check --write .", "Check and auto-fix with Biome"),
    ("biome-format", "biome format --write .", "Format code with Biome"),
])

VITEST = DevTool("vitest", ["vitest"], [
    ("vitest", "vitest", "Run tests with Vitest"),
    ("vitest-ui", "vitest --ui", "Run tests with Vitest UI"),
    ("vitest-run", "vitest run", "Run tests once"),
    ("vitest-coverage", "vitest --coverage", "Run tests with coverage"),
])

JEST = DevTool("jest", ["jest", "@jest/core"], [
    ("jest", "jest", "Run tests with Jest"),
    ("jest-watch", "jest --watch", "Run tests in watch mode"),
    ("jest-coverage", "jest --coverage", "Run tests with coverage"),
])

PLAYWRIGHT = DevTool("playwright", ["@playwright/test", "playwright"], [
    ("playwright-test", "playwright test", "Run Playwright tests"),
    ("playwright-ui", "playwright test --ui", "Run Playwright tests with UI"),
    ("playwright-debug", "playwright test --debug", "Debug Playwright tests"),
])

CYPRESS = DevTool("cypress", ["cypress"], [
    ("cypress-open", "cypress open", "Open Cypress test runner"),
    ("cypress-run", "cypress run", "Run Cypress tests headlessly"),
])

VITE = DevTool("vite", ["vite"], [
    ("vite-dev", "vite", "Start Vite dev server"),
    ("vite-build", "vite build", "Build with Vite"),
    ("vite-preview", "vite preview", "Preview Vite build"),
])

TURBO = DevTool("turbo", ["turbo"], [
    ("turbo-build", "turbo build", "Build with Turbo"),
    ("turbo-dev", "turbo dev", "Start dev mode with Turbo"),
    ("turbo-test", "turbo test", "Run tests with Turbo"),
])

NX = DevTool("nx", ["nx", "@nx/workspace"], [
    ("nx-build", "nx build", "Build with Nx"),
    ("nx-test", "nx test", "Run tests with Nx"),
    ("nx-graph", "nx graph", "View project graph"),
])

# A declared "typecheck" script wins through the name de-duplication.
TYPECHECK = DevTool("typecheck", ["typescript"], [
    ("typecheck", "tsc --noEmit", "Type check code"),
])

STYLELINT = DevTool("stylelint", ["stylelint"], [
    ("stylelint", 'stylelint "**/*.css"', "Lint CSS files"),
    ("stylelint-fix", 'stylelint "**/*.css" --fix', "Lint and fix CSS files"),
])

STORYBOOK = DevTool("storybook", ["@storybook/react", "storybook"], [
    ("storybook", "storybook dev", "Start Storybook dev server"),
    ("storybook-build", "storybook build", "Build Storybook"),
])


def build_node_tool_registry() -> ToolRegistry:
    return ToolRegistry([
        TypeScriptTool(),
        ESLINT,
        PRETTIER,
        BIOME,
        VITEST,
        JEST,
        PLAYWRIGHT,
        CYPRESS,
        VITE,
        TURBO,
        NX,
        TYPECHECK,
        STYLELINT,
        STORYBOOK,
    ])


def collect_dependencies(package_json: dict) -> set[str]:
    """Lower-cased names from dependencies, devDependencies and peerDependencies."""
    names: set[str] = set()
    for key in ("dependencies", "devDependencies", "peerDependencies"):
        section = package_json.get(key)
        if isinstance(section, dict):
            names.update(name.lower() for name in section)
    return names
