"""Tests for the Node.js ecosystem detector.

All tests use in-memory fixtures written to tmp_path; no real repos cloned.
"""

import json
from pathlib import Path

import pytest

from wami.detector.node import NodeDetector, extract_scripts
from wami.detector.node.package_managers import (
    BUN,
    NPM,
    PNPM,
    YARN,
    detect_package_manager,
    find_node_package_manager,
)
from wami.detector.node.tools import collect_dependencies
from wami.detector.tools import tool_command
from wami.errors import ManifestParseError
from wami.types import CommandSource


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _package_json(root: Path, data: dict) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(data), encoding="utf-8")
    return root


def _touch(path: Path, content: str = "") -> None:
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Package manager resolution
# ---------------------------------------------------------------------------

class TestPackageManager:
    def test_defaults_to_npm(self, tmp_path):
        assert detect_package_manager(tmp_path) is NPM

    @pytest.mark.parametrize("lock_file, expected", [
        ("bun.lockb", BUN),
        ("bun.lock", BUN),
        ("pnpm-lock.yaml", PNPM),
        ("yarn.lock", YARN),
        ("package-lock.json", NPM),
    ])
    def test_lock_file_selects_manager(self, tmp_path, lock_file, expected):
        _touch(tmp_path / lock_file)
        assert detect_package_manager(tmp_path) is expected

    def test_bun_beats_npm_lock(self, tmp_path):
        _touch(tmp_path / "package-lock.json")
        _touch(tmp_path / "bun.lockb")
        assert detect_package_manager(tmp_path) is BUN

    def test_pnpm_beats_yarn_lock(self, tmp_path):
        _touch(tmp_path / "yarn.lock")
        _touch(tmp_path / "pnpm-lock.yaml")
        assert detect_package_manager(tmp_path) is PNPM

    def test_package_manager_field_used_without_lock(self, tmp_path):
        assert detect_package_manager(tmp_path, {"packageManager": "yarn@4.1.0"}) is YARN

    def test_lock_file_beats_package_manager_field(self, tmp_path):
        _touch(tmp_path / "pnpm-lock.yaml")
        assert detect_package_manager(tmp_path, {"packageManager": "yarn@4.1.0"}) is PNPM

    def test_unknown_package_manager_field_falls_back(self, tmp_path):
        assert detect_package_manager(tmp_path, {"packageManager": "deno@1.0"}) is NPM

    def test_lookup_by_id(self):
        assert find_node_package_manager("pnpm") is PNPM
        assert find_node_package_manager("poetry") is None


# ---------------------------------------------------------------------------
# Manifest parsing
# ---------------------------------------------------------------------------

class TestNodeParse:
    def test_pnpm_project_with_one_script(self, tmp_path):
        _package_json(tmp_path, {"scripts": {"build": "tsc"}})
        _touch(tmp_path / "pnpm-lock.yaml")
        detector = NodeDetector()

        project = detector.parse(detector.detect(tmp_path))

        assert project.package_manager == "pnpm"
        assert [c.name for c in project.commands] == ["build"]
        assert detector.build_command(project, "build") == "pnpm build"

    def test_name_from_manifest(self, tmp_path):
        _package_json(tmp_path, {"name": "@acme/web"})
        assert NodeDetector().parse(tmp_path).name == "@acme/web"

    def test_name_falls_back_to_directory(self, tmp_path):
        root = _package_json(tmp_path / "my-app", {})
        assert NodeDetector().parse(root).name == "my-app"

    def test_scripts_keep_declaration_order(self, tmp_path):
        _package_json(tmp_path, {"scripts": {"dev": "vite", "build": "vite build", "lint": "eslint ."}})
        project = NodeDetector().parse(tmp_path)
        assert [c.name for c in project.commands][:3] == ["dev", "build", "lint"]

    def test_non_string_scripts_skipped(self):
        commands = extract_scripts({"scripts": {"ok": "node x.js", "bad": ["a"], "worse": 3}})
        assert [c.name for c in commands] == ["ok"]

    def test_tool_commands_inferred_from_dev_dependencies(self, tmp_path):
        _package_json(tmp_path, {"devDependencies": {"eslint": "^9", "vitest": "^1"}})
        project = NodeDetector().parse(tmp_path)
        names = [c.name for c in project.commands]
        assert "eslint" in names
        assert "vitest-run" in names
        assert project.get_command("eslint").source == CommandSource.TOOL

    def test_declared_script_wins_over_inferred_tool(self, tmp_path):
        _package_json(tmp_path, {
            "scripts": {"eslint": "eslint src --max-warnings 0"},
            "devDependencies": {"eslint": "^9"},
        })
        project = NodeDetector().parse(tmp_path)
        eslint = [c for c in project.commands if c.name == "eslint"]
        assert len(eslint) == 1
        assert eslint[0].command == "eslint src --max-warnings 0"

    def test_typescript_commands_need_tsconfig(self, tmp_path):
        _package_json(tmp_path, {"devDependencies": {"typescript": "^5"}})
        names = [c.name for c in NodeDetector().parse(tmp_path).commands]
        assert "tsc" not in names
        assert "typecheck" in names

        _touch(tmp_path / "tsconfig.json", "{}")
        names = [c.name for c in NodeDetector().parse(tmp_path).commands]
        assert "tsc" in names

    def test_dependencies_recorded_lower_cased(self, tmp_path):
        _package_json(tmp_path, {"dependencies": {"React": "18"}, "peerDependencies": {"vue": "3"}})
        assert NodeDetector().parse(tmp_path).dependencies == ["react", "vue"]

    def test_collect_dependencies_ignores_non_mapping_sections(self):
        assert collect_dependencies({"dependencies": ["react"]}) == set()

    def test_malformed_manifest_raises(self, tmp_path):
        _touch(tmp_path / "package.json", "{ broken")
        with pytest.raises(ManifestParseError):
            NodeDetector().parse(tmp_path)

    def test_non_object_manifest_raises(self, tmp_path):
        _touch(tmp_path / "package.json", "[]")
        with pytest.raises(ManifestParseError):
            NodeDetector().parse(tmp_path)

    def test_override_file_applied(self, tmp_path):
        _package_json(tmp_path, {"scripts": {"test": "jest"}})
        _touch(tmp_path / ".wami.json", json.dumps({"ignore": ["test"], "commands": {"test": "vitest run"}}))
        project = NodeDetector().parse(tmp_path)
        assert project.get_command("test").command == "vitest run"


# ---------------------------------------------------------------------------
# Command building
# ---------------------------------------------------------------------------

class TestNodeBuildCommand:
    def _project(self, tmp_path, data, lock_file=None):
        _package_json(tmp_path, data)
        if lock_file:
            _touch(tmp_path / lock_file)
        return NodeDetector().parse(tmp_path)

    def test_npm_script_uses_npm_run(self, tmp_path):
        project = self._project(tmp_path, {"scripts": {"dev": "vite"}})
        assert NodeDetector().build_command(project, "dev") == "npm run dev"

    def test_yarn_script(self, tmp_path):
        project = self._project(tmp_path, {"scripts": {"dev": "vite"}}, "yarn.lock")
        assert NodeDetector().build_command(project, "dev") == "yarn dev"

    def test_script_mentioning_manager_still_runs_by_name(self, tmp_path):
        project = self._project(tmp_path, {"scripts": {"ci": "npm run lint && npm run test"}})
        assert NodeDetector().build_command(project, "ci") == "npm run ci"

    def test_bun_script_body_with_other_tools_runs_by_name(self, tmp_path):
        project = self._project(tmp_path, {"scripts": {"build": "rollup -c && node scripts/bundle.js"}}, "bun.lockb")
        assert NodeDetector().build_command(project, "build") == "bun build"

    def test_npm_script_with_npx_in_body_runs_by_name(self, tmp_path):
        project = self._project(tmp_path, {"scripts": {"test": "jest && npx eslint ."}})
        assert NodeDetector().build_command(project, "test") == "npm run test"

    def test_wrapped_tool_command_not_double_wrapped(self, tmp_path):
        _touch(tmp_path / "pnpm-lock.yaml")
        project = self._project(tmp_path, {})
        project.commands.append(tool_command("lint", "pnpm exec eslint .", "Lint"))
        assert NodeDetector().build_command(project, "lint") == "pnpm exec eslint ."

    def test_tool_command_uses_exec_prefix(self, tmp_path):
        project = self._project(tmp_path, {"devDependencies": {"eslint": "^9"}}, "pnpm-lock.yaml")
        assert NodeDetector().build_command(project, "eslint-fix") == "pnpm exec eslint . --fix"

    def test_bun_tool_command_uses_bunx(self, tmp_path):
        project = self._project(tmp_path, {"devDependencies": {"jest": "^29"}}, "bun.lockb")
        assert NodeDetector().build_command(project, "jest-watch") == "bunx jest --watch"

    def test_override_command_runs_verbatim(self, tmp_path):
        _touch(tmp_path / "wami.json", json.dumps({"commands": {"deploy": "./scripts/deploy.sh"}}))
        project = self._project(tmp_path, {})
        assert NodeDetector().build_command(project, "deploy") == "./scripts/deploy.sh"

    def test_unknown_command_uses_run_syntax(self, tmp_path):
        project = self._project(tmp_path, {}, "bun.lock")
        assert NodeDetector().build_command(project, "anything") == "bun anything"
