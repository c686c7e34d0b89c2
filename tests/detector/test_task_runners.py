"""Tests for pyproject.toml task runners (poethepoet, taskipy)."""

import tomllib

from wami.detector.python import PythonDetector
from wami.detector.python.task_runners import (
    PoeTaskParser,
    TaskipyParser,
    TaskRunnerRegistry,
    build_task_runner_registry,
    resolve_task,
)
from wami.types import CommandSource


POE_PYPROJECT = """\
[project]
name = "poe-demo"

[tool.poe.tasks]
lint = "ruff check ."
_private = "echo hidden"
fmt = { cmd = "ruff format .", help = "Format the code" }
check = ["lint", "fmt"]
ci = { sequence = ["lint", { cmd = "pytest" }] }
noop = { env = { A = "1" } }
"""


class TestResolveTask:
    def test_string(self):
        assert resolve_task("pytest") == ("pytest", None)

    def test_table_with_help(self):
        assert resolve_task({"shell": "make docs", "help": "Docs"}) == ("make docs", "Docs")

    def test_script_key(self):
        assert resolve_task({"script": "pkg.mod:main"}) == ("pkg.mod:main", None)

    def test_list_joins_steps(self):
        assert resolve_task(["a", {"cmd": "b"}]) == ("a && b", None)

    def test_sequence(self):
        assert resolve_task({"sequence": ["a", "b"], "help": "Both"}) == ("a && b", "Both")

    def test_no_command(self):
        assert resolve_task({"env": {"A": "1"}}) is None
        assert resolve_task("") is None
        assert resolve_task(42) is None


class TestPoeTaskParser:
    def test_tasks_namespaced(self):
        commands = PoeTaskParser().parse(tomllib.loads(POE_PYPROJECT))
        assert [c.name for c in commands] == ["poe:lint", "poe:fmt", "poe:check", "poe:ci"]
        assert all(c.source == CommandSource.TASK_RUNNER for c in commands)

    def test_command_runs_task_by_name(self):
        commands = PoeTaskParser().parse(tomllib.loads(POE_PYPROJECT))
        fmt = next(c for c in commands if c.name == "poe:fmt")
        assert fmt.command == "poe fmt"
        assert fmt.description == "Format the code"

    def test_default_description(self):
        lint = PoeTaskParser().parse(tomllib.loads(POE_PYPROJECT))[0]
        assert lint.description == "Run poe task: lint"

    def test_not_configured(self):
        assert PoeTaskParser().is_configured({"tool": {"black": {}}}) is False
        assert PoeTaskParser().parse({}) == []


class TestTaskipyParser:
    def test_taskipy_tasks(self):
        data = {"tool": {"taskipy": {"tasks": {"test": "pytest", "pre_test": "echo"}}}}
        commands = TaskipyParser().parse(data)
        assert [(c.name, c.command) for c in commands] == [("task:test", "task test"), ("task:pre_test", "task pre_test")]


class TestTaskRunnerRegistry:
    def test_default_parsers(self):
        assert build_task_runner_registry().parser_names == ["poethepoet", "taskipy"]

    def test_parse_all_in_registration_order(self):
        data = {"tool": {
            "poe": {"tasks": {"a": "x"}},
            "taskipy": {"tasks": {"b": "y"}},
        }}
        registry = TaskRunnerRegistry([TaskipyParser(), PoeTaskParser()])
        assert [c.name for c in registry.parse_all(data)] == ["task:b", "poe:a"]

    def test_detector_includes_task_commands(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(POE_PYPROJECT, encoding="utf-8")
        detector = PythonDetector()
        project = detector.parse(tmp_path)
        assert project.get_command("poe:lint") is not None
        assert detector.build_command(project, "poe:lint") == "poe lint"
