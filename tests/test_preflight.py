"""Tests for environment preflight checks."""

from click.testing import CliRunner
from conftest import FakeRunner

from create_sweet.cli import main
from create_sweet.config.preflight import EnvironmentValidator, parse_major_version
from create_sweet.executors import (
    CommandNotFoundError,
    CommandResult,
    CommandTimeoutError,
)
from create_sweet.templates import default_catalog
from create_sweet.templates.base import EnvironmentRequirement, TemplateDescriptor

NODE = EnvironmentRequirement(name="Node.js", probe=("node", "--version"), min_version=20)


def _template(*requirements: EnvironmentRequirement) -> TemplateDescriptor:
    return TemplateDescriptor(id="t", label="T", hint="", requirements=requirements)


def _version(args: tuple[str, ...], stdout: str) -> CommandResult:
    return CommandResult(args=args, returncode=0, stdout=stdout)


def test_parse_major_version() -> None:
    assert parse_major_version("v18.17.0") == 18
    assert parse_major_version("10.2.1\n") == 10
    assert parse_major_version("rustc 1.80.0 (abc 2024-07-21)") == 1
    assert parse_major_version("unknown") is None


def test_old_runtime_is_missing() -> None:
    """v18.17.0 against a minimum of 20 is reported missing."""
    runner = FakeRunner({("node",): _version(NODE.probe, "v18.17.0\n")})
    check = EnvironmentValidator(runner).check(_template(NODE))
    assert not check.satisfied
    assert check.missing == ("Node.js >= 20 (current: v18.17.0)",)


def test_new_runtime_is_satisfied() -> None:
    runner = FakeRunner({("node",): _version(NODE.probe, "v20.1.0\n")})
    check = EnvironmentValidator(runner).check(_template(NODE))
    assert check.satisfied
    assert check.missing == ()


def test_absent_tool_is_missing_with_hint() -> None:
    bun = EnvironmentRequirement(
        name="Bun", probe=("bun", "--version"), install_hint="https://bun.sh"
    )
    runner = FakeRunner({("bun",): CommandNotFoundError("Command not found: bun")})
    check = EnvironmentValidator(runner).check(_template(bun))
    assert check.missing == ("Bun (not found, install: https://bun.sh)",)


def test_failing_probe_and_timeout_are_missing() -> None:
    rust = EnvironmentRequirement(name="Rust", probe=("rustc", "--version"))
    runner = FakeRunner(
        {
            ("node",): CommandTimeoutError("timed out"),
            ("rustc",): CommandResult(args=("rustc",), returncode=127),
        }
    )
    check = EnvironmentValidator(runner).check(_template(NODE, rust))
    assert check.missing == ("Node.js >= 20 (not found)", "Rust (not found)")


def test_unparseable_version_is_missing() -> None:
    runner = FakeRunner({("node",): _version(NODE.probe, "weird")})
    check = EnvironmentValidator(runner).check(_template(NODE))
    assert check.missing == ("Node.js >= 20 (unrecognized version: weird)",)


def test_missing_preserves_requirement_order() -> None:
    """Every requirement of the Tauri template is missing, in declared order."""
    runner = FakeRunner(
        {
            ("node",): CommandNotFoundError("x"),
            ("pnpm",): CommandNotFoundError("x"),
            ("rustc",): CommandNotFoundError("x"),
            ("bun",): CommandNotFoundError("x"),
        }
    )
    template = default_catalog().find("tauri-desktop")
    check = EnvironmentValidator(runner).check(template)
    assert [m.split(" ")[0] for m in check.missing] == ["Node.js", "pnpm", "Rust", "Bun"]


def test_probes_use_timeout() -> None:
    runner = FakeRunner({("node",): _version(NODE.probe, "v22.0.0")})
    EnvironmentValidator(runner, probe_timeout=3.0).check(_template(NODE))
    assert runner.calls == [(("node", "--version"), None, 3.0)]


def test_list_templates_shows_requirements() -> None:
    """The --list-templates flag shows each template with its requirements."""
    result = CliRunner().invoke(main, ["--list-templates"])
    assert result.exit_code == 0
    assert "tauri-desktop" in result.output
    assert "Requires: Node.js >= 20, pnpm >= 10, Rust, Bun" in result.output
