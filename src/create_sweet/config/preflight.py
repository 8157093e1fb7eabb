"""Preflight checks to validate the host environment for a template."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from create_sweet.console import console
from create_sweet.executors import CommandError, CommandRunner
from create_sweet.templates.base import EnvironmentRequirement, TemplateDescriptor

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"v?(\d+)\.(\d+)\.(\d+)")

DEFAULT_PROBE_TIMEOUT = 10.0


@dataclass(frozen=True)
class EnvironmentCheck:
    """Result of checking a template's requirements."""

    missing: tuple[str, ...] = field(default=())

    @property
    def satisfied(self) -> bool:
        return not self.missing


def parse_major_version(output: str) -> int | None:
    """Extract the major component of the first vMAJOR.MINOR.PATCH in output."""
    match = VERSION_PATTERN.search(output)
    if match is None:
        return None
    return int(match.group(1))


class EnvironmentValidator:
    """Probes the host for the tools a template declares.

    The check is advisory: it reports what is missing and never aborts.
    """

    def __init__(
        self,
        runner: CommandRunner,
        probe_timeout: float | None = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self._runner = runner
        self._probe_timeout = probe_timeout

    def check(self, template: TemplateDescriptor) -> EnvironmentCheck:
        """Run every requirement probe, preserving declaration order."""
        missing: list[str] = []
        for requirement in template.requirements:
            problem = self._check_requirement(requirement)
            if problem is not None:
                missing.append(problem)
        return EnvironmentCheck(missing=tuple(missing))

    def _check_requirement(self, requirement: EnvironmentRequirement) -> str | None:
        """Return a description of the problem, or None if satisfied."""
        label = requirement.describe()
        try:
            result = self._runner.run(requirement.probe, timeout=self._probe_timeout)
        except CommandError as e:
            logger.debug("Probe for %s failed: %s", requirement.name, e)
            return _not_found(label, requirement)

        if not result.ok:
            logger.debug(
                "Probe for %s exited with %d", requirement.name, result.returncode
            )
            return _not_found(label, requirement)

        if requirement.min_version is None:
            return None

        output = result.stdout.strip()
        major = parse_major_version(output)
        if major is None:
            return f"{label} (unrecognized version: {output or 'empty output'})"
        if major < requirement.min_version:
            return f"{label} (current: {output})"
        return None


def _not_found(label: str, requirement: EnvironmentRequirement) -> str:
    if requirement.install_hint:
        return f"{label} (not found, install: {requirement.install_hint})"
    return f"{label} (not found)"


def print_environment_check(check: EnvironmentCheck) -> None:
    """Print the result of an environment check."""
    if check.satisfied:
        console.print("[green]✓[/green] All requirements found")
        return

    console.print("[yellow]⚠[/yellow] Missing requirements:")
    for requirement in check.missing:
        console.print(f"  [dim]•[/dim] {requirement}")
