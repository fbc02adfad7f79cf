"""Run the downstream site build with the ``mvn`` executable."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from pathlib import Path

from site_skinner.core.protocols import InvocationResult
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["MavenInvoker", "parse_tool_version"]

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"Apache Maven (\S+)")


def parse_tool_version(output: str) -> ArtifactVersion | None:
    """Extract the version from ``mvn --version`` output."""
    match = _VERSION_RE.search(output)
    return ArtifactVersion(match.group(1)) if match else None


class MavenInvoker:
    """Invoke ``mvn`` in a child process, output goes straight to the terminal."""

    def __init__(
        self,
        executable: str = "mvn",
        properties: dict[str, str] | None = None,
        profiles: list[str] | None = None,
        debug: bool = False,
    ):
        self.executable = executable
        self.properties = dict(properties or {})
        self.profiles = list(profiles or [])
        self.debug = debug

    def command(self, goals: list[str], build_file: Path) -> list[str]:
        command = [self.executable, "-f", str(build_file), "-e"]
        if self.debug:
            command.append("-X")
        command += [f"-D{key}={value}" for key, value in self.properties.items()]
        if self.profiles:
            command += ["-P", ",".join(self.profiles)]
        return command + list(goals)

    def invoke(self, goals: list[str], build_file: Path) -> InvocationResult:
        build_file = Path(build_file)
        command = self.command(goals, build_file)
        logger.info("Executing %s", shlex.join(command))
        try:
            completed = subprocess.run(command, cwd=str(build_file.parent), check=False)
        except OSError as exc:
            return InvocationResult(exit_code=127, execution_error=f"Unable to run {self.executable}: {exc}")
        if completed.returncode != 0:
            return InvocationResult(
                exit_code=completed.returncode,
                execution_error=f"{shlex.join(command)} exited with code {completed.returncode}",
            )
        return InvocationResult(exit_code=0)

    def tool_version(self) -> ArtifactVersion | None:
        try:
            completed = subprocess.run(
                [self.executable, "--version"],
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.debug("Unable to run %s --version: %s", self.executable, exc)
            return None
        return parse_tool_version(completed.stdout or "")
