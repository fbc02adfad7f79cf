"""Git provider driven through the ``git`` executable."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from site_skinner.scm.types import ScmFileSet, ScmRepository, ScmResult

__all__ = ["GitScmProvider"]

logger = logging.getLogger(__name__)


@dataclass
class _GitCommandResult:
    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _first_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


class GitScmProvider:
    """Checkout/update a working copy with plain git commands."""

    def __init__(self, executable: str = "git"):
        self.executable = executable

    def _run(self, args: list[str], cwd: Path) -> _GitCommandResult:
        command = [self.executable, *args]
        logger.debug("Running %s in %s", shlex.join(command), cwd)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            return _GitCommandResult(command, 127, "", f"{self.executable} executable not found on PATH")
        return _GitCommandResult(command, completed.returncode, completed.stdout or "", completed.stderr or "")

    def _result(self, runs: list[_GitCommandResult]) -> ScmResult:
        last = runs[-1]
        output = "\n".join(part for run in runs for part in (run.stdout, run.stderr) if part).strip()
        message = None
        if not last.ok:
            message = _first_line(last.stderr) or f"git {last.args[1]} exited with code {last.returncode}"
        return ScmResult(
            success=last.ok,
            provider_message=message,
            command_output=output,
            command_line=shlex.join(last.args),
        )

    @staticmethod
    def _sparse_patterns(fileset: ScmFileSet) -> list[str]:
        patterns = fileset.include_patterns or ["/*"]
        return patterns + [f"!{pattern}" for pattern in fileset.exclude_patterns]

    def checkout(
        self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None
    ) -> ScmResult:
        """Clone into ``fileset.basedir``; include/exclude globs become a sparse checkout."""
        basedir = fileset.basedir
        clone = ["clone"]
        if fileset.is_filtered:
            clone.append("--no-checkout")
        if revision:
            clone += ["--branch", revision]
        clone += [repository.url, str(basedir)]

        runs = [self._run(clone, basedir.parent)]
        if runs[-1].ok and fileset.is_filtered:
            runs.append(self._run(["sparse-checkout", "set", "--no-cone", *self._sparse_patterns(fileset)], basedir))
            if runs[-1].ok:
                runs.append(self._run(["read-tree", "-mu", "HEAD"], basedir))
        return self._result(runs)

    def update(
        self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None
    ) -> ScmResult:
        """Pull the current branch, or fetch tags and switch to ``revision``."""
        basedir = fileset.basedir
        if revision:
            runs = [self._run(["fetch", "--tags", repository.url], basedir)]
            if runs[-1].ok:
                runs.append(self._run(["checkout", revision], basedir))
        else:
            runs = [self._run(["pull", repository.url], basedir)]
        return self._result(runs)
