"""Command line built for the downstream site build."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

from site_skinner.maven.invoker import MavenInvoker, parse_tool_version
from site_skinner.versioning.version import ArtifactVersion

MVN_VERSION_OUTPUT = """Apache Maven 3.9.6 (bc0240f3c744dd6b6ec2920b3cd08dcc295161ae)
Maven home: /opt/maven
Java version: 17.0.9, vendor: Eclipse Adoptium
"""


def test_command_line(tmp_path: Path) -> None:
    invoker = MavenInvoker(properties={"skipTests": "true"}, profiles=["release", "docs"], debug=True)

    command = invoker.command(["site"], tmp_path / "pom.xml")

    assert command == ["mvn", "-f", str(tmp_path / "pom.xml"), "-e", "-X", "-DskipTests=true", "-P", "release,docs", "site"]


def test_invoke_success(tmp_path: Path) -> None:
    with patch("site_skinner.maven.invoker.subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess([], 0)
        result = MavenInvoker().invoke(["site-deploy"], tmp_path / "pom.xml")

    assert result.exit_code == 0
    assert result.execution_error is None
    assert run.call_args.kwargs["cwd"] == str(tmp_path)
    assert run.call_args.args[0][-1] == "site-deploy"


def test_invoke_failure_reports_exit_code(tmp_path: Path) -> None:
    with patch("site_skinner.maven.invoker.subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess([], 1)
        result = MavenInvoker().invoke(["site"], tmp_path / "pom.xml")

    assert result.exit_code == 1
    assert "exited with code 1" in result.execution_error


def test_missing_executable(tmp_path: Path) -> None:
    with patch("site_skinner.maven.invoker.subprocess.run", side_effect=FileNotFoundError("mvn")):
        invoker = MavenInvoker()
        result = invoker.invoke(["site"], tmp_path / "pom.xml")
        version = invoker.tool_version()

    assert result.exit_code == 127
    assert version is None


def test_tool_version() -> None:
    assert parse_tool_version(MVN_VERSION_OUTPUT) == ArtifactVersion("3.9.6")
    assert parse_tool_version("command not found") is None
    with patch("site_skinner.maven.invoker.subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess([], 0, stdout=MVN_VERSION_OUTPUT)
        assert MavenInvoker().tool_version() == ArtifactVersion("3.9.6")
