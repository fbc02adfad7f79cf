"""Fakes and file builders shared by the test suite."""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from site_skinner.core.models import ArtifactIdentity, ProjectModel, ReleaseCandidate
from site_skinner.core.protocols import InvocationResult
from site_skinner.errors import MetadataRetrievalFailure
from site_skinner.maven.pom import PomProjectModelProvider
from site_skinner.scm.types import ScmFileSet, ScmRepository, ScmResult
from site_skinner.versioning.version import ArtifactVersion

SITE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project name="{name}">
  <skin>
    <groupId>org.apache.maven.skins</groupId>
    <artifactId>{skin}</artifactId>
    <version>1.0</version>
  </skin>
  <body>
    <menu name="{menu}">
      <item name="Intro" href="index.html"/>
    </menu>
    <footer>{footer}</footer>
  </body>
</project>
"""

POM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.example</groupId>
  <artifactId>widget</artifactId>
  <version>{version}</version>
  <scm>
    <connection>scm:git:https://git.example.org/widget.git</connection>
    <tag>widget-{version}</tag>
  </scm>
  <build>
    <plugins>
      <plugin>
        <artifactId>maven-site-plugin</artifactId>
        <version>{site_plugin}</version>
        <configuration>
          <locales>{locales}</locales>
        </configuration>
      </plugin>
    </plugins>
  </build>
</project>
"""


def write_site_xml(site_dir: Path, name: str = "Widget", skin: str = "maven-fluido-skin",
                   menu: str = "Docs", footer: str = "Footer", filename: str = "site.xml") -> Path:
    site_dir.mkdir(parents=True, exist_ok=True)
    path = site_dir / filename
    path.write_text(SITE_XML.format(name=name, skin=skin, menu=menu, footer=footer), encoding="utf-8")
    return path


def write_pom(directory: Path, version: str = "1.1", site_plugin: str = "3.12.1", locales: str = "en") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "pom.xml"
    path.write_text(POM_XML.format(version=version, site_plugin=site_plugin, locales=locales), encoding="utf-8")
    return path


def write_jar(path: Path, date_time: tuple[int, int, int, int, int, int] = (2010, 5, 17, 10, 30, 0)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(zipfile.ZipInfo("META-INF/MANIFEST.MF", date_time=date_time), "Manifest-Version: 1.0\n")
    return path


@dataclass
class FakeRepository:
    versions: list[str] = field(default_factory=list)
    artifact: Path | None = None
    fail_metadata: bool = False
    lookups: list[ArtifactIdentity] = field(default_factory=list)
    forced: list[ReleaseCandidate] = field(default_factory=list)

    def retrieve_available_versions(self, identity: ArtifactIdentity) -> list[ArtifactVersion]:
        self.lookups.append(identity)
        if self.fail_metadata:
            raise MetadataRetrievalFailure("repository unreachable")
        return [ArtifactVersion(version) for version in self.versions]

    def resolve(self, candidate: ReleaseCandidate) -> Path:
        assert self.artifact is not None
        return self.artifact

    def force_resolve(self, candidate: ReleaseCandidate) -> Path:
        self.forced.append(candidate)
        return self.resolve(candidate)


@dataclass
class FakeScmProvider:
    result: ScmResult = field(default_factory=lambda: ScmResult(success=True))
    on_checkout: Callable[[Path], None] | None = None
    calls: list[tuple[str, ScmRepository, ScmFileSet, str | None]] = field(default_factory=list)

    def checkout(self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None) -> ScmResult:
        self.calls.append(("checkout", repository, fileset, revision))
        if self.on_checkout is not None:
            self.on_checkout(fileset.basedir)
        return self.result

    def update(self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None) -> ScmResult:
        self.calls.append(("update", repository, fileset, revision))
        return self.result


@dataclass
class FakeScmManager:
    provider: FakeScmProvider = field(default_factory=FakeScmProvider)

    def make_repository(self, connection: str) -> ScmRepository:
        _, provider, url = connection.split(":", 2)
        return ScmRepository(provider=provider, url=url, connection=connection)

    def get_provider(self, repository: ScmRepository) -> FakeScmProvider:
        return self.provider


class FakeProjectBuilder(PomProjectModelProvider):
    """Reads POMs from disk; the published POM is a fixed model."""

    def __init__(self, published: ProjectModel | None = None):
        super().__init__(repository=None)
        self.published = published
        self.requested: list[ReleaseCandidate] = []

    def build_from_repository(self, candidate: ReleaseCandidate) -> ProjectModel:
        self.requested.append(candidate)
        assert self.published is not None
        return self.published


@dataclass
class FakeInvoker:
    version: str | None = "3.9.6"
    exit_code: int = 0
    execution_error: str | None = None
    invocations: list[tuple[list[str], Path]] = field(default_factory=list)

    def invoke(self, goals: list[str], build_file: Path) -> InvocationResult:
        self.invocations.append((list(goals), build_file))
        return InvocationResult(exit_code=self.exit_code, execution_error=self.execution_error)

    def tool_version(self) -> ArtifactVersion | None:
        return ArtifactVersion(self.version) if self.version else None
