from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from site_skinner.core.models import ProjectModel
from site_skinner.maven.pom import PomProjectModelProvider
from site_skinner.site.codec import XmlDescriptorCodec
from site_skinner.workflow.context import WorkflowContext
from tests.support import (
    FakeInvoker,
    FakeProjectBuilder,
    FakeRepository,
    FakeScmManager,
    FakeScmProvider,
    write_jar,
    write_pom,
    write_site_xml,
)


@pytest.fixture
def current_project(tmp_path: Path) -> ProjectModel:
    """Current project at version 1.3 with a skinned site.xml."""
    basedir = tmp_path / "current"
    write_pom(basedir, version="1.3")
    write_site_xml(basedir / "src" / "site", name="Widget", skin="maven-fluido-skin", menu="Current")
    return PomProjectModelProvider().build(basedir / "pom.xml")


@pytest.fixture
def released_sources() -> Callable[..., Callable[[Path], None]]:
    """Factory for checkout callbacks that lay out released sources."""

    def factory(site_plugin: str = "3.12.1", locales: str = "en", with_site: bool = True):
        def checkout(directory: Path) -> None:
            write_pom(directory, version="1.1", site_plugin=site_plugin, locales=locales)
            if with_site:
                write_site_xml(directory / "src" / "site", name="Widget 1.1", skin="maven-default-skin",
                               menu="Released", footer="Old footer")

        return checkout

    return factory


@pytest.fixture
def workflow_context(tmp_path: Path, released_sources) -> WorkflowContext:
    published = ProjectModel(
        group_id="org.example",
        artifact_id="widget",
        version="1.1",
        scm_connection="scm:git:https://git.example.org/widget.git",
        scm_tag="widget-1.1",
    )
    repository = FakeRepository(
        versions=["1.0", "1.1", "1.2-SNAPSHOT"],
        artifact=write_jar(tmp_path / "m2" / "widget-1.1.jar"),
    )
    return WorkflowContext(
        project_builder=FakeProjectBuilder(published),
        repository=repository,
        scm_manager=FakeScmManager(FakeScmProvider(on_checkout=released_sources())),
        codec=XmlDescriptorCodec(),
        invoker=FakeInvoker(),
    )
