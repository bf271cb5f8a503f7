"""Shared fixtures: small hand-built project trees."""

from __future__ import annotations

import pytest

from modgraph.model import Declaration, ProjectNode


def link(parent: ProjectNode, *children: ProjectNode) -> None:
    for child in children:
        parent.children[child.path.rsplit(":", 1)[-1]] = child


def depend(project: ProjectNode, configuration: str, *targets: ProjectNode) -> None:
    project.declarations.append(Declaration(configuration, list(targets)))


@pytest.fixture
def sample_tree() -> ProjectNode:
    """:app -> :core (implementation), :app -> :ui (api), :ui -> :core (implementation)."""
    app = ProjectNode(":app")
    core = ProjectNode(":core")
    ui = ProjectNode(":ui")
    link(app, core, ui)
    depend(app, "implementation", core)
    depend(app, "api", ui)
    depend(ui, "implementation", core)
    return app


@pytest.fixture
def write_files(tmp_path):
    """Write ``{relative path: text}`` under tmp_path and return tmp_path."""

    def _write(files: dict[str, str]):
        for rel, text in files.items():
            p = tmp_path / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        return tmp_path

    return _write
