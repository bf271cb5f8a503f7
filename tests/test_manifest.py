"""Tests for manifest loading, tree assembly and loader detection."""

from __future__ import annotations

import json

import pytest

from modgraph.builder import build_graph
from modgraph.extractors import GradleTreeLoader, ManifestTreeLoader, detect_loader
from modgraph.extractors.manifest import load_manifest
from modgraph.extractors.tree import ProjectSpec, assemble_tree, normalize_path, parent_path
from modgraph.model import GENERIC_MANAGED, MOBILE_PLATFORM, WEAK

MANIFEST = """\
name: sample
projects:
  ":app":
    plugins: [com.android.application]
    dependencies:
      implementation: [":core"]
      api: ":ui"
  ":core":
    capabilities: [generic-managed, sparkly]
  ":ui":
    dependencies:
      implementation:
        - ":core"
"""


@pytest.mark.parametrize(
    "raw, expected",
    [("", ":"), (":", ":"), ("app", ":app"), (":a:b", ":a:b"), (" :a::b ", ":a:b")],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


def test_parent_path():
    assert parent_path(":") is None
    assert parent_path(":a") == ":"
    assert parent_path(":a:b") == ":a"


def test_assemble_creates_intermediate_projects():
    tree = assemble_tree("t", [ProjectSpec(":a:b:c")])

    a = tree.root.children["a"]
    assert a.path == ":a"
    assert a.children["b"].children["c"].path == ":a:b:c"


def test_assemble_groups_declarations_by_configuration():
    spec = ProjectSpec(
        ":app",
        dependencies=[("implementation", ":x"), ("api", ":y"), ("implementation", ":y")],
    )
    tree = assemble_tree("t", [spec, ProjectSpec(":x"), ProjectSpec(":y")])

    app = tree.root.children["app"]
    assert [d.configuration for d in app.declarations] == ["implementation", "api"]
    assert [t.path for t in app.declarations[0].targets] == [":x", ":y"]


def test_load_manifest(write_files):
    project_dir = write_files({"modgraph.yaml": MANIFEST})

    tree = load_manifest(project_dir / "modgraph.yaml")
    graph = build_graph(tree.root, title=tree.name)

    assert tree.name == "sample"
    assert graph.nodes == [":app", ":core", ":ui"]
    assert graph.roots == [":", ":app"]
    assert graph.edges == {
        (":app", ":core"): {WEAK},
        (":app", ":ui"): set(),
        (":ui", ":core"): {WEAK},
    }
    assert graph.categories[":app"] == MOBILE_PLATFORM
    assert graph.categories[":core"] == GENERIC_MANAGED


def test_unknown_capability_is_ignored(write_files, caplog):
    project_dir = write_files({"modgraph.yaml": MANIFEST})

    with caplog.at_level("WARNING", logger="modgraph"):
        tree = load_manifest(project_dir / "modgraph.yaml")

    assert "sparkly" in caplog.text
    assert tree.root.children["core"].capabilities == {GENERIC_MANAGED}


def test_json_manifest(write_files):
    data = {"projects": {":a": {"dependencies": {"api": [":b"]}}, ":b": None}}
    project_dir = write_files({"proj/modgraph.json": json.dumps(data)})

    tree = load_manifest(project_dir / "proj" / "modgraph.json")

    assert tree.name == "proj"
    assert build_graph(tree.root).edges == {(":a", ":b"): set()}


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "projects: [1, 2]\n",
        "projects:\n  ':a': 3\n",
        "projects:\n  ':a':\n    dependencies: [':b']\n",
        "projects:\n  ':a':\n    plugins: {java: true}\n",
        "projects: {unclosed\n",
    ],
)
def test_invalid_manifest(write_files, text):
    project_dir = write_files({"modgraph.yaml": text})

    with pytest.raises(ValueError):
        load_manifest(project_dir / "modgraph.yaml")


def test_detect_prefers_manifest(write_files):
    project_dir = write_files(
        {"modgraph.yaml": MANIFEST, "settings.gradle": "include ':app'\n"}
    )

    assert isinstance(detect_loader(project_dir), ManifestTreeLoader)


def test_detect_explicit_manifest(write_files):
    project_dir = write_files(
        {"deps/graph.yml": MANIFEST, "settings.gradle": "include ':app'\n"}
    )

    loader = detect_loader(project_dir, project_dir / "deps" / "graph.yml")

    assert isinstance(loader, ManifestTreeLoader)
    assert loader.load(project_dir).name == "sample"


def test_detect_gradle(write_files):
    project_dir = write_files({"settings.gradle": "include ':app'\n"})
    assert isinstance(detect_loader(project_dir), GradleTreeLoader)


def test_detect_unknown(tmp_path):
    assert detect_loader(tmp_path) is None
