"""Read a project tree from a YAML (or JSON) manifest.

Example ``modgraph.yaml``::

    name: sample
    projects:
      ":app":
        plugins: [com.android.application]
        dependencies:
          implementation: [":core"]
          api: [":ui"]
      ":core":
        capabilities: [generic-managed]
      ":ui": {}
"""

from __future__ import annotations

import logging
from pathlib import Path

from modgraph.extractors.tree import ProjectSpec, assemble_tree
from modgraph.model import CATEGORIES, NONE, ProjectTree
from modgraph.policies import capabilities_for_plugins

logger = logging.getLogger(__name__)

MANIFEST_NAMES = ("modgraph.yaml", "modgraph.yml", "modgraph.json")


def find_manifest(project_dir: Path) -> Path | None:
    for name in MANIFEST_NAMES:
        p = project_dir / name
        if p.exists():
            return p
    return None


def _string_list(value: object, where: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return value
    raise ValueError(f"{where}: expected a string or a list of strings")


def _parse_project(path: str, entry: object) -> ProjectSpec:
    if entry is None:
        entry = {}
    if not isinstance(entry, dict):
        raise ValueError(f"project {path}: expected a mapping")

    spec = ProjectSpec(str(path))
    spec.capabilities = capabilities_for_plugins(
        _string_list(entry.get("plugins"), f"project {path} plugins")
    )
    for tag in _string_list(entry.get("capabilities"), f"project {path} capabilities"):
        if tag in CATEGORIES and tag != NONE:
            spec.capabilities.add(tag)
        else:
            logger.warning("project %s: unknown capability %r, ignoring", path, tag)

    dependencies = entry.get("dependencies") or {}
    if not isinstance(dependencies, dict):
        raise ValueError(f"project {path} dependencies: expected a mapping")
    for configuration, targets in dependencies.items():
        for target in _string_list(targets, f"project {path} {configuration}"):
            spec.dependencies.append((str(configuration), target))
    return spec


def load_manifest(manifest_path: Path) -> ProjectTree:
    """Parse *manifest_path* into a project tree.

    Raises ``OSError`` if the file cannot be read and ``ValueError`` if it is
    not a valid manifest.
    """
    import yaml

    with open(manifest_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{manifest_path}: expected a mapping at top level")

    projects = data.get("projects") or {}
    if not isinstance(projects, dict):
        raise ValueError(f"{manifest_path}: 'projects' must be a mapping")

    specs = [_parse_project(path, entry) for path, entry in projects.items()]
    name = data.get("name") or manifest_path.resolve().parent.name
    logger.debug("Manifest %s: %d projects", manifest_path, len(specs))
    return assemble_tree(str(name), specs)


class ManifestTreeLoader:
    """Build the project tree from an explicit or discovered manifest file."""

    def __init__(self, manifest: Path | None = None):
        self.manifest = manifest

    def _manifest_path(self, project_dir: Path) -> Path | None:
        if self.manifest is not None:
            return self.manifest
        return find_manifest(project_dir)

    def can_handle(self, project_dir: Path) -> bool:
        path = self._manifest_path(project_dir)
        return path is not None and path.exists()

    def load(self, project_dir: Path) -> ProjectTree:
        path = self._manifest_path(project_dir)
        if path is None:
            raise FileNotFoundError(f"No manifest found in {project_dir}")
        return load_manifest(path)
