"""Read a Gradle multi-project build into a project tree (build scripts only, no Gradle run)."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from modgraph.extractors.tree import ProjectSpec, assemble_tree, normalize_path
from modgraph.model import ProjectTree
from modgraph.policies import capabilities_for_plugins

logger = logging.getLogger(__name__)

_SETTINGS_NAMES = ("settings.gradle.kts", "settings.gradle")
_BUILD_NAMES = ("build.gradle.kts", "build.gradle")
_CATALOG_PATH = Path("gradle") / "libs.versions.toml"

# rootProject.name = "foo"  /  rootProject.name = 'foo'
_ROOT_NAME_RE = re.compile(r"""rootProject\.name\s*=\s*["']([^"']+)["']""")

# include(":a", ":b:c")  /  include ':a', ':b'
_INCLUDE_RE = re.compile(r"""\binclude\s*\(?\s*((?:["'][^"']+["']\s*,?\s*)+)""")
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")

# Inside plugins { }: id("x") / id 'x' / kotlin("multiplatform")
_PLUGIN_ID_RE = re.compile(r"""\bid\s*\(?\s*["']([\w.\-]+)["']""")
_KOTLIN_PLUGIN_RE = re.compile(r"""\bkotlin\s*\(\s*["']([\w.\-]+)["']\s*\)""")
# Inside plugins { }: alias(libs.plugins.kotlin.multiplatform)
_ALIAS_PLUGIN_RE = re.compile(r"""\balias\s*\(?\s*libs\.plugins\.([\w.]+)""")
# Inside plugins { }: core plugins written as `java-library` or a bare java
_BACKTICK_PLUGIN_RE = re.compile(r"`([\w.\-]+)`")
_BARE_PLUGIN_RE = re.compile(r"^\s*([A-Za-z]\w*)\s*$")
# Declared for subprojects only: id("x") version "1.0" apply false
_APPLY_FALSE_RE = re.compile(r"\bapply\s*\(?\s*false\s*\)?\s*$")
# Anywhere: apply plugin: 'x'  /  apply(plugin = "x")
_APPLY_PLUGIN_RE = re.compile(r"""\bapply\s*\(?\s*plugin\s*[:=]\s*["']([\w.\-]+)["']""")

_PLUGINS_BLOCK_RE = re.compile(r"\bplugins\s*\{")
# Also matches commonMain.dependencies { } in multiplatform source sets.
_DEPENDENCIES_BLOCK_RE = re.compile(r"\bdependencies\s*\{")

# Inside dependencies { }:
# implementation(project(":x"))  /  api project(':x')  /  project(path: ':x')
_PROJECT_DEP_RE = re.compile(
    r"""\b(\w+)\s*\(?\s*project\s*\(\s*(?:path\s*[:=]\s*)?["']([^"']+)["']"""
)
# implementation(projects.feature.login): type-safe project accessors
_ACCESSOR_DEP_RE = re.compile(r"""\b(\w+)\s*\(\s*projects\.([\w.]+)\s*\)""")

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def is_gradle_project(project_dir: Path) -> bool:
    return any((project_dir / name).exists() for name in _SETTINGS_NAMES + _BUILD_NAMES)


def _find_script(directory: Path, names: tuple[str, ...]) -> Path | None:
    for name in names:
        p = directory / name
        if p.exists():
            return p
    return None


def _read_script(path: Path) -> str | None:
    """Return the script text with comments removed, or None if unreadable."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return None
    content = _BLOCK_COMMENT_RE.sub("", content)
    return "\n".join(
        line for line in content.splitlines() if not line.strip().startswith("//")
    )


def _parse_settings(content: str) -> tuple[str | None, list[str]]:
    """Return (root project name, included project paths)."""
    m = _ROOT_NAME_RE.search(content)
    name = m.group(1) if m else None

    paths: list[str] = []
    for include in _INCLUDE_RE.finditer(content):
        for raw in _QUOTED_RE.findall(include.group(1)):
            path = normalize_path(raw)
            if path not in paths:
                paths.append(path)
    return name, paths


# ---------------------------------------------------------------------------
# Version catalog
# ---------------------------------------------------------------------------


def _catalog_key(alias: str) -> str:
    """Normalize a catalog alias: ``kotlin-multiplatform`` and ``kotlin.multiplatform`` match."""
    return re.sub(r"[-_.]", ".", alias).lower()


def _parse_plugin_catalog(catalog_path: Path) -> dict[str, str]:
    """Return the ``[plugins]`` table of a version catalog as alias key -> plugin id."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(catalog_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not parse version catalog %s: %s", catalog_path, e)
        return {}

    plugins: dict[str, str] = {}
    for alias, spec in data.get("plugins", {}).items():
        if isinstance(spec, dict):
            plugin_id = spec.get("id")
        elif isinstance(spec, str):
            # "plugin.id:version" shorthand
            plugin_id = spec.split(":", 1)[0]
        else:
            plugin_id = None
        if plugin_id:
            plugins[_catalog_key(alias)] = plugin_id
    return plugins


def _find_plugin_catalog(project_dir: Path) -> dict[str, str]:
    # Walk up to find a parent catalog (common in composite builds)
    directory = project_dir.resolve()
    for _ in range(4):
        catalog_path = directory / _CATALOG_PATH
        if catalog_path.exists():
            logger.debug("Using version catalog: %s", catalog_path)
            return _parse_plugin_catalog(catalog_path)
        directory = directory.parent
    return {}


# ---------------------------------------------------------------------------
# Build scripts
# ---------------------------------------------------------------------------


def _blocks(content: str, opener: re.Pattern[str]) -> list[tuple[int, str]]:
    """Return ``(offset, body)`` of every top-most block opened by *opener*."""
    blocks: list[tuple[int, str]] = []
    end = 0
    for m in opener.finditer(content):
        if m.start() < end:
            continue  # nested inside the previous block
        depth = 1
        i = m.end()
        while i < len(content) and depth:
            if content[i] == "{":
                depth += 1
            elif content[i] == "}":
                depth -= 1
            i += 1
        blocks.append((m.end(), content[m.end() : i - 1]))
        end = i
    return blocks


def _parse_plugins(content: str, catalog: dict[str, str] | None = None) -> list[str]:
    """Return the ids of plugins the script applies to its own project."""
    catalog = catalog or {}
    plugins: list[str] = []
    for _, block in _blocks(content, _PLUGINS_BLOCK_RE):
        for line in block.splitlines():
            if _APPLY_FALSE_RE.search(line):
                continue
            plugins.extend(_PLUGIN_ID_RE.findall(line))
            plugins.extend(_BACKTICK_PLUGIN_RE.findall(line))
            plugins.extend(_BARE_PLUGIN_RE.findall(line))
            plugins.extend(
                f"org.jetbrains.kotlin.{name}" for name in _KOTLIN_PLUGIN_RE.findall(line)
            )
            for alias in _ALIAS_PLUGIN_RE.findall(line):
                plugin_id = catalog.get(_catalog_key(alias))
                if plugin_id is None:
                    logger.debug("Unknown plugin alias libs.plugins.%s", alias)
                    continue
                plugins.append(plugin_id)
    plugins.extend(_APPLY_PLUGIN_RE.findall(content))
    return plugins


def _accessor_key(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


def _resolve_accessor(accessor: str, known_paths: list[str]) -> str | None:
    """Map ``feature.login`` (from ``projects.feature.login``) to a project path."""
    wanted = [_accessor_key(s) for s in accessor.split(".")]
    for path in known_paths:
        segments = [_accessor_key(s) for s in path.split(":") if s]
        if segments == wanted:
            return path
    return None


def _parse_dependencies(content: str, known_paths: list[str]) -> list[tuple[str, str]]:
    """Return ``(configuration, target path)`` pairs declared in ``dependencies { }``.

    Pairs come back in source order.
    """
    found: list[tuple[int, str, str]] = []
    for offset, block in _blocks(content, _DEPENDENCIES_BLOCK_RE):
        for m in _PROJECT_DEP_RE.finditer(block):
            found.append((offset + m.start(), m.group(1), normalize_path(m.group(2))))
        for m in _ACCESSOR_DEP_RE.finditer(block):
            path = _resolve_accessor(m.group(2), known_paths)
            if path is None:
                logger.warning(
                    "Could not resolve project accessor projects.%s", m.group(2)
                )
                continue
            found.append((offset + m.start(), m.group(1), path))
    return [(config, path) for _, config, path in sorted(found)]


def _project_dir(root_dir: Path, path: str) -> Path:
    return root_dir.joinpath(*[s for s in path.split(":") if s])


class GradleTreeLoader:
    """Build the project tree from settings and build scripts of a Gradle build."""

    def can_handle(self, project_dir: Path) -> bool:
        return is_gradle_project(project_dir)

    def load(self, project_dir: Path) -> ProjectTree:
        name: str | None = None
        included: list[str] = []

        settings = _find_script(project_dir, _SETTINGS_NAMES)
        if settings is not None:
            content = _read_script(settings)
            if content is not None:
                name, included = _parse_settings(content)
        else:
            logger.debug("No settings script in %s, single-project build", project_dir)

        catalog = _find_plugin_catalog(project_dir)

        known_paths = [":"] + included
        specs: list[ProjectSpec] = []
        for path in known_paths:
            spec = ProjectSpec(path)
            specs.append(spec)

            build = _find_script(_project_dir(project_dir, path), _BUILD_NAMES)
            if build is None:
                logger.debug("No build script for %s", path)
                continue
            content = _read_script(build)
            if content is None:
                continue

            plugins = _parse_plugins(content, catalog)
            spec.capabilities = capabilities_for_plugins(plugins)
            spec.dependencies = _parse_dependencies(content, known_paths)
            logger.debug(
                "%s: plugins %s, %d project dependencies",
                path,
                plugins,
                len(spec.dependencies),
            )

        return assemble_tree(name or project_dir.resolve().name, specs)
