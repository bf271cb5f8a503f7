"""Edge trait detection and node classification rules."""

from __future__ import annotations

from typing import Callable, Iterable

from modgraph.model import (
    GENERIC_MANAGED,
    MOBILE_PLATFORM,
    MULTIPLATFORM,
    NONE,
    SCRIPT_TARGET,
    WEAK,
    Declaration,
    ProjectNode,
)

TraitPolicy = Callable[[Declaration], set[str]]
Rule = tuple[Callable[[ProjectNode], bool], str]

# ---------------------------------------------------------------------------
# Edge traits
# ---------------------------------------------------------------------------


def implementation_only(declaration: Declaration) -> set[str]:
    """Mark dependencies declared through ``*implementation`` configurations as weak.

    Matches ``implementation``, ``testImplementation``, ``debugImplementation``
    and so on; the suffix check ignores case.
    """
    if declaration.configuration.lower().endswith("implementation"):
        return {WEAK}
    return set()


DEFAULT_TRAIT_POLICIES: tuple[TraitPolicy, ...] = (implementation_only,)


def traits_for(
    declaration: Declaration, policies: Iterable[TraitPolicy] = DEFAULT_TRAIT_POLICIES
) -> set[str]:
    """Return the union of traits every policy reports for *declaration*."""
    traits: set[str] = set()
    for policy in policies:
        traits |= policy(declaration)
    return traits


# ---------------------------------------------------------------------------
# Node classification
# ---------------------------------------------------------------------------


def has_capability(tag: str) -> Callable[[ProjectNode], bool]:
    def _predicate(node: ProjectNode) -> bool:
        return tag in node.capabilities

    return _predicate


# First matching rule wins.
CLASSIFICATION_RULES: list[Rule] = [
    (has_capability(MULTIPLATFORM), MULTIPLATFORM),
    (has_capability(SCRIPT_TARGET), SCRIPT_TARGET),
    (has_capability(MOBILE_PLATFORM), MOBILE_PLATFORM),
    (has_capability(GENERIC_MANAGED), GENERIC_MANAGED),
]


def classify(node: ProjectNode, rules: Iterable[Rule] = CLASSIFICATION_RULES) -> str:
    """Return the category of *node*, or ``"none"`` when no rule matches."""
    for predicate, category in rules:
        if predicate(node):
            return category
    return NONE


# ---------------------------------------------------------------------------
# Build plugins -> capability tags
# ---------------------------------------------------------------------------

PLUGIN_CAPABILITIES: dict[str, str] = {
    "org.jetbrains.kotlin.multiplatform": MULTIPLATFORM,
    "org.jetbrains.kotlin.js": SCRIPT_TARGET,
    "com.android.library": MOBILE_PLATFORM,
    "com.android.application": MOBILE_PLATFORM,
    "java-library": GENERIC_MANAGED,
    "java": GENERIC_MANAGED,
}


def capabilities_for_plugins(plugins: Iterable[str]) -> set[str]:
    """Map applied plugin ids to the capability tags they imply."""
    return {PLUGIN_CAPABILITIES[p] for p in plugins if p in PLUGIN_CAPABILITIES}
