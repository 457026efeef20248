"""Knowledge graph data models: nodes, relations, conflicts and contribution events."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

DEFAULT_CATEGORY = "knowledge"
DEFAULT_RELATION_TYPE = "related"
DEFAULT_LEVEL = 1
DEFAULT_IMPORTANCE = 50


class ValidationError(ValueError):
    """Raised when a node, relation, document or threshold is malformed."""


class NodeSource(str, Enum):
    """Which fusion input contributed to a node."""

    SOURCE = "source"
    TARGET = "target"


class ConflictType(str, Enum):
    NODE_NAME_CONFLICT = "node_name_conflict"


class ConflictResolution(str, Enum):
    """How a same-named node from the target input was handled."""

    MERGE = "merge"
    SKIP = "skip"


class ContributionKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    MERGE = "merge"


class FusionStrategy(str, Enum):
    """Policies for combining two node sets."""

    SMART = "smart"
    MERGE = "merge"
    ADD = "add"

    @classmethod
    def parse(cls, value: FusionStrategy | str | None) -> FusionStrategy | None:
        """Return the matching strategy, or None when *value* is not recognised."""
        if isinstance(value, FusionStrategy):
            return value
        if value is None:
            return None
        normalized = str(value).strip().lower()
        # The original service accepted an "ai_smart" alias that always ran smart fusion.
        if normalized == "ai_smart":
            return cls.SMART
        try:
            return cls(normalized)
        except ValueError:
            return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_threshold(value: float, name: str = "min_relation") -> float:
    """Validate a [0, 1] threshold and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= float(value) <= 1.0:
        raise ValidationError(f"{name} must lie in [0, 1], got {value}")
    return float(value)


@dataclass
class Node:
    """A concept in the knowledge graph, identified by its trimmed name."""

    name: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    level: int = DEFAULT_LEVEL
    importance: int = DEFAULT_IMPORTANCE
    position: tuple[float, float] = (0.0, 0.0)
    connection_count: int = 0
    contributor_count: int = 1
    sources: tuple[NodeSource, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(f"Node name must be a non-empty string, got {self.name!r}")
        self.name = self.name.strip()
        if self.description is None:
            self.description = ""
        if not isinstance(self.description, str):
            raise ValidationError(f"Node '{self.name}': description must be a string")
        if not isinstance(self.category, str) or not self.category:
            raise ValidationError(f"Node '{self.name}': category must be a non-empty string")
        if not _is_int(self.level) or self.level < 1:
            raise ValidationError(f"Node '{self.name}': level must be a positive integer, got {self.level!r}")
        if not _is_int(self.importance) or not 0 <= self.importance <= 100:
            raise ValidationError(
                f"Node '{self.name}': importance must be an integer in [0, 100], got {self.importance!r}"
            )
        if not _is_int(self.connection_count) or self.connection_count < 0:
            raise ValidationError(f"Node '{self.name}': connection_count must be >= 0")
        if not _is_int(self.contributor_count) or self.contributor_count < 1:
            raise ValidationError(f"Node '{self.name}': contributor_count must be >= 1")
        try:
            x, y = self.position
            self.position = (float(x), float(y))
        except (TypeError, ValueError):
            raise ValidationError(f"Node '{self.name}': position must be a pair of numbers") from None
        self.sources = _merge_sources(self.sources)

    def copy(self, **changes: Any) -> Node:
        """Return a validated copy with *changes* applied."""
        return dataclasses.replace(self, **changes)


def _merge_sources(*groups: Any) -> tuple[NodeSource, ...]:
    merged: list[NodeSource] = []
    for group in groups:
        for item in group or ():
            try:
                tag = NodeSource(item)
            except ValueError:
                raise ValidationError(f"Unknown node source tag: {item!r}") from None
            if tag not in merged:
                merged.append(tag)
    return tuple(merged)


_NODE_FIELDS = frozenset(f.name for f in dataclasses.fields(Node))


def union_sources(
    first: tuple[NodeSource, ...], second: tuple[NodeSource, ...]
) -> tuple[NodeSource, ...]:
    """Order-preserving union of two provenance tag tuples."""
    return _merge_sources(first, second)


@dataclass
class Relation:
    """An undirected, weighted edge between two distinct nodes."""

    source_name: str
    target_name: str
    relation_type: str = DEFAULT_RELATION_TYPE
    strength: float = 0.5
    contributor_count: int = 1

    def __post_init__(self) -> None:
        for attr in ("source_name", "target_name"):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Relation {attr} must be a non-empty string, got {value!r}")
            setattr(self, attr, value.strip())
        if self.source_name == self.target_name:
            raise ValidationError(f"Relation cannot reference itself: '{self.source_name}'")
        if isinstance(self.strength, bool) or not isinstance(self.strength, (int, float)):
            raise ValidationError(f"Relation strength must be a number, got {self.strength!r}")
        if not 0.0 <= self.strength <= 1.0:
            raise ValidationError(
                f"Relation {self.source_name}-{self.target_name}: strength {self.strength} outside [0, 1]"
            )
        self.strength = float(self.strength)
        if not _is_int(self.contributor_count) or self.contributor_count < 1:
            raise ValidationError("Relation contributor_count must be >= 1")

    @property
    def key(self) -> frozenset[str]:
        """Unordered endpoint pair identifying this relation within a graph."""
        return frozenset((self.source_name, self.target_name))


@dataclass(frozen=True)
class ConflictRecord:
    """A node name defined by both fusion inputs."""

    node_name: str
    resolution: ConflictResolution
    source_data: Node
    target_data: Node
    type: ConflictType = ConflictType.NODE_NAME_CONFLICT


@dataclass(frozen=True)
class ContributionEvent:
    """One immutable entry of the contribution audit trail."""

    node_name: str
    kind: ContributionKind
    after: Node
    contributor_id: str | None = None
    before: Node | None = None
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass
class Graph:
    """Name-keyed node map plus relation list, kept consistent on every mutation."""

    nodes: dict[str, Node] = field(default_factory=dict)
    relations: list[Relation] = field(default_factory=list)
    _relation_index: dict[frozenset[str], Relation] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._relation_index = {relation.key: relation for relation in self.relations}

    @classmethod
    def from_parts(cls, nodes: list[Node], relations: list[Relation] | None = None) -> Graph:
        """Build a graph, validating node uniqueness and relation endpoints."""
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for relation in relations or ():
            graph.add_relation(relation)
        return graph

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node_list(self) -> list[Node]:
        return list(self.nodes.values())

    def add_node(self, node: Node) -> Node:
        if node.name in self.nodes:
            raise ValidationError(f"Node already exists: '{node.name}'")
        self.nodes[node.name] = node
        return node

    def find_relation(self, name_a: str, name_b: str) -> Relation | None:
        return self._relation_index.get(frozenset((name_a, name_b)))

    def add_relation(self, relation: Relation) -> Relation:
        """Attach *relation* and bump connection_count on both endpoints."""
        for endpoint in (relation.source_name, relation.target_name):
            if endpoint not in self.nodes:
                raise ValidationError(f"Relation endpoint not in graph: '{endpoint}'")
        if self.find_relation(relation.source_name, relation.target_name) is not None:
            raise ValidationError(
                f"Relation already exists: {relation.source_name} - {relation.target_name}"
            )
        self.relations.append(relation)
        self._relation_index[relation.key] = relation
        for endpoint in (relation.source_name, relation.target_name):
            node = self.nodes[endpoint]
            node.connection_count += 1
        return relation

    def remove_relation(self, name_a: str, name_b: str) -> Relation:
        relation = self.find_relation(name_a, name_b)
        if relation is None:
            raise KeyError(f"Relation not found: {name_a} - {name_b}")
        self.relations.remove(relation)
        del self._relation_index[relation.key]
        for endpoint in (relation.source_name, relation.target_name):
            node = self.nodes[endpoint]
            node.connection_count = max(node.connection_count - 1, 0)
        return relation

    def update_node(self, node_name: str, /, **changes: Any) -> tuple[Node, Node]:
        """Apply attribute *changes* to a node; return (before, after) snapshots.

        Passing ``name=`` renames the node; the rename is propagated to
        every relation touching it.
        """
        if node_name not in self.nodes:
            raise KeyError(f"Node not found: '{node_name}'")
        unknown = sorted(set(changes) - _NODE_FIELDS)
        if unknown:
            raise ValidationError(f"Node '{node_name}': unknown attribute(s): {', '.join(unknown)}")
        if "connection_count" in changes:
            raise ValidationError("connection_count is derived from relations and cannot be set")
        before = self.nodes[node_name]
        after = before.copy(**changes)
        if after.name != node_name and after.name in self.nodes:
            raise ValidationError(f"Node already exists: '{after.name}'")

        # Rebuild the dict so a rename keeps the node's position in insertion order.
        self.nodes = {
            (after.name if key == node_name else key): (after if key == node_name else node)
            for key, node in self.nodes.items()
        }
        if after.name != node_name:
            for relation in self.relations:
                if node_name not in (relation.source_name, relation.target_name):
                    continue
                del self._relation_index[relation.key]
                if relation.source_name == node_name:
                    relation.source_name = after.name
                if relation.target_name == node_name:
                    relation.target_name = after.name
                self._relation_index[relation.key] = relation
        return before, after

    def filter_nodes(
        self,
        category: str | None = None,
        level: int | None = None,
        keyword: str | None = None,
        min_importance: int = 0,
        max_importance: int = 100,
    ) -> list[Node]:
        """Return nodes matching all given filters, most important first."""
        needle = keyword.strip().lower() if keyword and keyword.strip() else None
        matched: list[Node] = []
        for node in self.nodes.values():
            if category is not None and category != "all" and node.category != category:
                continue
            if level is not None and node.level != level:
                continue
            if needle is not None and needle not in node.name.lower() and needle not in node.description.lower():
                continue
            if not min_importance <= node.importance <= max_importance:
                continue
            matched.append(node)
        return sorted(matched, key=lambda n: n.importance, reverse=True)

    def subgraph_by_category(self, category: str) -> Graph:
        """Copy of the nodes in *category* and the relations between them."""
        sub = Graph()
        for node in self.nodes.values():
            if node.category == category:
                sub.add_node(node.copy(connection_count=0))
        for relation in self.relations:
            if relation.source_name in sub and relation.target_name in sub:
                sub.add_relation(dataclasses.replace(relation))
        return sub
