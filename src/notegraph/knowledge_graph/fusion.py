"""Fusion engine: merges two contributors' node sets into one graph."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from notegraph.knowledge_graph.ledger import ContributionLedger
from notegraph.knowledge_graph.models import (
    ConflictRecord,
    ConflictResolution,
    ContributionEvent,
    FusionStrategy,
    Graph,
    Node,
    NodeSource,
    Relation,
    ValidationError,
    check_threshold,
    union_sources,
)
from notegraph.knowledge_graph.serialization import node_from_dict
from notegraph.knowledge_graph.synthesizer import RelationSynthesizer, StrengthFn

_logger = logging.getLogger(__name__)

NodeInput = Union[Node, Mapping[str, Any]]


@dataclass
class FusionResult:
    """Unified graph, conflict log and the contribution events of one fusion."""

    strategy: FusionStrategy
    graph: Graph
    conflicts: list[ConflictRecord] = field(default_factory=list)
    events: list[ContributionEvent] = field(default_factory=list)

    @property
    def nodes(self) -> list[Node]:
        return self.graph.node_list()

    @property
    def relations(self) -> list[Relation]:
        return list(self.graph.relations)


@dataclass
class _FusionInputs:
    source: list[Node]
    target: list[Node]
    min_relation: float
    source_contributor: str | None
    target_contributor: str | None
    strength_fn: StrengthFn | None


def coerce_nodes(items: Iterable[NodeInput] | None, field_name: str) -> list[Node]:
    """Validate and copy a node list, naming the offending index on failure."""
    if items is None:
        return []
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        raise ValidationError(f"{field_name} must be a list of nodes")

    nodes: list[Node] = []
    first_seen: dict[str, int] = {}
    for index, item in enumerate(items):
        if isinstance(item, Node):
            node = item.copy()
        elif isinstance(item, Mapping):
            try:
                node = node_from_dict(item)
            except ValidationError as exc:
                raise ValidationError(f"{field_name}[{index}]: {exc}") from exc
        else:
            raise ValidationError(
                f"{field_name}[{index}]: expected a node, got {type(item).__name__}"
            )
        if node.name in first_seen:
            raise ValidationError(
                f"{field_name}[{index}]: duplicate node name '{node.name}' "
                f"(first defined at index {first_seen[node.name]})"
            )
        first_seen[node.name] = index
        nodes.append(node)
    return nodes


class FusionEngine:
    """Applies a fusion strategy to a source and an optional target node set.

    Strategies share one canonical name-keyed map:

    - ``smart``: merge same-named nodes, then synthesize relations.
    - ``merge``: merge same-named nodes, never emit relations.
    - ``add``: union; a same-named target node is skipped.

    Everything is validated before the merge pass starts, and events reach
    the caller's ledger only once the result is complete.
    """

    def __init__(
        self,
        default_strategy: FusionStrategy | str = FusionStrategy.SMART,
        strength_fn: StrengthFn | None = None,
    ) -> None:
        self._default_strategy = FusionStrategy.parse(default_strategy) or FusionStrategy.SMART
        self._strength_fn = strength_fn
        self._strategies: dict[FusionStrategy, Callable[[_FusionInputs], FusionResult]] = {
            FusionStrategy.SMART: self._fuse_smart,
            FusionStrategy.MERGE: self._fuse_merge,
            FusionStrategy.ADD: self._fuse_add,
        }

    def resolve_strategy(self, strategy: FusionStrategy | str | None) -> FusionStrategy:
        if strategy is None:
            return self._default_strategy
        parsed = FusionStrategy.parse(strategy)
        if parsed is None:
            _logger.warning("unknown fusion strategy %r; falling back to smart", strategy)
            return FusionStrategy.SMART
        return parsed

    def fuse(
        self,
        source_nodes: Iterable[NodeInput],
        target_nodes: Iterable[NodeInput] | None = None,
        strategy: FusionStrategy | str | None = None,
        min_relation: float = 0.3,
        *,
        source_contributor: str | None = None,
        target_contributor: str | None = None,
        ledger: ContributionLedger | None = None,
        strength_fn: StrengthFn | None = None,
    ) -> FusionResult:
        """Fuse *target_nodes* into *source_nodes*.

        Args:
            source_nodes: Non-empty list of nodes (``Node`` or mapping).
            target_nodes: Optional second node list.
            strategy: ``smart``, ``merge`` or ``add``; unknown values fall back to smart.
            min_relation: Relation threshold used by ``smart``.
            source_contributor: Contributor credited for source-side events.
            target_contributor: Contributor credited for target-side events.
            ledger: When given, receives every event of a successful fusion.
            strength_fn: Overrides the structural relation scorer for this call.

        Raises:
            ValidationError: On malformed input; nothing is produced or recorded.
        """
        source = coerce_nodes(source_nodes, "source_nodes")
        if not source:
            raise ValidationError("source_nodes must contain at least one node")
        target = coerce_nodes(target_nodes, "target_nodes")
        threshold = check_threshold(min_relation)
        resolved = self.resolve_strategy(strategy)

        inputs = _FusionInputs(
            source=source,
            target=target,
            min_relation=threshold,
            source_contributor=source_contributor,
            target_contributor=target_contributor,
            strength_fn=strength_fn or self._strength_fn,
        )
        result = self._strategies[resolved](inputs)

        if ledger is not None:
            ledger.extend(result.events)
        _logger.info(
            "fusion %s: %d source + %d target -> %d nodes, %d relations, %d conflicts",
            resolved.value,
            len(source),
            len(target),
            len(result.graph),
            len(result.graph.relations),
            len(result.conflicts),
        )
        return result

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _fuse_smart(self, inputs: _FusionInputs) -> FusionResult:
        result = self._merge_pass(inputs, FusionStrategy.SMART)
        synthesizer = RelationSynthesizer(inputs.min_relation, strength_fn=inputs.strength_fn)
        for relation in synthesizer.synthesize(result.graph.node_list()):
            result.graph.add_relation(relation)
        return result

    def _fuse_merge(self, inputs: _FusionInputs) -> FusionResult:
        return self._merge_pass(inputs, FusionStrategy.MERGE)

    def _fuse_add(self, inputs: _FusionInputs) -> FusionResult:
        pending = ContributionLedger()
        conflicts: list[ConflictRecord] = []
        canonical: dict[str, Node] = {}

        for node in inputs.source:
            canonical[node.name] = node
            pending.record_create(node, inputs.source_contributor)

        for incoming in inputs.target:
            existing = canonical.get(incoming.name)
            if existing is not None:
                conflicts.append(
                    ConflictRecord(
                        node_name=incoming.name,
                        resolution=ConflictResolution.SKIP,
                        source_data=existing.copy(),
                        target_data=incoming.copy(),
                    )
                )
                _logger.debug("add: kept source node '%s', skipped target copy", incoming.name)
                continue
            canonical[incoming.name] = incoming
            pending.record_create(incoming, inputs.target_contributor)

        return FusionResult(
            strategy=FusionStrategy.ADD,
            graph=Graph.from_parts(list(canonical.values())),
            conflicts=conflicts,
            events=list(pending.events),
        )

    # ------------------------------------------------------------------
    # Shared merge policy
    # ------------------------------------------------------------------

    @staticmethod
    def _merge_nodes(existing: Node, incoming: Node) -> Node:
        """Existing attributes win except importance (max) and provenance (union)."""
        return existing.copy(
            description=existing.description or incoming.description,
            importance=max(existing.importance, incoming.importance),
            sources=union_sources(existing.sources, (NodeSource.TARGET,)),
            contributor_count=existing.contributor_count + 1,
        )

    def _merge_pass(self, inputs: _FusionInputs, strategy: FusionStrategy) -> FusionResult:
        pending = ContributionLedger()
        conflicts: list[ConflictRecord] = []
        canonical: dict[str, Node] = {}

        for node in inputs.source:
            seeded = node.copy(sources=(NodeSource.SOURCE,), contributor_count=1, connection_count=0)
            canonical[seeded.name] = seeded
            pending.record_create(seeded, inputs.source_contributor)

        for incoming in inputs.target:
            existing = canonical.get(incoming.name)
            if existing is None:
                inserted = incoming.copy(
                    sources=(NodeSource.TARGET,), contributor_count=1, connection_count=0
                )
                canonical[inserted.name] = inserted
                pending.record_create(inserted, inputs.target_contributor)
                continue

            conflicts.append(
                ConflictRecord(
                    node_name=incoming.name,
                    resolution=ConflictResolution.MERGE,
                    source_data=existing.copy(),
                    target_data=incoming.copy(),
                )
            )
            merged = self._merge_nodes(existing, incoming)
            canonical[merged.name] = merged
            pending.record_merge(existing, merged, inputs.target_contributor)
            _logger.debug(
                "%s: merged '%s' (contributors=%d)",
                strategy.value,
                merged.name,
                merged.contributor_count,
            )

        return FusionResult(
            strategy=strategy,
            graph=Graph.from_parts(list(canonical.values())),
            conflicts=conflicts,
            events=list(pending.events),
        )


def fuse(
    source_nodes: Iterable[NodeInput],
    target_nodes: Iterable[NodeInput] | None = None,
    strategy: FusionStrategy | str | None = FusionStrategy.SMART,
    min_relation: float = 0.3,
    **kwargs: Any,
) -> FusionResult:
    """Module-level shortcut for ``FusionEngine().fuse(...)``."""
    return FusionEngine().fuse(source_nodes, target_nodes, strategy, min_relation, **kwargs)
