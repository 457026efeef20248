"""Tag co-occurrence analysis over tagged notes."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from notegraph.knowledge_graph.models import ValidationError, check_threshold

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """A note reduced to its identifier and ordered tag list."""

    id: str
    tags: tuple[str, ...] = ()

    def unique_tags(self) -> list[str]:
        """Trimmed, non-empty tags in first-seen order, duplicates removed."""
        seen: list[str] = []
        for tag in self.tags:
            if not isinstance(tag, str):
                raise ValidationError(f"Document '{self.id}': tag must be a string, got {tag!r}")
            cleaned = tag.strip()
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return seen


@dataclass(frozen=True)
class TagPair:
    """Two tags that appear together, with their co-occurrence ratio."""

    tag_a: str
    tag_b: str
    ratio: float
    common: int
    count_a: int
    count_b: int


@dataclass
class TagAnalysis:
    """Result of analysing a document collection."""

    tags: list[str] = field(default_factory=list)
    frequency: dict[str, int] = field(default_factory=dict)
    documents_by_tag: dict[str, list[str]] = field(default_factory=dict)
    pairs: list[TagPair] = field(default_factory=list)
    document_count: int = 0
    min_relation: float = 0.3

    @property
    def max_frequency(self) -> int:
        return max(self.frequency.values(), default=0)


class CoOccurrenceAnalyzer:
    """Counts tag frequency and pairwise co-occurrence across documents.

    For every pair of distinct tags sharing at least one document::

        ratio = |docs(a) & docs(b)| / min(|docs(a)|, |docs(b)|)

    Pairs below ``min_relation`` are dropped. Pair order follows tag
    discovery order (outer tag first), so identical input order always
    gives identical output.
    """

    DEFAULT_MIN_RELATION: float = 0.3

    def __init__(self, min_relation: float = DEFAULT_MIN_RELATION) -> None:
        self._min_relation = check_threshold(min_relation)

    @property
    def min_relation(self) -> float:
        return self._min_relation

    def analyze(self, documents: Iterable[Document]) -> TagAnalysis:
        docs = list(documents)
        analysis = TagAnalysis(document_count=len(docs), min_relation=self._min_relation)

        tag_index: dict[str, int] = {}
        doc_tags: list[list[int]] = []
        for doc in docs:
            indices: list[int] = []
            for tag in doc.unique_tags():
                if tag not in tag_index:
                    tag_index[tag] = len(analysis.tags)
                    analysis.tags.append(tag)
                    analysis.frequency[tag] = 0
                    analysis.documents_by_tag[tag] = []
                analysis.frequency[tag] += 1
                analysis.documents_by_tag[tag].append(doc.id)
                indices.append(tag_index[tag])
            doc_tags.append(indices)

        if len(analysis.tags) < 2:
            return analysis

        # Document x tag incidence matrix; its Gram matrix holds the shared-document counts.
        incidence = np.zeros((len(docs), len(analysis.tags)), dtype=np.int64)
        for row, indices in enumerate(doc_tags):
            incidence[row, indices] = 1
        common = incidence.T @ incidence

        tags = analysis.tags
        for i in range(len(tags)):
            count_a = analysis.frequency[tags[i]]
            for j in range(i + 1, len(tags)):
                shared = int(common[i, j])
                if shared == 0:
                    continue
                count_b = analysis.frequency[tags[j]]
                ratio = shared / min(count_a, count_b)
                if ratio < self._min_relation:
                    continue
                analysis.pairs.append(
                    TagPair(
                        tag_a=tags[i],
                        tag_b=tags[j],
                        ratio=ratio,
                        common=shared,
                        count_a=count_a,
                        count_b=count_b,
                    )
                )

        _logger.debug(
            "analyzed %d documents: %d tags, %d pairs >= %.2f",
            len(docs),
            len(tags),
            len(analysis.pairs),
            self._min_relation,
        )
        return analysis


def make_documents(items: Sequence[tuple[str, Sequence[str]]]) -> list[Document]:
    """Convenience constructor from ``(id, tags)`` tuples."""
    return [Document(id=str(doc_id), tags=tuple(tags)) for doc_id, tags in items]
