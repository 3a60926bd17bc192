"""Pattern matcher with trie-based path matching.

Unlike an app-level route table, a UI scope's patterns come and go as
route nodes mount and unmount, so the matcher supports removal as well
as insertion. Scopes never mutate a matcher they have already
published: they copy it, apply the change, and publish the copy as a
new ``MatcherSnapshot`` with a higher generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from waypost.errors import AmbiguousRouteError
from waypost.routing.pattern import (
    PatternSegment,
    SegmentKind,
    normalize_pattern,
    parse_pattern,
    split_path,
)

logger = logging.getLogger("waypost.matcher")


@dataclass(slots=True)
class RouteEntry:
    """A registered pattern and its opaque payload.

    Returned by ``PatternMatcher.register`` as the registration handle.
    """

    pattern: str
    segments: tuple[PatternSegment, ...]
    payload: Any = None

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.name for seg in self.segments if seg.name is not None)


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Result of a successful pattern match."""

    entry: RouteEntry
    params: dict[str, str | None]

    @property
    def payload(self) -> Any:
        return self.entry.payload


class _TrieNode:
    """A node in the pattern trie. Mutable only while a matcher is built."""

    __slots__ = (
        "constrained",
        "entries",
        "literals",
        "optional_entries",
        "param",
        "wildcard_entries",
    )

    def __init__(self) -> None:
        # Literal children: "templates" -> node
        self.literals: dict[str, _TrieNode] = {}
        # Constrained parameter children, keyed by their alternatives
        self.constrained: dict[frozenset[str], _TrieNode] = {}
        # Single unconstrained parameter child
        self.param: _TrieNode | None = None
        # Patterns ending exactly here (last registered wins)
        self.entries: list[RouteEntry] = []
        # Patterns whose omitted optional parameter would follow this node
        self.optional_entries: list[RouteEntry] = []
        # Patterns with a wildcard following this node
        self.wildcard_entries: list[RouteEntry] = []


class PatternMatcher:
    """Trie-based matcher for waypost patterns.

    Usage::

        matcher = PatternMatcher()
        matcher.register("/templates/:mode(edit|view)/:id?", payload)
        match = matcher.match("/templates/edit/123")
        match.params  # {"mode": "edit", "id": "123"}

    Candidate edges are tried literal, then constrained parameter, then
    parameter, then wildcard; the first full match wins.
    """

    __slots__ = ("_entries", "_root", "_strict")

    def __init__(self, *, strict: bool = False) -> None:
        self._root = _TrieNode()
        self._entries: dict[str, RouteEntry] = {}
        self._strict = strict

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pattern: object) -> bool:
        return isinstance(pattern, str) and normalize_pattern(pattern) in self._entries

    @property
    def entries(self) -> list[RouteEntry]:
        """Registered entries in registration order."""
        return list(self._entries.values())

    def register(self, pattern: str, payload: Any = None) -> RouteEntry:
        """Register *pattern* with *payload* and return its entry.

        Re-registering an identical pattern replaces the payload in place.
        Raises ``PatternError`` if the pattern is malformed.
        """
        key = normalize_pattern(pattern)
        existing = self._entries.get(key)
        if existing is not None:
            existing.payload = payload
            return existing

        entry = RouteEntry(pattern=key, segments=parse_pattern(key), payload=payload)
        try:
            self._insert(entry, report=True)
        except AmbiguousRouteError:
            # Drop any slots the rejected entry reached before the conflict
            self._rebuild()
            raise
        self._entries[key] = entry
        return entry

    def unregister(self, pattern: str) -> bool:
        """Remove *pattern*. Returns False (no-op) if it was never registered."""
        key = normalize_pattern(pattern)
        if self._entries.pop(key, None) is None:
            return False
        self._rebuild()
        return True

    def copy(self) -> PatternMatcher:
        """Return an independent matcher with the same entries, same order."""
        clone = PatternMatcher(strict=self._strict)
        for key, entry in self._entries.items():
            clone_entry = RouteEntry(entry.pattern, entry.segments, entry.payload)
            clone._insert(clone_entry, report=False)
            clone._entries[key] = clone_entry
        return clone

    def match(self, path: str) -> PatternMatch | None:
        """Match a concrete path. Returns ``None`` if nothing matches."""
        parts = split_path(path)
        result = self._match_node(self._root, parts, 0, ())
        if result is None:
            return None
        entry, captured = result
        params = dict(zip(entry.param_names, captured, strict=True))
        return PatternMatch(entry=entry, params=params)

    # -- Building ---------------------------------------------------------

    def _rebuild(self) -> None:
        self._root = _TrieNode()
        for entry in self._entries.values():
            self._insert(entry, report=False)

    def _insert(self, entry: RouteEntry, *, report: bool) -> None:
        node = self._root
        for seg in entry.segments:
            if seg.optional:
                self._push(node.optional_entries, entry, report=report)
            if seg.kind is SegmentKind.WILDCARD:
                self._push(node.wildcard_entries, entry, report=report)
                return
            node = self._child(node, seg, entry, report=report)
        self._push(node.entries, entry, report=report)

    def _child(
        self, node: _TrieNode, seg: PatternSegment, entry: RouteEntry, *, report: bool
    ) -> _TrieNode:
        if seg.kind is SegmentKind.LITERAL:
            assert seg.value is not None
            return node.literals.setdefault(seg.value, _TrieNode())

        if seg.kind is SegmentKind.CONSTRAINED:
            key = frozenset(seg.choices)
            if key not in node.constrained and report:
                for other in node.constrained:
                    overlap = key & other
                    if overlap:
                        self._ambiguous(
                            entry,
                            f"alternatives {sorted(overlap)} overlap {sorted(other)}",
                        )
            return node.constrained.setdefault(key, _TrieNode())

        if node.param is None:
            node.param = _TrieNode()
        return node.param

    def _push(self, slot: list[RouteEntry], entry: RouteEntry, *, report: bool) -> None:
        if report and slot:
            self._ambiguous(entry, f"same specificity as {slot[-1].pattern!r}")
        slot.append(entry)

    def _ambiguous(self, entry: RouteEntry, detail: str) -> None:
        msg = f"Ambiguous route {entry.pattern!r}: {detail}"
        if self._strict:
            raise AmbiguousRouteError(msg)
        logger.warning("%s; the newest registration wins", msg)

    # -- Matching ---------------------------------------------------------

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        captured: tuple[str | None, ...],
    ) -> tuple[RouteEntry, tuple[str | None, ...]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed: exact terminal beats an omitted optional
        if index == len(parts):
            if node.entries:
                return node.entries[-1], captured
            if node.optional_entries:
                return node.optional_entries[-1], (*captured, None)
            return None

        part = parts[index]

        # 1. Literal child
        child = node.literals.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, captured)
            if result is not None:
                return result

        # 2. Constrained parameters, newest first
        for choices, child in reversed(node.constrained.items()):
            if part in choices:
                result = self._match_node(child, parts, index + 1, (*captured, part))
                if result is not None:
                    return result

        # 3. Unconstrained parameter
        if node.param is not None:
            result = self._match_node(node.param, parts, index + 1, (*captured, part))
            if result is not None:
                return result

        # 4. Wildcard consumes the rest
        if node.wildcard_entries:
            return node.wildcard_entries[-1], (*captured, "/".join(parts[index:]))

        return None


@dataclass(frozen=True, slots=True)
class MatcherSnapshot:
    """A published matcher tagged with its generation.

    Dependents compare ``generation`` to detect a change; the matcher
    inside a snapshot is never mutated again.
    """

    generation: int
    matcher: PatternMatcher = field(default_factory=PatternMatcher)
