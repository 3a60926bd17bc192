"""Path pattern parsing.

Pattern syntax (stable — route declarations are written against it)::

    /templates                    literal segment
    /templates/:id                parameter, captures one segment
    /templates/:mode(edit|view)   constrained parameter, one of the alternatives
    /templates/:id?               optional parameter, final segment only
    /files/*rest                  wildcard, final segment only, captures the rest

Leading and trailing slashes are insignificant and empty segments are
dropped, so ``/a/`` and ``a`` name the same pattern.
"""

import re
from dataclasses import dataclass
from enum import IntEnum

from waypost.errors import PatternError

_PARAM_RE = re.compile(
    r"^:(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?:\((?P<choices>[^()]*)\))?(?P<optional>\?)?$"
)
_WILDCARD_RE = re.compile(r"^\*(?P<name>[A-Za-z_][A-Za-z0-9_]*)?$")


class SegmentKind(IntEnum):
    """Segment kinds, ordered from most to least specific."""

    LITERAL = 0
    CONSTRAINED = 1
    PARAM = 2
    WILDCARD = 3


@dataclass(frozen=True, slots=True)
class PatternSegment:
    """A parsed segment of a route pattern.

    Literal:      ``templates``          (kind=LITERAL, value="templates")
    Param:        ``:id``                (kind=PARAM, name="id")
    Constrained:  ``:mode(edit|view)``   (kind=CONSTRAINED, choices=("edit", "view"))
    Wildcard:     ``*rest``              (kind=WILDCARD, name="rest")
    """

    raw: str
    kind: SegmentKind
    value: str | None = None
    name: str | None = None
    choices: tuple[str, ...] = ()
    optional: bool = False

    @property
    def captures(self) -> bool:
        return self.kind is not SegmentKind.LITERAL

    def accepts(self, part: str) -> bool:
        """Whether a single concrete path segment satisfies this segment."""
        if self.kind is SegmentKind.LITERAL:
            return part == self.value
        if self.kind is SegmentKind.CONSTRAINED:
            return part in self.choices
        return True


def split_path(path: str) -> list[str]:
    """Split a concrete path into its non-empty segments.

    Examples::

        "/"                  -> []
        "/templates/edit/"   -> ["templates", "edit"]
    """
    return [part for part in path.strip("/").split("/") if part]


def normalize_pattern(pattern: str) -> str:
    """Return the canonical spelling used for pattern identity."""
    return "/" + "/".join(split_path(pattern))


def parse_segment(pattern: str, part: str) -> PatternSegment:
    """Parse one segment of *pattern*. Raises ``PatternError`` if malformed."""
    if part.startswith(":"):
        if "(" in part and not part.rstrip("?").endswith(")"):
            raise PatternError(pattern, f"unterminated parameter group in {part!r}")
        m = _PARAM_RE.match(part)
        if m is None:
            raise PatternError(pattern, f"malformed parameter segment {part!r}")
        optional = m.group("optional") is not None
        choices_src = m.group("choices")
        if choices_src is None:
            return PatternSegment(
                raw=part, kind=SegmentKind.PARAM, name=m.group("name"), optional=optional
            )
        choices = tuple(choices_src.split("|"))
        if not all(choices):
            raise PatternError(pattern, f"empty alternative in {part!r}")
        return PatternSegment(
            raw=part,
            kind=SegmentKind.CONSTRAINED,
            name=m.group("name"),
            choices=choices,
            optional=optional,
        )

    if part.startswith("*"):
        if part.endswith("?"):
            raise PatternError(pattern, f"wildcard {part!r} cannot be optional")
        m = _WILDCARD_RE.match(part)
        if m is None:
            raise PatternError(pattern, f"malformed wildcard segment {part!r}")
        return PatternSegment(raw=part, kind=SegmentKind.WILDCARD, name=m.group("name") or "*")

    if part.endswith("?"):
        raise PatternError(pattern, f"only parameter segments can be optional, got {part!r}")
    if "(" in part or ")" in part:
        raise PatternError(pattern, f"parameter group outside a parameter in {part!r}")
    return PatternSegment(raw=part, kind=SegmentKind.LITERAL, value=part)


def parse_pattern(pattern: str) -> tuple[PatternSegment, ...]:
    """Parse a route pattern into segments, validating the whole pattern.

    Examples::

        "/"                          -> ()
        "/templates/:id"             -> (LITERAL "templates", PARAM "id")
        "/templates/:mode(edit|view)/:id?"
            -> (LITERAL, CONSTRAINED "mode" (edit, view), PARAM "id" optional)

    Raises ``PatternError`` for unterminated groups, misplaced or repeated
    wildcards, non-final optional segments, and duplicate parameter names.
    """
    segments = tuple(parse_segment(pattern, part) for part in split_path(pattern))

    wildcards = [i for i, seg in enumerate(segments) if seg.kind is SegmentKind.WILDCARD]
    if len(wildcards) > 1:
        raise PatternError(pattern, "more than one wildcard segment")
    if wildcards and wildcards[0] != len(segments) - 1:
        raise PatternError(pattern, "wildcard must be the final segment")

    for seg in segments[:-1]:
        if seg.optional:
            raise PatternError(pattern, f"optional segment {seg.raw!r} must be the final segment")

    seen: set[str] = set()
    for seg in segments:
        if seg.name is None:
            continue
        if seg.name in seen:
            raise PatternError(pattern, f"duplicate parameter name {seg.name!r}")
        seen.add(seg.name)

    return segments
