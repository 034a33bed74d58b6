"""Renumber ``TS S.BB`` reference labels and ``ts-SSBB`` anchors in a style guide.

Each ``## `` header opens a new section and every reference bullet inside it
gets the next number in that section. Labels and anchors on the bullet line are
rewritten to match; every other line is passed through untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# Table of contents bullets sit above the first header and stay uncounted.
DEFAULT_SECTION_START = -1

SECTION_PREFIX = "## "
BARE_PREFIX = "  - [TS]"

_BARE_RE = re.compile(r"- \[TS\]")
_SINGLE_LABEL_RE = re.compile(r"- \[TS -?\d+\.\d+")
_DOUBLE_LABEL_RE = re.compile(r"- \[\[TS -?\d+\.\d+")
# Wider than four digits past 99; negative above the first header.
_ANCHOR_RE = re.compile(r"ts-(?:\d{4,}|-\d{3,})")


class LabelStyle(str, Enum):
    """Bullet grammar selector."""

    SINGLE = "single"
    DOUBLE = "double"

    @property
    def bullet_prefix(self) -> str:
        if self is LabelStyle.DOUBLE:
            return "  - [[TS "
        return "  - ["

    @property
    def label_open(self) -> str:
        if self is LabelStyle.DOUBLE:
            return "- [[TS "
        return "- [TS "


class LineKind(Enum):
    SECTION = "section"
    BULLET = "bullet"
    OTHER = "other"


@dataclass(frozen=True)
class SectionSummary:
    """A counted section and how many reference bullets it holds."""

    index: int
    title: str
    bullets: int = 0


@dataclass(frozen=True)
class RenumberState:
    """Accumulator threaded through the line fold."""

    section: int = DEFAULT_SECTION_START
    bullet: int = 0
    sections: tuple[SectionSummary, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RenumberResult:
    text: str
    sections: tuple[SectionSummary, ...] = ()
    changed_lines: int = 0

    @property
    def bullet_count(self) -> int:
        return sum(s.bullets for s in self.sections)


def classify_line(line: str, style: LabelStyle = LabelStyle.SINGLE) -> LineKind:
    """Classify a line: section header first, then reference bullet."""
    if line.startswith(SECTION_PREFIX):
        return LineKind.SECTION
    if line.startswith(style.bullet_prefix):
        return LineKind.BULLET
    return LineKind.OTHER


def format_label(section: int, bullet: int) -> str:
    """Human-readable label, e.g. ``TS 3.07``."""
    return f"TS {section}.{bullet:02d}"


def format_anchor(section: int, bullet: int) -> str:
    """Anchor token, e.g. ``ts-0307``. Values above 99 widen, never truncate."""
    return f"ts-{section:02d}{bullet:02d}"


def rewrite_bullet(
    line: str, section: int, bullet: int, style: LabelStyle = LabelStyle.SINGLE
) -> str:
    """Rewrite the label and anchors of one reference bullet."""
    label = format_label(section, bullet)
    anchor = format_anchor(section, bullet)

    if style is LabelStyle.SINGLE and line.startswith(BARE_PREFIX):
        full = f"- [{label}](#{anchor})<a name='{anchor}'></a> -"
        return _BARE_RE.sub(lambda _: full, line, count=1)

    label_re = _DOUBLE_LABEL_RE if style is LabelStyle.DOUBLE else _SINGLE_LABEL_RE
    numbered = f"{style.label_open}{section}.{bullet:02d}"
    line = label_re.sub(lambda _: numbered, line, count=1)
    return _ANCHOR_RE.sub(anchor, line)


def _with_bullet(sections: tuple[SectionSummary, ...]) -> tuple[SectionSummary, ...]:
    if not sections:
        return sections
    last = sections[-1]
    return sections[:-1] + (replace(last, bullets=last.bullets + 1),)


def step(
    state: RenumberState, line: str, style: LabelStyle = LabelStyle.SINGLE
) -> tuple[RenumberState, str]:
    """Advance the fold by one line, returning the new state and output line."""
    kind = classify_line(line, style)

    if kind is LineKind.SECTION:
        section = state.section + 1
        title = line[len(SECTION_PREFIX) :].strip()
        summary = SectionSummary(index=section, title=title)
        return RenumberState(section, 0, state.sections + (summary,)), line

    if kind is LineKind.BULLET:
        new_line = rewrite_bullet(line, state.section, state.bullet, style)
        return (
            RenumberState(
                state.section, state.bullet + 1, _with_bullet(state.sections)
            ),
            new_line,
        )

    return state, line


def renumber_text(
    text: str,
    style: LabelStyle = LabelStyle.SINGLE,
    section_start: int = DEFAULT_SECTION_START,
) -> RenumberResult:
    """Renumber every reference in ``text`` and return the trimmed document."""
    state = RenumberState(section=section_start)
    out: list[str] = []
    changed = 0

    for line in text.split("\n"):
        state, new_line = step(state, line, style)
        if new_line != line:
            changed += 1
        out.append(new_line)

    logger.debug(
        "Renumbered %d section(s), %d line(s) changed", len(state.sections), changed
    )
    return RenumberResult(
        text="\n".join(out).strip(),
        sections=state.sections,
        changed_lines=changed,
    )


def renumber_file(
    path: str | Path,
    style: LabelStyle = LabelStyle.SINGLE,
    section_start: int = DEFAULT_SECTION_START,
) -> RenumberResult:
    """Read ``path`` in full and renumber it. Read errors propagate."""
    content = Path(path).read_text(encoding="utf-8")
    logger.debug("Read %d bytes from %s", len(content), path)
    return renumber_text(content, style=style, section_start=section_start)
