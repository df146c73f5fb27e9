"""Heuristic section segmentation of extracted retrospective text.

The first non-empty line is the document title. The remaining lines are
walked one at a time; each line is classified against the known section
labels and the current state, and the resulting action decides whether the
line opens a section, becomes content, or is dropped.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

UNTITLED = "Untitled"
FULL_TEXT_SECTION = "Full text"
ADHOC_HEADER_MAX_WORDS = 5

# Order matters: the first label contained in a line wins.
KNOWN_SECTIONS: tuple[str, ...] = (
    "Meeting context",
    "Summary",
    "Team actions",
    "Actions from this retrospective",
    "Other open actions",
    "Team agreements",
    "What went well?",
    "What went less well?",
    "What do we want to try next?",
    "What puzzles us?",
)


class LineAction(str, Enum):
    START_KNOWN = "start_known"
    START_ADHOC = "start_adhoc"
    APPEND = "append"
    DROP = "drop"


# (contains known label, section active, looks like ad-hoc header) -> action
DECISION_TABLE: dict[tuple[bool, bool, bool], LineAction] = {
    (True, False, False): LineAction.START_KNOWN,
    (True, False, True): LineAction.START_KNOWN,
    (True, True, False): LineAction.START_KNOWN,
    (True, True, True): LineAction.START_KNOWN,
    (False, False, True): LineAction.START_ADHOC,
    (False, False, False): LineAction.DROP,
    (False, True, True): LineAction.APPEND,
    (False, True, False): LineAction.APPEND,
}


@dataclass(frozen=True)
class SegmentedDocument:
    title: str
    sections: dict[str, str] = field(default_factory=dict)


@dataclass
class SectionState:
    """Walk state: no section is open while ``label`` is None or empty."""

    label: str | None = None
    buffer: list[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.label)

    def flush(self, sections: dict[str, str]) -> None:
        # Assigning to an existing key keeps its original position.
        if self.label and self.buffer:
            sections[self.label] = "\n".join(self.buffer)

    def start(self, label: str, sections: dict[str, str]) -> None:
        self.flush(sections)
        self.label = label
        self.buffer = []


def split_lines(text: str) -> list[str]:
    stripped = (line.strip() for line in text.split("\n"))
    return [line for line in stripped if line]


def match_known_section(line: str, catalog: Sequence[str] = KNOWN_SECTIONS) -> str | None:
    lowered = line.lower()
    for label in catalog:
        if label.lower() in lowered:
            return label
    return None


def looks_like_adhoc_header(line: str) -> bool:
    # Grouping kept as observed: the word limit only applies to questions.
    return (len(line.split()) <= ADHOC_HEADER_MAX_WORDS and line.endswith("?")) or line.endswith(
        ":"
    )


def clean_adhoc_header(line: str) -> str:
    return line.rstrip("?:").strip()


def classify_line(
    line: str,
    state: SectionState,
    catalog: Sequence[str] = KNOWN_SECTIONS,
) -> tuple[LineAction, str | None]:
    """Return the action for ``line`` and the label it opens, if any."""
    known = match_known_section(line, catalog)
    action = DECISION_TABLE[(known is not None, state.active, looks_like_adhoc_header(line))]
    if action is LineAction.START_KNOWN:
        return action, known
    if action is LineAction.START_ADHOC:
        return action, clean_adhoc_header(line)
    return action, None


def segment_lines(
    lines: Sequence[str],
    catalog: Sequence[str] = KNOWN_SECTIONS,
) -> SegmentedDocument:
    if not lines:
        return SegmentedDocument(UNTITLED, {})
    title = lines[0]
    body = lines[1:]
    if not any(match_known_section(line, catalog) for line in body):
        if not body:
            return SegmentedDocument(title, {})
        return SegmentedDocument(title, {FULL_TEXT_SECTION: "\n".join(body)})

    sections: dict[str, str] = {}
    state = SectionState()
    for line in body:
        action, label = classify_line(line, state, catalog)
        if action is LineAction.START_KNOWN or action is LineAction.START_ADHOC:
            assert label is not None
            state.start(label, sections)
        elif action is LineAction.APPEND:
            state.buffer.append(line)
    state.flush(sections)
    return SegmentedDocument(title, sections)


def segment_sections(text: str, catalog: Sequence[str] = KNOWN_SECTIONS) -> SegmentedDocument:
    """Split normalized document text into a title and titled sections."""
    return segment_lines(split_lines(text), catalog)
