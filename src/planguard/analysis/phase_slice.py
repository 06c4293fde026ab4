"""Narrow plan text to the section of a single ``# PHASE <n>`` header."""

from __future__ import annotations

import re


_LINE_SPLIT_RE = re.compile(r"\r?\n")
_ANY_PHASE_RE = re.compile(r"^#\s*PHASE\s+([0-9]+)\b", re.IGNORECASE)


def _phase_header_re(phase: int) -> re.Pattern[str]:
    return re.compile(rf"^#\s*PHASE\s+{phase}\b", re.IGNORECASE)


def _lines(text: str) -> list[str]:
    return _LINE_SPLIT_RE.split(text)


def find_phase_header(text: str, phase: int) -> int | None:
    """Return the line index of the header for ``phase``, or None."""
    if phase <= 0:
        raise ValueError(f"phase must be a positive integer: {phase}")
    header_re = _phase_header_re(phase)
    for index, line in enumerate(_lines(text)):
        if header_re.match(line.strip()):
            return index
    return None


def slice_to_phase(text: str, phase: int) -> str:
    """Return the lines from the ``# PHASE <phase>`` header up to the next phase header.

    The slice is empty when the plan has no header for ``phase``; callers
    treat that as a failed precondition rather than an empty phase.
    """
    start = find_phase_header(text, phase)
    if start is None:
        return ""
    lines = _lines(text)
    end = len(lines)
    for index in range(start + 1, len(lines)):
        if _ANY_PHASE_RE.match(lines[index].strip()):
            end = index
            break
    return "\n".join(lines[start:end])


def phase_numbers(text: str) -> list[int]:
    numbers: set[int] = set()
    for line in _lines(text):
        match = _ANY_PHASE_RE.match(line.strip())
        if match is not None:
            numbers.add(int(match.group(1)))
    return sorted(numbers)
