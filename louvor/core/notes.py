"""
Note tables and pitch-class helpers.

Pitch classes are indexed 0-11 starting at C. Every index has two display
spellings, one from the sharp table and one from the flat table; the
index is the identity, the spelling is presentation only.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple
import logging

from music21 import interval

logger = logging.getLogger(__name__)


SHARP_NOTES: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
FLAT_NOTES: Tuple[str, ...] = (
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
)

# Returned by find_note_index() when nothing resolves
NOTE_NOT_FOUND = -1

_NON_NOTE_CHARS = re.compile(r"[^A-G#b]")


def find_note_index(note: str) -> int:
    """
    Resolve a note name to its pitch index.

    Anything that is not a note letter or accidental is stripped first, so
    chord qualities ("m7", "sus", "add9") do not get in the way. Only the
    leading root letter is case-insensitive: a lowercase ``b`` after it is
    always read as a flat.

    Args:
        note: Note name, optionally followed by a chord quality

    Returns:
        Pitch index 0-11, or NOTE_NOT_FOUND
    """
    if not note:
        return NOTE_NOT_FOUND

    cleaned = _NON_NOTE_CHARS.sub("", note[0].upper() + note[1:])

    if cleaned in SHARP_NOTES:
        return SHARP_NOTES.index(cleaned)
    if cleaned in FLAT_NOTES:
        return FLAT_NOTES.index(cleaned)

    return NOTE_NOT_FOUND


def semitones_between(note_a: str, note_b: str) -> int:
    """
    Count the semitones to move up from note_a to note_b.

    Returns:
        Value in [0, 11]. Also 0 when either note does not resolve, so
        0 does not guarantee both notes are the same.
    """
    index_a = find_note_index(note_a)
    index_b = find_note_index(note_b)

    if index_a == NOTE_NOT_FOUND or index_b == NOTE_NOT_FOUND:
        logger.debug(f"Cannot measure interval {note_a!r} -> {note_b!r}")
        return 0

    return (index_b - index_a) % 12


def note_name(index: int, sharp: bool = False) -> str:
    """Spell a pitch index using the sharp or flat table."""
    table = SHARP_NOTES if sharp else FLAT_NOTES
    return table[index % 12]


def get_semitone_options(
    min_semitones: int = -12,
    max_semitones: int = 12,
) -> List[Tuple[int, str, str]]:
    """
    Get the choices for a "transpose up/down" selector.

    Labels show the key reached when starting from C: sharps going up,
    flats going down.

    Returns:
        List of (offset, label, interval_name) tuples, e.g.
        (7, "+7 (G)", "Perfect Fifth up")
    """
    options = []
    for offset in range(min_semitones, max_semitones + 1):
        if offset == 0:
            label = "Original"
        else:
            label = f"{offset:+d} ({note_name(offset, sharp=offset > 0)})"
        options.append((offset, label, describe_interval(offset)))
    return options


def describe_interval(semitones: int) -> str:
    """
    Name a transposition like "Minor Third down".

    Args:
        semitones: Signed semitone count
    """
    name = interval.Interval(abs(semitones)).niceName
    if semitones > 0:
        return f"{name} up"
    if semitones < 0:
        return f"{name} down"
    return name


def parse_key_name(key_name: str) -> Optional[int]:
    """
    Resolve a key name such as "G", "Bb" or "F#m" to a pitch index.

    Returns:
        Pitch index, or None if the key name does not resolve
    """
    index = find_note_index(key_name.strip())
    return None if index == NOTE_NOT_FOUND else index
