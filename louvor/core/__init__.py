"""
Core module for louvor.

Contains the note tables and the chord transposer.
"""

from louvor.core.notes import (
    SHARP_NOTES,
    FLAT_NOTES,
    NOTE_NOT_FOUND,
    find_note_index,
    semitones_between,
    get_semitone_options,
    describe_interval,
)
from louvor.core.transposer import (
    ChordMatch,
    TransposeError,
    transpose,
    transpose_line,
    transpose_chord,
    transpose_note,
    find_chords,
    is_chord_line,
    is_isolated_chord,
    resolve_shift,
)

__all__ = [
    "SHARP_NOTES",
    "FLAT_NOTES",
    "NOTE_NOT_FOUND",
    "find_note_index",
    "semitones_between",
    "get_semitone_options",
    "describe_interval",
    "ChordMatch",
    "TransposeError",
    "transpose",
    "transpose_line",
    "transpose_chord",
    "transpose_note",
    "find_chords",
    "is_chord_line",
    "is_isolated_chord",
    "resolve_shift",
]
