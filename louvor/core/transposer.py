"""
Chord Transposer - Shift chord symbols in chord sheets by semitones.

Chord sheets ("cifras") are free text where chord symbols sit on their
own lines or inline with lyrics. Every chord token is shifted and all
other text is kept byte for byte.

Chord grammar:
    ROOT [ACCIDENTAL] [QUALITY...] [/BASS [ACCIDENTAL]]

    ROOT        A-G (uppercase)
    ACCIDENTAL  # or b
    QUALITY     maj, min, dim, aug, sus, add, m, M, º, °, 13, 11, 9, 7, 6, 5, 4, 2
                (any number, concatenated: Cmaj7, Dm7, Gsus4, Eadd9, Bº)

Examples:
    C G Am F      +2  ->  D A Bm G
    C# F#         +1  ->  D G
    C/E           +2  ->  D/Gb

Spelling follows the original token: a token containing "#" is respelled
from the sharp table, anything else from the flat table. Tokens whose
root does not resolve are returned unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional
import logging

from louvor.core.notes import (
    SHARP_NOTES,
    FLAT_NOTES,
    NOTE_NOT_FOUND,
    find_note_index,
    parse_key_name,
)

logger = logging.getLogger(__name__)


# Longest alternatives first so "maj" wins over "m"
CHORD_QUALITIES = (
    "maj", "min", "dim", "aug", "sus", "add",
    "13", "11", "9", "7", "6", "5", "4", "2",
    "m", "M", "º", "°",
)

_QUALITY = "(?:" + "|".join(CHORD_QUALITIES) + ")"

CHORD_PATTERN = re.compile(
    r"(?<!\w)"
    r"[A-G][#b]?"
    + _QUALITY + r"*"
    r"(?:/[A-G][#b]?)?"
    r"(?![\w#])"
)

_NOTE_CHARS = re.compile(r"[A-G#b]")
_LOWERCASE = re.compile(r"[a-z]")
_CHORD_LETTERS = re.compile(r"[A-G]")
_WORD_CONTEXT = re.compile(r"[a-z]{2,}")


class TransposeError(ValueError):
    """Raised when a transposition amount cannot be worked out."""


@dataclass(frozen=True)
class ChordMatch:
    """A chord token found in a document."""
    line: int  # 0-based line number
    start: int  # column where the token starts
    end: int  # column just past the token
    text: str


def transpose_note(note: str, semitones: int) -> str:
    """
    Transpose a single chord token without a slash bass.

    Args:
        note: Chord token such as "C", "F#m", "Bb7"
        semitones: Signed semitone count

    Returns:
        The transposed token, or the token unchanged if it has no
        recognizable root
    """
    index = find_note_index(note)
    if index == NOTE_NOT_FOUND:
        logger.debug(f"Leaving unrecognized chord token: {note!r}")
        return note

    new_index = (index + semitones) % 12
    table = SHARP_NOTES if "#" in note else FLAT_NOTES

    suffix = _NOTE_CHARS.sub("", note)
    return table[new_index] + suffix


def transpose_chord(chord: str, semitones: int) -> str:
    """
    Transpose a chord token, including slash chords like "C/E".

    Both sides of a slash chord are transposed independently, each keeping
    its own sharp/flat spelling.
    """
    if "/" in chord:
        upper, bass = chord.split("/", 1)
        return f"{transpose_note(upper, semitones)}/{transpose_note(bass, semitones)}"
    return transpose_note(chord, semitones)


def transpose_line(line: str, semitones: int) -> str:
    """Transpose every chord token found in a single line."""
    return CHORD_PATTERN.sub(
        lambda match: transpose_chord(match.group(0), semitones),
        line,
    )


def transpose(text: str, semitones: int, chord_lines_only: bool = False) -> str:
    """
    Transpose a whole chord sheet.

    Args:
        text: Chord sheet, lines separated by "\\n"
        semitones: Signed semitone count (positive = up)
        chord_lines_only: Only touch chord lines and chords standing
            alone on lyric lines, leaving the lyrics themselves alone

    Returns:
        The transposed chord sheet with the original line breaks
    """
    lines = text.split("\n")

    transposed = []
    for line in lines:
        if chord_lines_only and not is_chord_line(line):
            transposed.append(_transpose_isolated(line, semitones))
        else:
            transposed.append(transpose_line(line, semitones))

    return "\n".join(transposed)


def _transpose_isolated(line: str, semitones: int) -> str:
    def replace(match: re.Match) -> str:
        if is_isolated_chord(line, match.start(), match.end()):
            return transpose_chord(match.group(0), semitones)
        return match.group(0)

    return CHORD_PATTERN.sub(replace, line)


def is_isolated_chord(line: str, start: int, end: int) -> bool:
    """
    Check whether the chord token at line[start:end] stands on its own.

    The token must start the line or follow whitespace, "[" or "(", and
    end the line or precede whitespace, "]", ")" or "/". No run of two
    lowercase letters may sit in the 2 characters before joined with
    the 3 characters after it ("A graça" is a word, "[G]" is a chord).
    """
    before = line[start - 1] if start > 0 else ""
    after = line[end] if end < len(line) else ""

    if before and not (before.isspace() or before in "[("):
        return False
    if after and not (after.isspace() or after in "])/"):
        return False

    context = line[max(0, start - 2):start] + line[end:end + 3]
    return _WORD_CONTEXT.search(context) is None


def find_chords(text: str) -> List[ChordMatch]:
    """
    Locate every chord token in a chord sheet.

    Returns:
        ChordMatch entries in reading order
    """
    matches = []
    for line_num, line in enumerate(text.split("\n")):
        for match in CHORD_PATTERN.finditer(line):
            matches.append(ChordMatch(
                line=line_num,
                start=match.start(),
                end=match.end(),
                text=match.group(0),
            ))
    return matches


def is_chord_line(line: str) -> bool:
    """
    Guess whether a line holds chords rather than lyrics.

    A chord line has more note letters (A-G) than lowercase letters and
    at least one whitespace character.
    """
    uppercase = len(_CHORD_LETTERS.findall(line))
    lowercase = len(_LOWERCASE.findall(line))
    return uppercase > lowercase and any(c.isspace() for c in line)


def resolve_shift(
    semitones: Optional[int] = None,
    from_key: Optional[str] = None,
    to_key: Optional[str] = None,
) -> int:
    """
    Work out how many semitones to transpose by.

    Args:
        semitones: Explicit shift (positive = up, negative = down)
        from_key: Current key, e.g. "G"
        to_key: Wanted key, e.g. "A"

    Note:
        Provide either semitones OR both keys, not both.

    Raises:
        TransposeError: If no shift can be worked out
    """
    if semitones is not None:
        if from_key is not None or to_key is not None:
            raise TransposeError("Give either a semitone shift or a pair of keys, not both")
        return semitones

    if from_key is None or to_key is None:
        raise TransposeError("Must provide either semitones or both from_key and to_key")

    start = parse_key_name(from_key)
    if start is None:
        raise TransposeError(f"Unknown key: {from_key}")
    target = parse_key_name(to_key)
    if target is None:
        raise TransposeError(f"Unknown key: {to_key}")

    return (target - start) % 12
