"""
Chord transposition for bracketed chord sheets

Chords are written inline as [G], [Am7], [F#m/C#]. Only the root of each
chord moves; whatever follows it inside the brackets is kept as written.
"""

import re
from typing import Optional

SHARPS = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLATS = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
FLAT_KEYS = {"F", "Bb", "Eb", "Ab", "Db", "Gb"}

CHORD_PATTERN = re.compile(r"\[([A-G][#b]?)([^\]]*)\]")
KEY_ROOT_PATTERN = re.compile(r"^([A-G][#b]?)")


def note_index(note: str) -> int:
    """Semitone index of a note in either spelling, -1 if unknown"""
    if note in SHARPS:
        return SHARPS.index(note)
    if note in FLATS:
        return FLATS.index(note)
    return -1


def key_index(key: Optional[str]) -> int:
    """Index of a key's root ("Am" and "A" both give 9)"""
    if not key:
        return -1
    match = KEY_ROOT_PATTERN.match(key.strip())
    return note_index(match.group(1)) if match else -1


def prefers_flats(key: str) -> bool:
    root = re.sub(r"m.*$", "", key.strip())
    return "b" in key or root in FLAT_KEYS


def transpose_note(note: str, semitones: int, use_flats: bool) -> str:
    idx = note_index(note)
    if idx == -1:
        return note
    scale = FLATS if use_flats else SHARPS
    return scale[(idx + semitones) % 12]


def transpose_chord_text(text: str, from_key: str, to_key: str) -> str:
    """
    Move every bracketed chord from `from_key` to `to_key`.

    The target key decides the spelling: flats for keys written with a flat
    or rooted on F, Bb, Eb, Ab, Db or Gb, sharps otherwise. Unknown keys
    leave the text untouched.
    """
    from_idx = key_index(from_key)
    to_idx = key_index(to_key)
    if from_idx == -1 or to_idx == -1:
        return text

    semitones = (to_idx - from_idx + 12) % 12
    use_flats = prefers_flats(to_key)

    def replace(match: re.Match) -> str:
        return f"[{transpose_note(match.group(1), semitones, use_flats)}{match.group(2)}]"

    return CHORD_PATTERN.sub(replace, text)
