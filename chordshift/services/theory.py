import logging
import re
from typing import Iterable, List, Optional

from chordshift.schemas.chord import Chord, Tonality
from chordshift.schemas.note import Accident, Note, NoteLetter

logger = logging.getLogger(__name__)

_ACCIDENT_PATTERN = r"(##|bb|#|b)?"

# Note name: capital letter optionally followed by one or two # or b
_NOTE_RE = re.compile(r"^([A-G])" + _ACCIDENT_PATTERN + r"$")

# Chord name: root, optional minor marker, complement, optional slash bass
_CHORD_RE = re.compile(
    r"^([A-G])" + _ACCIDENT_PATTERN
    + r"(min|m)?(?!aj)"
    + r"(.*?)"
    + r"(?:/([A-G])" + _ACCIDENT_PATTERN + r")?$"
)

_COMPLEMENT_RE = re.compile(
    r"^(?:maj|dim|aug|sus|add|alt|omit|no|M|\d|[#b+\-°ø(),])*$"
)


class NotAChordError(ValueError):
    """Raised when a string is not a well-formed chord or note name."""


def _make_note(letter: str, accident: Optional[str]) -> Note:
    return Note(letter=NoteLetter(letter), accident=Accident(accident or ""))


def parse_note(name: str) -> Note:
    """Parse a note name like 'C', 'F#', 'Bbb'.

    Raises NotAChordError if the name is not recognized.
    """
    m = _NOTE_RE.match(name.strip()) if isinstance(name, str) else None
    if not m:
        raise NotAChordError(f"Not a note: {name!r}")
    return _make_note(m.group(1), m.group(2))


def parse_chord(name: str) -> Chord:
    """Parse a chord symbol like 'C#m7/G', 'Bbmaj9', 'Fsus4'.

    The root and optional bass are spelled notes; 'm' or 'min' right after
    the root marks a minor chord (but 'maj' does not). Whatever follows is
    kept verbatim as the complement.

    Raises NotAChordError if the symbol is not recognized.
    """
    if not isinstance(name, str):
        raise NotAChordError(f"Not a chord: {name!r}")
    symbol = name.strip()
    m = _CHORD_RE.match(symbol)
    if not m:
        raise NotAChordError(f"Not a chord: {name!r}")

    letter, accident, minor, complement, bass_letter, bass_accident = m.groups()
    if not _COMPLEMENT_RE.match(complement):
        raise NotAChordError(f"Not a chord: {name!r} (unknown complement {complement!r})")

    return Chord(
        note=_make_note(letter, accident),
        tonality=Tonality.MINOR if minor else Tonality.MAJOR,
        complement=complement,
        inversion=_make_note(bass_letter, bass_accident) if bass_letter else None,
    )


def format_chord(chord: Chord) -> str:
    """Render a chord back to its symbol, e.g. 'C#m7/G'."""
    parts = [str(chord.note)]
    if chord.tonality is Tonality.MINOR:
        parts.append("m")
    parts.append(chord.complement)
    if chord.inversion is not None:
        parts.append("/" + str(chord.inversion))
    return "".join(parts)


def is_chord(name: str) -> bool:
    """Return True if name parses as a chord symbol."""
    try:
        parse_chord(name)
    except NotAChordError as exc:
        logger.debug("Rejected chord name: %s", exc)
        return False
    return True


def get_valid_chords(names: Iterable[str]) -> List[Chord]:
    """Parse every valid chord symbol in names, skipping the rest.

    Order of the valid symbols is preserved.
    """
    if names is None:
        raise TypeError("names must not be None")
    return [parse_chord(n) for n in names if is_chord(n)]
