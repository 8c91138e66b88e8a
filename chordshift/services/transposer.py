import logging
from typing import Callable, List, Optional, Sequence, Union

from chordshift.schemas.chord import Chord
from chordshift.schemas.note import Note
from chordshift.services.lattice import (
    FLAT_LATTICE,
    SEMITONES_ON_THE_SCALE,
    SHARP_LATTICE,
    Lattice,
    LatticeError,
    LatticeNode,
    walk_down,
    walk_up,
)
from chordshift.services.theory import parse_chord

logger = logging.getLogger(__name__)

Transposable = Union[Chord, Note, str]


def normalize_semitones(semitones: int) -> int:
    """Validate a semitone count and reduce it modulo one octave.

    Raises TypeError for non-integers and ValueError for negative counts.
    """
    if isinstance(semitones, bool) or not isinstance(semitones, int):
        raise TypeError(f"semitones must be an int, got {type(semitones).__name__}")
    if semitones < 0:
        raise ValueError("Semitones can not be negative numbers")
    return semitones % SEMITONES_ON_THE_SCALE


def select_lattice(note: Note, default: Lattice) -> Lattice:
    """Flat-spelled notes use the flat map, sharp-spelled the sharp map, naturals the default."""
    if note.is_flat_or_double_flat:
        return FLAT_LATTICE
    if note.is_sharp_or_double_sharp:
        return SHARP_LATTICE
    return default


def _shift_note(
    note: Note,
    semitones: int,
    default: Lattice,
    walk: Callable[[LatticeNode, int], LatticeNode],
) -> Note:
    lattice = select_lattice(note, default)
    start = lattice.find(note)
    if start is None:
        raise LatticeError(f"{note} is not spelled in the {lattice.name} lattice")
    return walk(start, semitones).note


def _transpose(
    value: Optional[Transposable],
    semitones: int,
    default: Lattice,
    walk: Callable[[LatticeNode, int], LatticeNode],
    direction: str,
) -> Union[Chord, Note]:
    if value is None:
        raise TypeError("chord must not be None")
    if isinstance(value, str):
        value = parse_chord(value)
    if not isinstance(value, (Chord, Note)):
        raise TypeError(f"Cannot transpose {type(value).__name__}")

    semitones = normalize_semitones(semitones)
    if semitones == 0:
        return value

    if isinstance(value, Note):
        result = _shift_note(value, semitones, default, walk)
    else:
        result = Chord(
            note=_shift_note(value.note, semitones, default, walk),
            tonality=value.tonality,
            complement=value.complement,
            inversion=value.inversion,
        )

    logger.debug("Transposed %s %s %d -> %s", value, direction, semitones, result)
    return result


def transpose_up(value: Transposable, semitones: int) -> Union[Chord, Note]:
    """Transpose a chord, note or chord symbol up by ``semitones``.

    Naturals are spelled with sharps (C + 1 -> C#); flat and sharp roots
    keep their accidental family. Only the root moves: tonality, complement
    and slash bass are copied unchanged. Returns the input object itself
    when ``semitones`` is a multiple of 12.

    Raises TypeError if value is None, ValueError if semitones is negative
    and NotAChordError if a string is not a chord symbol.

    Results are logged at DEBUG on this module's logger; hosts that want
    them on stderr call chordshift.config.configure_logging() once at
    startup (level from CHORDSHIFT_LOG_LEVEL).
    """
    return _transpose(value, semitones, SHARP_LATTICE, walk_up, "up")


def transpose_down(value: Transposable, semitones: int) -> Union[Chord, Note]:
    """Transpose a chord, note or chord symbol down by ``semitones``.

    Naturals are spelled with flats (D - 1 -> Db). Otherwise behaves like
    transpose_up.
    """
    return _transpose(value, semitones, FLAT_LATTICE, walk_down, "down")


def _check_chord_list(chords: Sequence[Transposable], semitones: int) -> None:
    if chords is None:
        raise TypeError("chords must not be None")
    if isinstance(chords, str):
        raise TypeError("chords must be a sequence of chords, not a str")
    normalize_semitones(semitones)


def transpose_chords_up(chords: Sequence[Transposable], semitones: int) -> List:
    """Transpose every chord in order; the input list is left untouched."""
    _check_chord_list(chords, semitones)
    return [transpose_up(c, semitones) for c in chords]


def transpose_chords_down(chords: Sequence[Transposable], semitones: int) -> List:
    _check_chord_list(chords, semitones)
    return [transpose_down(c, semitones) for c in chords]
