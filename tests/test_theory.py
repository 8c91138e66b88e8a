from __future__ import annotations

import pytest

from chordshift.schemas.chord import Chord, Tonality
from chordshift.schemas.note import Accident, Note, NoteLetter
from chordshift.services.theory import (
    NotAChordError,
    format_chord,
    get_valid_chords,
    is_chord,
    parse_chord,
    parse_note,
)


def test_parse_note():
    assert parse_note("C") == Note(letter=NoteLetter.C, accident=Accident.NONE)
    assert parse_note("F##") == Note(letter=NoteLetter.F, accident=Accident.DOUBLE_SHARP)
    assert parse_note(" Eb ") == Note(letter=NoteLetter.E, accident=Accident.FLAT)
    assert parse_note("Bbb").accident is Accident.DOUBLE_FLAT


@pytest.mark.parametrize("bad", ["", "H", "c", "C###", "Cx", None, 3])
def test_parse_note_rejects(bad):
    with pytest.raises(NotAChordError):
        parse_note(bad)


def test_note_equality_is_by_spelling():
    assert parse_note("C#") != parse_note("Db")
    assert parse_note("C#").pitch_class == parse_note("Db").pitch_class
    assert len({parse_note("C#"), parse_note("C#"), parse_note("Db")}) == 2


@pytest.mark.parametrize("name,pc", [("C", 0), ("B#", 0), ("Cb", 11), ("Fbb", 3), ("G##", 9), ("A", 9)])
def test_pitch_class(name, pc):
    assert parse_note(name).pitch_class == pc


def test_note_predicates():
    assert parse_note("Bb").is_flat_or_double_flat
    assert parse_note("Bbb").is_flat_or_double_flat
    assert parse_note("F#").is_sharp_or_double_sharp
    assert parse_note("F##").is_sharp_or_double_sharp
    assert parse_note("G").is_natural
    assert not parse_note("G").is_flat_or_double_flat
    assert not parse_note("G").is_sharp_or_double_sharp


def test_parse_slash_minor_seventh():
    chord = parse_chord("C#m7/G")
    assert chord.note == parse_note("C#")
    assert chord.tonality is Tonality.MINOR
    assert chord.complement == "7"
    assert chord.inversion == parse_note("G")
    assert chord.is_sharp_or_double_sharp
    assert not chord.is_flat_or_double_flat


def test_parse_major_ninth():
    chord = parse_chord("Bbmaj9")
    assert chord.note == parse_note("Bb")
    assert chord.tonality is Tonality.MAJOR
    assert chord.complement == "maj9"
    assert chord.inversion is None
    assert chord.is_flat_or_double_flat


def test_min_is_minor():
    chord = parse_chord("Cmin7")
    assert chord.tonality is Tonality.MINOR
    assert str(chord) == "Cm7"


@pytest.mark.parametrize("name", [
    "C", "Cm", "C7", "Cmaj7", "CM7", "Fsus4", "C7(b9)", "Bm7b5", "Gdim", "Eaug",
    "D/F#", "Bbb", "F##m", "Am(maj7)", "Gadd9", "E7#9", "Abm9/Eb",
])
def test_format_round_trip(name):
    assert format_chord(parse_chord(name)) == name
    assert str(Chord.parse(name)) == name


@pytest.mark.parametrize("name", ["C", "C#m7/G", "Bbmaj9", "  Am  ", "G7sus4"])
def test_is_chord_true(name):
    assert is_chord(name)


@pytest.mark.parametrize("name", ["", "H", "7", "Cxyz", "C/", "c", "C/H", "Cmm", None, 7])
def test_is_chord_false(name):
    assert not is_chord(name)


def test_parse_chord_error_is_value_error():
    with pytest.raises(ValueError, match="Not a chord"):
        parse_chord("H")


def test_get_valid_chords_filters_in_order():
    chords = get_valid_chords(["C", "H", "Am", "", "G7", "7"])
    assert [str(c) for c in chords] == ["C", "Am", "G7"]
    assert all(isinstance(c, Chord) for c in chords)


def test_get_valid_chords_rejects_none():
    with pytest.raises(TypeError):
        get_valid_chords(None)


def test_schema_parse_helpers():
    assert Note.parse("Ab") == parse_note("Ab")
    assert Chord.parse("Ab7") == parse_chord("Ab7")
