from enum import Enum

from pydantic import BaseModel, ConfigDict


class NoteLetter(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


class Accident(str, Enum):
    """Accidental of a spelled note; the value is its written symbol."""

    NONE = ""
    DOUBLE_FLAT = "bb"
    FLAT = "b"
    SHARP = "#"
    DOUBLE_SHARP = "##"

    @property
    def offset(self) -> int:
        return _ACCIDENT_OFFSET[self]


_ACCIDENT_OFFSET = {
    Accident.NONE: 0,
    Accident.DOUBLE_FLAT: -2,
    Accident.FLAT: -1,
    Accident.SHARP: 1,
    Accident.DOUBLE_SHARP: 2,
}

# Semitone offset of each natural from C
NATURAL_PITCH_CLASS = {
    NoteLetter.C: 0,
    NoteLetter.D: 2,
    NoteLetter.E: 4,
    NoteLetter.F: 5,
    NoteLetter.G: 7,
    NoteLetter.A: 9,
    NoteLetter.B: 11,
}


class Note(BaseModel):
    """A spelled note.

    Equality is by spelling, not by pitch: ``C#`` and ``Db`` are different
    notes even though they share a pitch class.
    """

    model_config = ConfigDict(frozen=True)

    letter: NoteLetter
    accident: Accident = Accident.NONE

    @classmethod
    def parse(cls, name: str) -> "Note":
        from chordshift.services.theory import parse_note

        return parse_note(name)

    @property
    def is_natural(self) -> bool:
        return self.accident is Accident.NONE

    @property
    def is_flat_or_double_flat(self) -> bool:
        return self.accident in (Accident.FLAT, Accident.DOUBLE_FLAT)

    @property
    def is_sharp_or_double_sharp(self) -> bool:
        return self.accident in (Accident.SHARP, Accident.DOUBLE_SHARP)

    @property
    def pitch_class(self) -> int:
        """Pitch class 0-11 with C = 0."""
        return (NATURAL_PITCH_CLASS[self.letter] + self.accident.offset) % 12

    def __str__(self) -> str:
        return self.letter.value + self.accident.value
