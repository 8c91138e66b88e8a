from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from chordshift.schemas.note import Note


class Tonality(str, Enum):
    MAJOR = "major"
    MINOR = "minor"


class Chord(BaseModel):
    """A chord symbol split into root, tonality, complement and bass.

    ``complement`` is everything after the root and minor marker
    (``"7"``, ``"maj9"``, ``"sus4"``); ``inversion`` is the slash bass.
    Transposition moves the root only and copies the rest unchanged.
    """

    model_config = ConfigDict(frozen=True)

    note: Note
    tonality: Tonality = Tonality.MAJOR
    complement: str = ""
    inversion: Optional[Note] = None

    @classmethod
    def parse(cls, name: str) -> "Chord":
        from chordshift.services.theory import parse_chord

        return parse_chord(name)

    @property
    def is_flat_or_double_flat(self) -> bool:
        return self.note.is_flat_or_double_flat

    @property
    def is_sharp_or_double_sharp(self) -> bool:
        return self.note.is_sharp_or_double_sharp

    def __str__(self) -> str:
        from chordshift.services.theory import format_chord

        return format_chord(self)
