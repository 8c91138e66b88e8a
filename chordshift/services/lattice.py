"""Pitch lattices used to transpose spelled notes.

A lattice is a cyclic grid of spelled notes. Moving ``right`` raises the
pitch by one semitone along a letter's accidental chain; moving ``down``
keeps the pitch and changes the spelling to the next letter (A -> Bbb,
B -> Cb, B# -> C, ...). ``left`` and ``up`` are the reverse links.

Two lattices exist, one per accidental preference:

* flat map, chains ``Xbb -> Xb -> X``
* sharp map, chains ``X -> X# -> X##``

Both are rooted at natural A and built once at import. Nodes are never
modified after the build, so lookups and walks are safe from any thread.
"""
import logging
from typing import Dict, Iterator, List, Optional, Sequence

from chordshift.config import settings
from chordshift.schemas.note import Accident, Note, NoteLetter

logger = logging.getLogger(__name__)

SEMITONES_ON_THE_SCALE = 12

FLAT_CHAIN = (Accident.DOUBLE_FLAT, Accident.FLAT, Accident.NONE)
SHARP_CHAIN = (Accident.NONE, Accident.SHARP, Accident.DOUBLE_SHARP)

HEAD_NOTE = Note(letter=NoteLetter.A, accident=Accident.NONE)


class LatticeError(RuntimeError):
    """A lattice is miswired or does not contain a requested spelling."""


class LatticeNode:
    __slots__ = ("note", "left", "right", "up", "down")

    def __init__(self, note: Note):
        self.note = note
        self.left: Optional["LatticeNode"] = None
        self.right: Optional["LatticeNode"] = None
        self.up: Optional["LatticeNode"] = None
        self.down: Optional["LatticeNode"] = None

    def __repr__(self) -> str:
        return f"LatticeNode({self.note})"


class Lattice:
    def __init__(self, name: str, head: LatticeNode, nodes: Sequence[LatticeNode]):
        self.name = name
        self.head = head
        self._nodes = tuple(nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[LatticeNode]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Lattice({self.name!r}, {len(self)} nodes)"

    def find(self, note: Note) -> Optional[LatticeNode]:
        return find_node(self.head, note)


def _link_right(left: LatticeNode, right: LatticeNode) -> None:
    left.right = right
    right.left = left


def _link_down(upper: LatticeNode, lower: LatticeNode) -> None:
    upper.down = lower
    lower.up = upper


def build_lattice(name: str, chain: Sequence[Accident]) -> Lattice:
    """Build a lattice from the ordered accidental chain of each letter.

    Every letter gets one row holding its spellings in ``chain`` order,
    linked left/right. Each spelling then links down to the spelling of the
    same pitch on the next letter's row, wrapping from G back to A.
    """
    letters = list(NoteLetter)
    rows: List[List[LatticeNode]] = [
        [LatticeNode(Note(letter=letter, accident=accident)) for accident in chain]
        for letter in letters
    ]

    for row in rows:
        for left, right in zip(row, row[1:]):
            _link_right(left, right)

    for i, row in enumerate(rows):
        next_row = rows[(i + 1) % len(rows)]
        by_pitch: Dict[int, LatticeNode] = {n.note.pitch_class: n for n in next_row}
        for node in row:
            lower = by_pitch.get(node.note.pitch_class)
            if lower is not None:
                _link_down(node, lower)

    nodes = [node for row in rows for node in row]
    head = next(n for n in nodes if n.note == HEAD_NOTE)
    lattice = Lattice(name, head, nodes)

    if settings.verify_lattices:
        verify_lattice(lattice)
    logger.debug("Built %s lattice with %d nodes", name, len(lattice))
    return lattice


def build_flat_lattice() -> Lattice:
    return build_lattice("flat", FLAT_CHAIN)


def build_sharp_lattice() -> Lattice:
    return build_lattice("sharp", SHARP_CHAIN)


def verify_lattice(lattice: Lattice) -> None:
    """Check the invariants transposition relies on.

    Raises LatticeError if any node is unreachable from the head via
    right/down, if a right step is not a semitone, if a down step changes
    the pitch, or if an up-walk or down-walk could get stuck on a node.
    """
    reached = set()
    stack = [lattice.head]
    while stack:
        node = stack.pop()
        if id(node) in reached:
            continue
        reached.add(id(node))
        stack.extend(n for n in (node.down, node.right) if n is not None)

    for node in lattice:
        pc = node.note.pitch_class
        if id(node) not in reached:
            raise LatticeError(f"{lattice.name} lattice: {node.note} unreachable from head")
        if node.right is not None and node.right.note.pitch_class != (pc + 1) % SEMITONES_ON_THE_SCALE:
            raise LatticeError(f"{lattice.name} lattice: {node.note} -> {node.right.note} is not a semitone")
        if node.down is not None and node.down.note.pitch_class != pc:
            raise LatticeError(f"{lattice.name} lattice: {node.note} and {node.down.note} are not enharmonic")
        if node.right is None and node.down is None:
            raise LatticeError(f"{lattice.name} lattice: {node.note} is a dead end going up")
        if node.left is None and node.up is None:
            raise LatticeError(f"{lattice.name} lattice: {node.note} is a dead end going down")

    pitch_classes = {node.note.pitch_class for node in lattice}
    if len(pitch_classes) != SEMITONES_ON_THE_SCALE:
        raise LatticeError(f"{lattice.name} lattice covers {len(pitch_classes)} pitch classes")


def find_node(head: LatticeNode, note: Note) -> Optional[LatticeNode]:
    """Depth-first search for the node spelled ``note``.

    Right links are explored before down links. The visited set is local
    to the call. Returns None if the spelling is not in the lattice.
    """
    visited = set()
    stack = [head]
    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        if node.note == note:
            return node
        # pushed in reverse so right is popped first
        if node.down is not None:
            stack.append(node.down)
        if node.right is not None:
            stack.append(node.right)
    return None


def walk_up(node: LatticeNode, semitones: int) -> LatticeNode:
    """Move ``semitones`` right steps, dropping down where a row ends.

    Down moves are free. A sharp landing is respelled one row down when
    possible (C## -> D, B## -> C#).
    """
    while semitones > 0:
        if node.right is not None:
            node = node.right
            semitones -= 1
        else:
            node = node.down

    if node.note.is_sharp_or_double_sharp and node.down is not None:
        node = node.down
    return node


def walk_down(node: LatticeNode, semitones: int) -> LatticeNode:
    """Mirror of walk_up: left steps, free up moves, flat landings respelled up."""
    while semitones > 0:
        if node.left is not None:
            node = node.left
            semitones -= 1
        else:
            node = node.up

    if node.note.is_flat_or_double_flat and node.up is not None:
        node = node.up
    return node


FLAT_LATTICE = build_flat_lattice()
SHARP_LATTICE = build_sharp_lattice()
