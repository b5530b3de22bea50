"""
Piece catalog: seven piece definitions, each with 4 pre-rotated shapes.

Shapes are declared as row-major bitmask strings ('1' = filled) and turned
into read-only square numpy arrays once, at import. A 9-character mask is a
3x3 shape; a 16-character mask is a 4x4 shape.

Coordinate convention:
  - A shape array is indexed [row, col] relative to the top-left corner of
    the piece's bounding square.
  - On the board, row 0 is the top and row increases downward.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

import numpy as np

# =============================================================================
# Piece Colors (RGB), indexed by color id
# =============================================================================

COLOR_BLUE   = (0, 0, 255)      # reverse L
COLOR_ORANGE = (255, 165, 0)    # L
COLOR_RED    = (255, 0, 0)      # Z
COLOR_GREEN  = (0, 255, 0)      # reverse Z
COLOR_PURPLE = (128, 0, 128)    # T
COLOR_YELLOW = (255, 255, 0)    # block
COLOR_CYAN   = (0, 255, 255)    # line

# =============================================================================
# Declarative shape table
# =============================================================================
# One entry per piece: (name, display color, [rotation 0, 1, 2, 3]).

SHAPE_TABLE: list[tuple[str, tuple[int, int, int], list[str]]] = [
    ("reverse_l", COLOR_BLUE,   ["010010110", "000100111", "110100100", "000111001"]),
    ("l",         COLOR_ORANGE, ["010010011", "000111100", "011001001", "000001111"]),
    ("z",         COLOR_RED,    ["000110011", "010110100", "000110011", "010110100"]),
    ("reverse_z", COLOR_GREEN,  ["000011110", "100110010", "000011110", "100110010"]),
    ("t",         COLOR_PURPLE, ["000010111", "100110100", "000111010", "010110010"]),
    ("block",     COLOR_YELLOW, ["110110000", "110110000", "110110000", "110110000"]),
    ("line",      COLOR_CYAN,   ["0100010001000100", "0000111100000000",
                                 "0100010001000100", "0000111100000000"]),
]


@dataclass(frozen=True, eq=False)
class PieceDefinition:
    """Immutable piece template.

    Attributes:
        piece_id: Index of the piece in the catalog.
        name: Short piece name (e.g. 't', 'line').
        color: Color id written into the board; piece_id + 1, never 0.
        rotations: Four read-only square int8 arrays, one per rotation.
        size: Side length of the bounding square (3 or 4).
    """

    piece_id: int
    name: str
    color: int
    rotations: tuple[np.ndarray, ...]
    size: int


def parse_mask(mask: str) -> np.ndarray:
    """Convert a bitmask string into a read-only square int8 array.

    Args:
        mask: Row-major string of '0'/'1' characters; its length must be a
            perfect square (9 or 16).

    Returns:
        A (side, side) numpy array of 0/1 values.

    Raises:
        ValueError: If the mask is not 3x3 or 4x4 or contains other characters.
    """
    side = math.isqrt(len(mask))
    if side not in (3, 4) or side * side != len(mask) or set(mask) - {"0", "1"}:
        raise ValueError(f"Invalid shape mask: {mask!r}")
    shape = np.array([int(c) for c in mask], dtype=np.int8).reshape(side, side)
    shape.setflags(write=False)
    return shape


def _build_catalog() -> list[PieceDefinition]:
    catalog = []
    for index, (name, _, masks) in enumerate(SHAPE_TABLE):
        rotations = tuple(parse_mask(m) for m in masks)
        catalog.append(
            PieceDefinition(
                piece_id=index,
                name=name,
                color=index + 1,
                rotations=rotations,
                size=rotations[0].shape[0],
            )
        )
    return catalog


# =============================================================================
# Ordered list of all piece definitions
# =============================================================================

PIECE_TYPES: list[PieceDefinition] = _build_catalog()

PIECE_BY_NAME: dict[str, PieceDefinition] = {definition.name: definition for definition in PIECE_TYPES}

# Color id -> RGB, for renderers
PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    definition.color: SHAPE_TABLE[definition.piece_id][1] for definition in PIECE_TYPES
}

MAX_PIECE_SIZE: int = max(definition.size for definition in PIECE_TYPES)


def random_definition(rng: random.Random | None = None) -> PieceDefinition:
    """Pick a piece definition uniformly at random.

    Args:
        rng: Random source; the module-level generator is used when None.

    Returns:
        One of PIECE_TYPES.
    """
    return (rng or random).choice(PIECE_TYPES)
