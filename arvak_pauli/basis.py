"""Decomposition of a Pauli basis string into per-axis qubit indices."""

from __future__ import annotations

from .exceptions import DecodeError
from .types import BasisIndices

_AXES = "XYZ"


def decompose(basis: str, line_number: int | None = None) -> BasisIndices:
    """Split *basis* into ascending 1-based index lists for X, Y and Z.

    ``I`` characters contribute nothing.

    >>> decompose("IXYZX")
    BasisIndices(x=(2, 5), y=(3,), z=(4,))
    """
    found: dict[str, list[int]] = {axis: [] for axis in _AXES}
    for position, char in enumerate(basis, start=1):
        if char == "I":
            continue
        if char not in found:
            raise DecodeError(
                "unsupported character",
                line_number,
                character=char,
                position=position,
            )
        found[char].append(position)

    return BasisIndices(
        x=tuple(found["X"]),
        y=tuple(found["Y"]),
        z=tuple(found["Z"]),
    )
