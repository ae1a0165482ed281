"""OpenQASM generation for a single Pauli-exponential term.

A term ``c * P`` with Pauli string ``P`` and angle scale ``m`` becomes
``exp(-i m c theta P / 2)`` via:
  1. Basis change - ``ry(pi/2)`` on X qubits, ``rx(-pi/2)`` on Y qubits
  2. CNOT ladder - every touched qubit is parity-coupled onto the pivot
  3. ``rz`` on the pivot (the highest touched qubit) with a symbolic angle
  4. The mirror image of steps 2 and 1

Each non-pivot qubit wraps everything emitted before it, so qubits are
nested in the order X list, Y list, Z list.  The pivot's own basis change
is always the outermost wrap.
"""

from __future__ import annotations

from typing import Sequence

from ._formatting import DEFAULT_ANGLE_PREFIX, format_real
from .basis import decompose
from .exceptions import DecodeError
from .types import CompiledBlock, Term

__all__ = ["compile_term", "emit", "select_pivot"]

# (before, after) basis-change rotations per axis, in X, Y, Z order.
_BASIS_CHANGE: tuple[tuple[str, str], ...] = (
    ("ry(pi/2)", "ry(-pi/2)"),
    ("rx(-pi/2)", "rx(pi/2)"),
    ("", ""),
)


def _gate(name: str, qubit: int) -> str:
    return f"{name} q[{qubit - 1}];\n"


def _cx(control: int, target: int) -> str:
    return f"cx q[{control - 1}], q[{target - 1}];\n"


def select_pivot(
    x_indices: Sequence[int],
    y_indices: Sequence[int],
    z_indices: Sequence[int],
    line_number: int | None = None,
) -> int:
    """Return the highest 1-based qubit index touched by the term."""
    touched = [*x_indices, *y_indices, *z_indices]
    if not touched:
        raise DecodeError("all-identity operator", line_number)
    return max(touched)


def emit(
    term: Term,
    x_indices: Sequence[int],
    y_indices: Sequence[int],
    z_indices: Sequence[int],
    angle_prefix: str = DEFAULT_ANGLE_PREFIX,
) -> str:
    """Build the OpenQASM fragment implementing *term*.

    Parameters
    ----------
    term : Term
        The term being compiled; supplies coefficient, group parameter and
        the line number used in the leading comment.
    x_indices, y_indices, z_indices : Sequence[int]
        Ascending 1-based qubit positions per Pauli axis.
    angle_prefix : str
        Scale factor text placed in front of the coefficient, e.g. ``"0.5*"``.

    Returns
    -------
    str
        The block, starting with a ``// New operator from line N`` comment.
    """
    axes = (x_indices, y_indices, z_indices)
    assert len(axes) == len(_BASIS_CHANGE), "expected exactly three Pauli axes"

    pivot = select_pivot(*axes, line_number=term.sequence_index)
    central = _gate(
        f"rz({angle_prefix}{format_real(term.coefficient)}*$[{term.group_parameter}])",
        pivot,
    )

    # Outer layers are appended last; ``before`` is reversed on assembly.
    before: list[str] = []
    after: list[str] = []
    pivot_before = pivot_after = ""

    for indices, (rotate_in, rotate_out) in zip(axes, _BASIS_CHANGE):
        for qubit in indices:
            if qubit == pivot:
                if rotate_in:
                    pivot_before = _gate(rotate_in, qubit)
                    pivot_after = _gate(rotate_out, qubit)
                continue

            layer_in = _cx(qubit, pivot)
            layer_out = _cx(qubit, pivot)
            if rotate_in:
                layer_in = _gate(rotate_in, qubit) + layer_in
                layer_out = layer_out + _gate(rotate_out, qubit)
            before.append(layer_in)
            after.append(layer_out)

    return "".join(
        [
            f"\n// New operator from line {term.sequence_index}\n",
            pivot_before,
            *reversed(before),
            central,
            *after,
            pivot_after,
        ]
    )


def compile_term(term: Term, angle_prefix: str = DEFAULT_ANGLE_PREFIX) -> CompiledBlock:
    """Decompose and emit one term; this is the unit of work per worker."""
    indices = decompose(term.basis, term.sequence_index)
    return CompiledBlock(
        sequence_index=term.sequence_index,
        text=emit(term, *indices, angle_prefix=angle_prefix),
    )
