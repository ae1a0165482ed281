"""Shared data types for arvak-pauli."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from ._formatting import angle_prefix
from .exceptions import ValidationError


class QasmVersion(IntEnum):
    """OpenQASM dialect of the register declarations."""

    V2 = 2
    V3 = 3

    @classmethod
    def from_flag(cls, version: int) -> QasmVersion:
        """Map a caller-supplied version number; anything but 3 means 2."""
        return cls.V3 if version == 3 else cls.V2


@dataclass(frozen=True)
class Term:
    """One Pauli-exponential term read from an input line."""

    sequence_index: int
    basis: str
    coefficient: float
    group_parameter: int

    @property
    def num_qubits(self) -> int:
        return len(self.basis)


class BasisIndices(NamedTuple):
    """1-based qubit positions carrying X, Y and Z in a basis string."""

    x: tuple[int, ...]
    y: tuple[int, ...]
    z: tuple[int, ...]


@dataclass(frozen=True)
class CompiledBlock:
    """OpenQASM fragment for a single term."""

    sequence_index: int
    text: str


@dataclass(frozen=True)
class CompilationResult:
    """Register header plus every compiled block in input order."""

    header: str
    blocks: tuple[CompiledBlock, ...]
    num_qubits: int
    version: QasmVersion

    @property
    def text(self) -> str:
        return self.header + "".join(block.text for block in self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class CompileOptions:
    """Configuration frozen at the start of one compilation.

    Parameters
    ----------
    version : QasmVersion
        Dialect of the register header.
    multiplier : float | None
        Angle scale factor.  ``None`` keeps the default one-half.
    max_workers : int | None
        Worker threads; ``1`` compiles inline, ``None`` uses the
        executor default.
    """

    version: QasmVersion = QasmVersion.V2
    multiplier: float | None = None
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.multiplier is not None and not math.isfinite(self.multiplier):
            raise ValidationError("non-finite multiplier")

    @property
    def angle_prefix(self) -> str:
        return angle_prefix(self.multiplier)
