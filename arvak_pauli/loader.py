"""Reading Pauli-term records into immutable :class:`Term` values.

Each record is one line of the form::

    <basis> <coefficient> <parameter>

for example ``IXYZ 0.25 0``.  The basis length of the first record fixes
the register width for the whole input.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable

from .exceptions import FormatError, ValidationError
from .types import Term

logger = logging.getLogger(__name__)

# Largest group parameter that still fits an unsigned 64-bit index.
MAX_PARAMETER = 2**64 - 1


def _tokenize(line: str, line_number: int) -> tuple[str, float, int]:
    fields = line.split()
    if len(fields) != 3:
        raise FormatError(line_number)
    basis, raw_coefficient, raw_parameter = fields
    try:
        coefficient = float(raw_coefficient)
        parameter = int(raw_parameter)
    except ValueError as exc:
        raise FormatError(line_number) from exc
    return basis, coefficient, parameter


def check_record(
    basis: str,
    coefficient: float,
    parameter: int,
    line_number: int,
    num_qubits: int,
) -> None:
    """Validate one tokenized record against the register width.

    Raises
    ------
    ValidationError
        On the first violated rule, in the order: empty operator, length
        mismatch, zero coefficient, non-finite coefficient, negative
        parameter, parameter out of bound.
    """
    if not basis:
        raise ValidationError("empty operator", line_number)
    if len(basis) != num_qubits:
        raise ValidationError("length mismatch", line_number)
    if coefficient == 0:
        raise ValidationError("zero coefficient", line_number)
    if not math.isfinite(coefficient):
        raise ValidationError("non-finite coefficient", line_number)
    if parameter < 0:
        raise ValidationError("negative parameter", line_number)
    if parameter > MAX_PARAMETER:
        raise ValidationError("parameter out of bound", line_number)


def load_terms(lines: Iterable[str]) -> list[Term]:
    """Parse raw lines into terms, failing on the first invalid line.

    A parameter of ``0`` marks the term as independent and is replaced by
    the term's own line number.
    """
    terms: list[Term] = []
    num_qubits = 0

    for line_number, line in enumerate(lines, start=1):
        basis, coefficient, parameter = _tokenize(line, line_number)
        if line_number == 1:
            num_qubits = len(basis)
        check_record(basis, coefficient, parameter, line_number, num_qubits)

        terms.append(
            Term(
                sequence_index=line_number,
                basis=basis,
                coefficient=coefficient,
                group_parameter=parameter or line_number,
            )
        )

    logger.debug("Loaded %d terms on %d qubits", len(terms), num_qubits)
    return terms


def read_lines(path: str | Path) -> list[str]:
    """Read an input file into a list of lines without line terminators.

    Bytes that are not valid UTF-8 raise :class:`FormatError` on the line
    that contains them.
    """
    data = Path(path).read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(data.count(b"\n", 0, exc.start) + 1) from exc
    return text.splitlines()


def load_file(path: str | Path) -> list[Term]:
    """Load every term from the input file at *path*."""
    logger.debug("Reading terms from %s", path)
    return load_terms(read_lines(path))
