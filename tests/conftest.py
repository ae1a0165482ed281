"""Shared fixtures for arvak-pauli tests."""

import pytest

from arvak_pauli.types import Term


@pytest.fixture
def make_term():
    """Build a Term with sensible defaults."""

    def _make(basis: str, coefficient: float = 1.0, group_parameter: int = 1, sequence_index: int = 1) -> Term:
        return Term(
            sequence_index=sequence_index,
            basis=basis,
            coefficient=coefficient,
            group_parameter=group_parameter,
        )

    return _make


@pytest.fixture
def ansatz_lines():
    """A small four-qubit ansatz mixing dependent and independent terms."""
    return [
        "XIII 0.25 0",
        "IYZI -1.0 1",
        "ZZZZ 0.5 1",
        "XYXZ 2.0 0",
        "IIIY 0.125 4",
    ]
