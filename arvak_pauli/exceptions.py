"""Error hierarchy for arvak-pauli."""

from __future__ import annotations


class ArvakPauliError(Exception):
    """Base exception for all arvak-pauli errors."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        self.reason = message
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class FormatError(ArvakPauliError):
    """An input line does not split into basis, coefficient and parameter."""

    def __init__(self, line_number: int) -> None:
        super().__init__("Wrong format", line_number)


class ValidationError(ArvakPauliError):
    """An input record is well-formed but semantically invalid."""

    def __init__(self, reason: str, line_number: int | None = None) -> None:
        super().__init__(reason, line_number)


class DecodeError(ArvakPauliError):
    """A basis string cannot be turned into qubit rotations."""

    def __init__(
        self,
        reason: str,
        line_number: int | None = None,
        character: str | None = None,
        position: int | None = None,
    ) -> None:
        self.character = character
        self.position = position
        if character is not None:
            reason = f"{reason} {character!r} at position {position}"
        super().__init__(reason, line_number)
