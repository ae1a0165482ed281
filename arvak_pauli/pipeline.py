"""Concurrent compilation of a term sequence into one OpenQASM program."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from operator import attrgetter
from pathlib import Path
from typing import Iterable, Sequence

from .codegen import compile_term
from .exceptions import ValidationError
from .loader import load_file, load_terms
from .types import CompilationResult, CompiledBlock, CompileOptions, QasmVersion, Term

logger = logging.getLogger(__name__)

_DEFAULT_VERSION = 2

_HEADERS = {
    QasmVersion.V3: 'OPENQASM 3.0;\ninclude "stdgates.inc";\nqubit[{0}] q;\nbit[{0}] c;\n',
    QasmVersion.V2: 'OPENQASM 2.0;\ninclude "qelib1.inc";\nqreg q[{0}];\ncreg c[{0}];\n',
}


def build_header(num_qubits: int, version: int = _DEFAULT_VERSION) -> str:
    """Register declarations for *num_qubits* in the requested dialect."""
    return _HEADERS[QasmVersion.from_flag(version)].format(num_qubits)


def _ordered_terms(terms: Sequence[Term]) -> list[Term]:
    if not terms:
        raise ValidationError("no operator terms")

    ordered = sorted(terms, key=attrgetter("sequence_index"))
    num_qubits = ordered[0].num_qubits
    seen: set[int] = set()
    for term in ordered:
        if term.sequence_index in seen:
            raise ValidationError("duplicate sequence index", term.sequence_index)
        if term.num_qubits != num_qubits:
            raise ValidationError("length mismatch", term.sequence_index)
        seen.add(term.sequence_index)
    return ordered


def _run_inline(terms: list[Term], prefix: str) -> list[CompiledBlock]:
    return [compile_term(term, prefix) for term in terms]


def _run_parallel(
    terms: list[Term], prefix: str, max_workers: int | None
) -> list[CompiledBlock]:
    # One write-once slot per term; workers never touch each other's slot.
    slots: list[CompiledBlock | None] = [None] * len(terms)

    def work(position: int) -> None:
        slots[position] = compile_term(terms[position], prefix)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(work, position): position for position in range(len(terms))}
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        failed = [future for future in done if future.exception() is not None]
        if failed:
            for future in pending:
                future.cancel()
            first = min(failed, key=futures.__getitem__)
            logger.debug(
                "Aborting compilation at line %d, cancelled %d pending terms",
                terms[futures[first]].sequence_index,
                len(pending),
            )
            raise first.exception()

    assert all(slot is not None for slot in slots), "unfilled result slot"
    return slots  # type: ignore[return-value]


def compile_terms(
    terms: Sequence[Term],
    version: int = _DEFAULT_VERSION,
    multiplier: float | None = None,
    max_workers: int | None = None,
) -> CompilationResult:
    """Compile *terms* into a single OpenQASM program.

    Terms are compiled independently on a thread pool; the output always
    lists them in ascending ``sequence_index`` order.

    Parameters
    ----------
    terms : Sequence[Term]
        Terms sharing one basis length.
    version : int
        ``3`` selects OpenQASM 3.0 register declarations, anything else 2.0.
    multiplier : float | None
        Overrides the default ``0.5`` angle scale factor.
    max_workers : int | None
        Thread count.  ``1`` compiles in the calling thread.

    Raises
    ------
    FormatError, ValidationError, DecodeError
        The first failing term aborts the whole compilation.
    """
    options = CompileOptions(
        version=QasmVersion.from_flag(version),
        multiplier=multiplier,
        max_workers=max_workers,
    )
    ordered = _ordered_terms(terms)
    num_qubits = ordered[0].num_qubits
    prefix = options.angle_prefix

    if options.max_workers == 1 or len(ordered) == 1:
        blocks = _run_inline(ordered, prefix)
    else:
        blocks = _run_parallel(ordered, prefix, options.max_workers)

    logger.debug(
        "Compiled %d terms on %d qubits (OpenQASM %d)",
        len(blocks),
        num_qubits,
        options.version,
    )
    return CompilationResult(
        header=build_header(num_qubits, options.version),
        blocks=tuple(blocks),
        num_qubits=num_qubits,
        version=options.version,
    )


def compile_lines(
    lines: Iterable[str],
    version: int = _DEFAULT_VERSION,
    multiplier: float | None = None,
    max_workers: int | None = None,
) -> CompilationResult:
    """Load raw input lines and compile them."""
    return compile_terms(
        load_terms(lines),
        version=version,
        multiplier=multiplier,
        max_workers=max_workers,
    )


def compile_file(
    in_path: str | Path,
    version: int = _DEFAULT_VERSION,
    out_path: str | Path | None = None,
    multiplier: float | None = None,
    max_workers: int | None = None,
) -> CompilationResult:
    """Compile the term file at *in_path*, optionally writing the program."""
    result = compile_terms(
        load_file(in_path),
        version=version,
        multiplier=multiplier,
        max_workers=max_workers,
    )
    if out_path is not None:
        Path(out_path).write_text(result.text, encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(result.text), out_path)
    return result
