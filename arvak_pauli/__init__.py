"""arvak-pauli - Pauli-exponential ansatz to OpenQASM compiler.

Each input line ``<basis> <coefficient> <parameter>`` describes one term
of a variational ansatz.  Every term is compiled into
basis-change rotations, a CNOT ladder and one symbolic ``rz`` rotation.

Example
-------
>>> import arvak_pauli as ap
>>> result = ap.compile_lines(["XZ 1.0 1"], version=3)
>>> print(result.text, end="")
OPENQASM 3.0;
include "stdgates.inc";
qubit[2] q;
bit[2] c;
<BLANKLINE>
// New operator from line 1
ry(pi/2) q[0];
cx q[0], q[1];
rz(0.5*1.0*$[1]) q[1];
cx q[0], q[1];
ry(-pi/2) q[0];
"""

from ._formatting import angle_prefix, format_real
from .basis import decompose
from .codegen import compile_term, emit, select_pivot
from .exceptions import ArvakPauliError, DecodeError, FormatError, ValidationError
from .loader import MAX_PARAMETER, check_record, load_file, load_terms
from .pipeline import build_header, compile_file, compile_lines, compile_terms
from .types import (
    BasisIndices,
    CompilationResult,
    CompiledBlock,
    CompileOptions,
    QasmVersion,
    Term,
)

__version__ = "0.1.0"
__all__ = [
    # Loading
    "load_terms",
    "load_file",
    "check_record",
    "MAX_PARAMETER",
    # Decomposition / codegen
    "decompose",
    "select_pivot",
    "emit",
    "compile_term",
    "format_real",
    "angle_prefix",
    # Pipeline
    "build_header",
    "compile_terms",
    "compile_lines",
    "compile_file",
    # Types
    "Term",
    "BasisIndices",
    "CompiledBlock",
    "CompilationResult",
    "CompileOptions",
    "QasmVersion",
    # Exceptions
    "ArvakPauliError",
    "FormatError",
    "ValidationError",
    "DecodeError",
]
