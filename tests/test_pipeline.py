"""Tests for the concurrent compilation pipeline."""

import threading
import time

import pytest

import arvak_pauli.pipeline as pipeline
from arvak_pauli.codegen import compile_term
from arvak_pauli.exceptions import DecodeError, FormatError, ValidationError
from arvak_pauli.pipeline import build_header, compile_file, compile_lines, compile_terms
from arvak_pauli.types import CompilationResult, CompileOptions, QasmVersion

V2_HEADER = 'OPENQASM 2.0;\ninclude "qelib1.inc";\nqreg q[{0}];\ncreg c[{0}];\n'
V3_HEADER = 'OPENQASM 3.0;\ninclude "stdgates.inc";\nqubit[{0}] q;\nbit[{0}] c;\n'


class TestHeader:
    def test_version_2(self):
        assert build_header(4, 2) == V2_HEADER.format(4)

    def test_version_3(self):
        assert build_header(3, 3) == V3_HEADER.format(3)

    @pytest.mark.parametrize("version", [0, 1, 4, 30])
    def test_other_versions_fall_back_to_2(self, version):
        assert build_header(2, version) == V2_HEADER.format(2)


class TestCompileLines:
    def test_full_program(self):
        result = compile_lines(["XZ 1.0 1"])
        assert result.text == (
            V2_HEADER.format(2)
            + "\n// New operator from line 1\n"
            "ry(pi/2) q[0];\n"
            "cx q[0], q[1];\n"
            "rz(0.5*1.0*$[1]) q[1];\n"
            "cx q[0], q[1];\n"
            "ry(-pi/2) q[0];\n"
        )

    def test_register_width_matches_first_record(self, ansatz_lines):
        result = compile_lines(ansatz_lines, version=3)
        assert result.num_qubits == 4
        assert result.version is QasmVersion.V3
        assert result.text.startswith(V3_HEADER.format(4))

    def test_blocks_in_input_order(self, ansatz_lines):
        result = compile_lines(ansatz_lines, max_workers=4)
        assert [b.sequence_index for b in result.blocks] == [1, 2, 3, 4, 5]
        positions = [result.text.index(f"// New operator from line {i}\n") for i in range(1, 6)]
        assert positions == sorted(positions)

    def test_result_container(self, ansatz_lines):
        result = compile_lines(ansatz_lines)
        assert isinstance(result, CompilationResult)
        assert len(result) == 5
        assert str(result) == result.text

    def test_idempotent(self, ansatz_lines):
        first = compile_lines(ansatz_lines, version=3, multiplier=0.75)
        second = compile_lines(ansatz_lines, version=3, multiplier=0.75)
        assert first.text == second.text

    def test_sequential_matches_parallel(self, ansatz_lines):
        sequential = compile_lines(ansatz_lines, max_workers=1)
        parallel = compile_lines(ansatz_lines, max_workers=8)
        assert sequential.text == parallel.text

    def test_multiplier_override(self):
        text = compile_lines(["X 2.0 1", "Y 0.5 0"], multiplier=1.0).text
        assert "rz(1.0*2.0*$[1]) q[0];" in text
        assert "rz(1.0*0.5*$[2]) q[0];" in text
        assert "0.5*2.0" not in text

    def test_shared_group_parameter_token(self):
        result = compile_lines(["XI 1.0 3", "IX 1.0 0", "ZZ 0.5 3"])
        tokens = [block.text.split("*$[")[1].split("]")[0] for block in result.blocks]
        assert tokens == ["3", "2", "3"]

    def test_load_errors_propagate(self):
        with pytest.raises(FormatError) as excinfo:
            compile_lines(["XY 1.0 1", "XY abc 1"])
        assert excinfo.value.line_number == 2

    def test_all_identity_term_rejected(self):
        with pytest.raises(DecodeError) as excinfo:
            compile_lines(["XI 1.0 0", "II 1.0 0", "IZ 1.0 0"], max_workers=2)
        assert excinfo.value.line_number == 2

    def test_unsupported_character_aborts(self):
        lines = ["XZ 1.0 0" for _ in range(20)] + ["XQ 1.0 0"]
        with pytest.raises(DecodeError) as excinfo:
            compile_lines(lines, max_workers=4)
        assert excinfo.value.line_number == 21
        assert excinfo.value.character == "Q"


class TestCompileTerms:
    def test_empty_input_rejected(self):
        with pytest.raises(ValidationError, match="no operator terms"):
            compile_terms([])

    def test_length_mismatch_in_direct_terms(self, make_term):
        terms = [make_term("XX", sequence_index=1), make_term("XXX", sequence_index=2)]
        with pytest.raises(ValidationError) as excinfo:
            compile_terms(terms)
        assert excinfo.value.reason == "length mismatch"
        assert excinfo.value.line_number == 2

    def test_width_comes_from_lowest_sequence_index(self, make_term):
        terms = [make_term("XXX", sequence_index=2), make_term("XX", sequence_index=1)]
        with pytest.raises(ValidationError) as excinfo:
            compile_terms(terms)
        assert excinfo.value.reason == "length mismatch"
        assert excinfo.value.line_number == 2

    def test_duplicate_sequence_index(self, make_term):
        terms = [make_term("XX", sequence_index=1), make_term("ZZ", sequence_index=1)]
        with pytest.raises(ValidationError, match="duplicate sequence index"):
            compile_terms(terms)

    def test_unsorted_terms_are_emitted_in_order(self, make_term):
        terms = [make_term("ZZ", sequence_index=i) for i in (3, 1, 2)]
        result = compile_terms(terms)
        assert [b.sequence_index for b in result.blocks] == [1, 2, 3]

    def test_invalid_worker_count(self, make_term):
        with pytest.raises(ValueError):
            compile_terms([make_term("X")], max_workers=0)


class TestConcurrency:
    def test_order_independent_of_completion_order(self, monkeypatch):
        lines = [f"{'XYZI'[i % 4]}{'ZXY'[i % 3]}Z {i + 1}.5 {i % 3}" for i in range(24)]
        expected = compile_lines(lines, max_workers=1).text

        finished = []
        lock = threading.Lock()

        def slow_compile_term(term, prefix):
            # Earlier terms sleep longer so they finish last.
            time.sleep((len(lines) - term.sequence_index) * 0.002)
            block = compile_term(term, prefix)
            with lock:
                finished.append(term.sequence_index)
            return block

        monkeypatch.setattr(pipeline, "compile_term", slow_compile_term)
        result = compile_lines(lines, max_workers=len(lines))

        assert sorted(finished) == list(range(1, len(lines) + 1))
        assert finished != sorted(finished)
        assert result.text == expected

    def test_first_error_cancels_pending_work(self, monkeypatch, make_term):
        calls = []

        def failing_compile_term(term, prefix):
            calls.append(term.sequence_index)
            if term.sequence_index == 1:
                raise DecodeError("all-identity operator", term.sequence_index)
            time.sleep(0.01)
            return compile_term(term, prefix)

        monkeypatch.setattr(pipeline, "compile_term", failing_compile_term)
        terms = [make_term("XZ", sequence_index=i) for i in range(1, 101)]

        with pytest.raises(DecodeError) as excinfo:
            compile_terms(terms, max_workers=2)
        assert excinfo.value.line_number == 1
        assert len(calls) < len(terms)

    def test_angle_prefix_captured_once(self, monkeypatch, ansatz_lines):
        prefixes = set()

        def recording_compile_term(term, prefix):
            prefixes.add(prefix)
            return compile_term(term, prefix)

        monkeypatch.setattr(pipeline, "compile_term", recording_compile_term)
        compile_lines(ansatz_lines, multiplier=2.5, max_workers=3)
        assert prefixes == {"2.5*"}


class TestCompileOptions:
    def test_defaults(self):
        options = CompileOptions()
        assert options.version is QasmVersion.V2
        assert options.angle_prefix == "0.5*"

    @pytest.mark.parametrize("multiplier", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_multiplier_rejected(self, multiplier):
        with pytest.raises(ValidationError, match="non-finite multiplier"):
            CompileOptions(multiplier=multiplier)

    def test_non_finite_multiplier_never_reaches_output(self):
        with pytest.raises(ValidationError):
            compile_lines(["XZ 1.0 1"], multiplier=float("nan"))

    def test_frozen(self):
        options = CompileOptions(multiplier=1.0)
        with pytest.raises(AttributeError):
            options.multiplier = 2.0

    def test_version_flag(self):
        assert QasmVersion.from_flag(3) is QasmVersion.V3
        assert QasmVersion.from_flag(2) is QasmVersion.V2
        assert QasmVersion.from_flag(7) is QasmVersion.V2


class TestCompileFile:
    def test_writes_output(self, tmp_path, ansatz_lines):
        in_path = tmp_path / "ansatz.txt"
        out_path = tmp_path / "ansatz.qasm"
        in_path.write_text("\n".join(ansatz_lines) + "\n", encoding="utf-8")

        result = compile_file(in_path, version=3, out_path=out_path)

        assert out_path.read_text(encoding="utf-8") == result.text
        assert result.text == compile_lines(ansatz_lines, version=3).text

    def test_no_output_path(self, tmp_path):
        in_path = tmp_path / "ansatz.txt"
        in_path.write_text("X 2.0 1\n", encoding="utf-8")
        result = compile_file(in_path)
        assert result.num_qubits == 1
        assert list(tmp_path.iterdir()) == [in_path]
