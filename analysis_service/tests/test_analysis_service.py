"""
Pruebas del orquestador de análisis
===================================

Pipeline completo con el parser real y rutas de fallo con adaptadores
falsos.
"""

import json
from datetime import datetime

from rustfront.domain.analysis_models import Diagnostic, LexOutcome, ParseOutcome, Token
from rustfront.domain.tree_models import Rule, Terminal
from rustfront.infrastructure.debug_dump import DebugRecorder, timestamp
from rustfront.schemas import AnalyzeResp
from rustfront.services.analysis_service import AnalysisService, AnalysisState, analyse


# ============================================================================
# ADAPTADORES FALSOS
# ============================================================================

class FailingParseAdapter:
    """Tokeniza bien y falla al parsear."""

    def tokenize(self, code):
        return LexOutcome(tokens=(
            Token(kind="IDENT", text=code, line=1, column=0),
            Token(kind="EOF", text="<EOF>", line=1, column=len(code)),
        ))

    def parse(self, code):
        raise RuntimeError("parser roto")


class DiagnosticAdapter:
    """Devuelve un árbol válido junto con un diagnóstico léxico y otro sintáctico."""

    def tokenize(self, code):
        return LexOutcome(
            tokens=(Token(kind="EOF", text="<EOF>", line=1, column=0),),
            diagnostics=(Diagnostic(line=1, column=0, message="léxico"),),
        )

    def parse(self, code):
        return ParseOutcome(
            tree=Rule(name="crate", children=(Terminal(text="<EOF>", token_type="EOF"),)),
            diagnostics=(Diagnostic(line=1, column=1, message="sintáctico"),),
        )


# ============================================================================
# PIPELINE REAL
# ============================================================================

def test_hello_world(hello_world):
    result = analyse(hello_world)

    assert result.success
    assert result.tokens
    assert result.tokens[-1].kind == "EOF"
    assert result.diagnostics == ()
    assert result.cst.dot.startswith("digraph CST {")
    assert result.cst.lisp.startswith("(crate ")
    assert result.ast.dot.startswith("digraph AST {")
    assert "function_declaration" in result.ast.dot
    assert "macro_invocation" in result.ast.dot


def test_missing_closing_brace():
    result = analyse("fn main() {\n    let x = 1;\n")

    assert not result.success
    assert len(result.diagnostics) >= 1
    for diagnostic in result.diagnostics:
        assert diagnostic.line >= 0
        assert diagnostic.column >= 0
    # el CST parcial se sigue renderizando
    assert result.cst.dot.startswith("digraph CST {")
    assert result.ast.dot.startswith("digraph AST {")


def test_lexical_error_fails_analysis():
    result = analyse("fn main() { let x = 1 @ 2; }")

    assert not result.success
    assert [d.message for d in result.diagnostics] == ["carácter no reconocido '@'"]


def test_deeply_nested_expression():
    """Anidar paréntesis no agota la pila en ninguna fase."""
    source = "fn f() -> i32 { " + "(" * 40 + "1" + ")" * 40 + " }"
    result = analyse(source)

    assert result.success, result.diagnostics
    assert result.cst.lisp.count("(") > 40
    assert result.ast.dot.count("[label=grouped_expression ") == 40


def test_empty_source():
    result = analyse("")

    assert result.success
    assert [t.kind for t in result.tokens] == ["EOF"]
    assert "node0 [label=crate " in result.ast.dot


# ============================================================================
# ESTADOS
# ============================================================================

def test_initial_state_is_idle():
    service = AnalysisService()
    assert service.state is AnalysisState.IDLE
    assert service.result is None
    assert service.tokens == ()
    assert service.cst is None
    assert service.ast is None


def test_analyze_moves_to_analyzed(hello_world):
    service = AnalysisService()
    result = service.analyze(hello_world)

    assert service.state is AnalysisState.ANALYZED
    assert service.result is result
    assert service.cst.name == "crate"
    assert service.ast.label == "crate"


def test_reset_then_analyze_has_no_leftovers(hello_world):
    service = AnalysisService()
    service.analyze(hello_world)
    service.reset()

    assert service.state is AnalysisState.IDLE
    assert service.result is None
    assert service.tokens == ()

    result = service.analyze("use std;")
    assert [t.text for t in result.tokens] == ["use", "std", ";", "<EOF>"]


def test_reset_while_idle_is_noop():
    service = AnalysisService()
    service.reset()
    assert service.state is AnalysisState.IDLE


def test_analyze_twice_recomputes(hello_world):
    service = AnalysisService()
    service.analyze("use std;")
    result = service.analyze(hello_world)
    assert result.tokens[0].text == "fn"


# ============================================================================
# FALLOS
# ============================================================================

def test_unexpected_failure_is_reported():
    service = AnalysisService(adapter=FailingParseAdapter())
    result = service.analyze("x")

    assert not result.success
    assert result.diagnostics == (Diagnostic(line=0, column=0, message="Error inesperado: parser roto"),)
    # los tokens ya calculados se conservan
    assert [t.text for t in result.tokens] == ["x", "<EOF>"]
    assert result.cst.dot == ""
    assert result.cst.lisp == ""
    assert result.ast.dot == ""
    assert service.state is AnalysisState.ANALYZED


def test_service_is_reusable_after_failure(hello_world):
    service = AnalysisService(adapter=FailingParseAdapter())
    service.analyze("x")

    service.adapter = DiagnosticAdapter()
    result = service.analyze(hello_world)
    assert [d.message for d in result.diagnostics] == ["léxico", "sintáctico"]


def test_diagnostics_keep_adapter_order():
    result = analyse("x", adapter=DiagnosticAdapter())

    assert not result.success
    assert [d.message for d in result.diagnostics] == ["léxico", "sintáctico"]
    assert result.ast.dot.startswith("digraph AST {")


def test_unexpected_failure_is_appended_after_collected_diagnostics():
    class BrokenReducer:
        def reduce(self, tree):
            raise ValueError("sin AST")

    service = AnalysisService(adapter=DiagnosticAdapter(), reducer=BrokenReducer())
    result = service.analyze("x")

    assert [d.message for d in result.diagnostics] == ["léxico", "sintáctico", "Error inesperado: sin AST"]
    assert result.diagnostics[-1].line == 0
    assert result.cst.dot != ""
    assert result.ast.dot == ""


# ============================================================================
# VOLCADO DE DEPURACIÓN
# ============================================================================

def test_debug_dump_writes_both_files(tmp_path, hello_world):
    recorder = DebugRecorder(tmp_path / "dump")
    result = analyse(hello_world, debug_recorder=recorder)

    debug_files = list((tmp_path / "dump").glob("debug_*.json"))
    result_files = list((tmp_path / "dump").glob("analysis_result_*.json"))
    assert len(debug_files) == 1
    assert len(result_files) == 1

    payload = json.loads(debug_files[0].read_text(encoding="utf-8"))
    assert payload["sourceCode"] == hello_world
    assert payload["analysisResult"]["success"] is True
    assert set(payload["analysisResult"]) == {"success", "tokens", "parseTree", "ast", "errors"}
    assert payload["analysisResult"]["tokens"][0]["type"] == "FN"

    expected = AnalyzeResp.from_result(result).model_dump(mode="json", by_alias=True)
    assert json.loads(result_files[0].read_text(encoding="utf-8")) == expected


def test_no_debug_dump_by_default(tmp_path, monkeypatch, hello_world):
    monkeypatch.chdir(tmp_path)
    analyse(hello_world)
    assert list(tmp_path.iterdir()) == []


def test_debug_dump_failure_does_not_break_analysis(tmp_path, hello_world):
    blocker = tmp_path / "ocupado"
    blocker.write_text("no soy un directorio", encoding="utf-8")

    result = analyse(hello_world, debug_recorder=DebugRecorder(blocker))
    assert result.success


def test_timestamp_format():
    assert timestamp(datetime(2024, 5, 1, 13, 45, 10, 123456)) == "2024-05-01_13-45-10-123"
