"""Modelos del resultado de análisis.

Define los objetos que produce y consume el orquestador:
- Token, Diagnostic: salida del lexer/parser externo
- CstInfo, AstInfo, AnalysisResult: resultado final de una petición
- LexOutcome, ParseOutcome, ParserAdapter: contrato con el parser externo
"""

from typing import Protocol, Tuple

from pydantic import BaseModel, ConfigDict

from .tree_models import CstNode


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# SALIDA DEL LEXER / PARSER

class Token(_Frozen):
    """
    Token producido por el lexer.

    Atributos:
        kind (str): nombre simbólico del token, o "EOF" para el fin de entrada.
        text (str): texto del token.
        line (int): número de línea (1-based).
        column (int): número de columna (0-based).
    """
    kind: str
    text: str
    line: int
    column: int


class Diagnostic(_Frozen):
    """Problema sintáctico localizado (o el error inesperado en (0, 0))."""
    line: int
    column: int
    message: str


# RESULTADO DE ANÁLISIS

class CstInfo(_Frozen):
    """Representaciones del CST: forma LISP y grafo DOT."""
    lisp: str = ""
    dot: str = ""


class AstInfo(_Frozen):
    """Representación DOT del AST."""
    dot: str = ""


class AnalysisResult(_Frozen):
    """
    Resultado completo de un análisis.

    Se construye una sola vez por llamada a `analyze()`; los campos que no
    llegaron a calcularse quedan vacíos, nunca indefinidos.
    """
    success: bool
    tokens: Tuple[Token, ...] = ()
    cst: CstInfo = CstInfo()
    ast: AstInfo = AstInfo()
    diagnostics: Tuple[Diagnostic, ...] = ()


# CONTRATO CON EL PARSER EXTERNO

class LexOutcome(_Frozen):
    """Fase léxica: tokens (terminados en EOF) y errores léxicos."""
    tokens: Tuple[Token, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()


class ParseOutcome(_Frozen):
    """Fase sintáctica: CST (posiblemente parcial) y errores sintácticos."""
    tree: CstNode
    diagnostics: Tuple[Diagnostic, ...] = ()


class ParserAdapter(Protocol):
    """Lo que el orquestador necesita del lexer/parser externo."""

    def tokenize(self, code: str) -> LexOutcome:
        ...

    def parse(self, code: str) -> ParseOutcome:
        ...
