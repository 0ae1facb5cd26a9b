"""
analysis_service.py - Orquestador del análisis
==============================================

Responsabilidad: ejecutar el pipeline completo sobre un código fuente y
devolver un único AnalysisResult.

Flujo:
1. Lexer/parser externo → tokens, CST y diagnósticos
2. CST → DOT y forma LISP
3. CST → AST (TreeReducer) → DOT
4. success = no hay diagnósticos

Ninguna excepción sale de `analyze()`: un fallo inesperado se convierte en
un diagnóstico en (0, 0) y se conservan los campos ya calculados.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..domain.analysis_models import (
    AnalysisResult,
    AstInfo,
    CstInfo,
    Diagnostic,
    ParserAdapter,
    Token,
)
from ..domain.tree_models import AstNode, Rule, Terminal, count_nodes
from ..infrastructure.debug_dump import DebugRecorder
from ..infrastructure.lark_parser import get_parser
from .graph_renderer import RenderMode, render_graph
from .tree_printer import to_lisp
from .tree_reducer import TreeReducer


logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    IDLE = "idle"
    ANALYZED = "analyzed"


class AnalysisService:
    """
    Orquestador con estado de un análisis.

    Una instancia no debe compartirse entre peticiones concurrentes; la capa
    HTTP crea una por petición.
    """

    def __init__(
        self,
        adapter: Optional[ParserAdapter] = None,
        debug_recorder: Optional[DebugRecorder] = None,
        reducer: Optional[TreeReducer] = None,
    ):
        if adapter is None:
            adapter = get_parser()
        self.adapter = adapter
        self.debug_recorder = debug_recorder
        self.reducer = reducer or TreeReducer()
        self._clear()

    def _clear(self) -> None:
        self._state = AnalysisState.IDLE
        self._tokens: Tuple[Token, ...] = ()
        self._cst: Optional[Union[Terminal, Rule]] = None
        self._ast: Optional[AstNode] = None
        self._result: Optional[AnalysisResult] = None

    # ------------------------------------------------------------------------
    # ACCESORES
    # ------------------------------------------------------------------------

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._tokens

    @property
    def cst(self) -> Optional[Union[Terminal, Rule]]:
        return self._cst

    @property
    def ast(self) -> Optional[AstNode]:
        return self._ast

    # ------------------------------------------------------------------------
    # CICLO DE VIDA
    # ------------------------------------------------------------------------

    def analyze(self, source: str) -> AnalysisResult:
        """
        Analiza `source` desde cero.

        Args:
            source: código fuente completo

        Returns:
            AnalysisResult: también queda disponible en `self.result`
        """
        self._clear()
        logger.debug("Iniciando análisis (%d caracteres)", len(source))

        diagnostics: List[Diagnostic] = []
        cst_info = CstInfo()
        ast_info = AstInfo()

        try:
            lexed = self.adapter.tokenize(source)
            self._tokens = tuple(lexed.tokens)
            diagnostics.extend(lexed.diagnostics)

            parsed = self.adapter.parse(source)
            self._cst = parsed.tree
            diagnostics.extend(parsed.diagnostics)

            cst_info = CstInfo(
                lisp=to_lisp(self._cst),
                dot=render_graph(self._cst, RenderMode.CST),
            )

            self._ast = self.reducer.reduce(self._cst)
            ast_info = AstInfo(dot=render_graph(self._ast, RenderMode.AST))
            logger.debug("CST de %d nodos reducido a AST de %d nodos", count_nodes(self._cst), count_nodes(self._ast))

        except Exception as e:
            logger.exception("Error inesperado durante el análisis")
            diagnostics.append(Diagnostic(line=0, column=0, message=f"Error inesperado: {e}"))

        self._result = AnalysisResult(
            success=not diagnostics,
            tokens=self._tokens,
            cst=cst_info,
            ast=ast_info,
            diagnostics=tuple(diagnostics),
        )
        self._state = AnalysisState.ANALYZED

        logger.info(
            "Análisis terminado: %d tokens, %d diagnósticos, success=%s",
            len(self._tokens), len(diagnostics), self._result.success,
        )

        if self.debug_recorder is not None:
            self.debug_recorder.record(source, self._result)

        return self._result

    def reset(self) -> None:
        """Descarta el último análisis y vuelve a IDLE."""
        if self._state is AnalysisState.IDLE:
            return
        self._clear()


def analyse(
    source: str,
    adapter: Optional[ParserAdapter] = None,
    debug_recorder: Optional[DebugRecorder] = None,
) -> AnalysisResult:
    """Analiza `source` con un orquestador nuevo."""
    return AnalysisService(adapter=adapter, debug_recorder=debug_recorder).analyze(source)
