"""Endpoints del servicio de análisis de Rust.

Responsabilidad única: traducir HTTP ↔ servicios. Cada petición usa un
orquestador nuevo; el parser Lark compartido solo se lee.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from .. import __version__
from ..config import settings
from ..infrastructure.debug_dump import DebugRecorder
from ..schemas import AnalyzeReq, AnalyzeResp, AstOut, ParseTreeOut, ReduceReq, ReduceResp
from ..services.analysis_service import analyse
from ..services.graph_renderer import RenderMode, render_graph
from ..services.tree_printer import to_lisp
from ..services.tree_reducer import reduce_tree


logger = logging.getLogger(__name__)

router = APIRouter()


def build_debug_recorder() -> Optional[DebugRecorder]:
    """Recorder de depuración según la configuración (None si está desactivado)."""
    if not settings.DEBUG_DUMP:
        return None
    return DebugRecorder(settings.DEBUG_DUMP_DIR)


def run_analysis(code: str) -> AnalyzeResp:
    result = analyse(code, debug_recorder=build_debug_recorder())
    return AnalyzeResp.from_result(result)


@router.post("/analyse", response_model=AnalyzeResp)
async def analyse_raw(request: Request) -> AnalyzeResp:
    """Analiza el código enviado como cuerpo de texto plano (editor web).

    Returns:
        AnalyzeResp: siempre 200; los fallos se indican con success=False
    """
    body = await request.body()
    code = body.decode("utf-8", errors="replace")
    return await run_in_threadpool(run_analysis, code)


@router.post("/analyze", response_model=AnalyzeResp)
def analyze(req: AnalyzeReq) -> AnalyzeResp:
    """Analiza el código recibido en JSON (`{"code": ...}`)."""
    return run_analysis(req.code)


@router.post("/reduce", response_model=ReduceResp)
def reduce_cst(req: ReduceReq) -> ReduceResp:
    """Reduce y renderiza un CST producido por un parser externo.

    Args:
        req: Solicitud con el CST serializado

    Returns:
        ReduceResp con el CST en LISP/DOT y el AST en DOT
    """
    try:
        ast = reduce_tree(req.cst)
        return ReduceResp(
            parse_tree=ParseTreeOut(lisp=to_lisp(req.cst), dot=render_graph(req.cst, RenderMode.CST)),
            ast=AstOut(dot=render_graph(ast, RenderMode.AST)),
        )
    except Exception as e:
        logger.exception("Error reduciendo el CST recibido")
        raise HTTPException(status_code=500, detail=f"Error en la reducción del CST: {e}")


@router.get("/health")
def health():
    """Endpoint de salud del servicio."""
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": __version__,
    }
