"""Esquemas de entrada/salida del servicio de análisis.

Define los modelos de petición y respuesta para los endpoints:
- `/analyse`, `/analyze`: análisis completo de código Rust
- `/reduce`: reducción y renderizado de un CST externo

Los nombres de campo en JSON siguen el contrato del editor web
(`parseTree`, `errors`, `type`).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .domain.analysis_models import AnalysisResult
from .domain.tree_models import CstNode


# MODELOS DE PETICIÓN

class AnalyzeReq(BaseModel):
    """
    Modelo de solicitud para el endpoint `/analyze`.

    Atributos:
        code (str): código fuente Rust a analizar.
    """
    code: str


class ReduceReq(BaseModel):
    """
    Modelo de solicitud para el endpoint `/reduce`.

    Atributos:
        cst (CstNode): árbol concreto serializado, con `kind` en cada nodo.
    """
    cst: CstNode


# MODELOS AUXILIARES

class TokenOut(BaseModel):
    type: str
    text: str
    line: int
    column: int


class ErrorOut(BaseModel):
    line: int
    column: int
    message: str


class ParseTreeOut(BaseModel):
    lisp: str = ""
    dot: str = ""


class AstOut(BaseModel):
    dot: str = ""


# MODELOS DE RESPUESTA

class AnalyzeResp(BaseModel):
    """
    Respuesta de `/analyse` y `/analyze`.

    Atributos:
        success (bool): True si no hubo ningún diagnóstico.
        tokens (List[TokenOut]): tokens en orden, el último es EOF.
        parse_tree (ParseTreeOut): CST en LISP y DOT (JSON: `parseTree`).
        ast (AstOut): AST en DOT.
        errors (List[ErrorOut]): diagnósticos en orden de aparición.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    tokens: List[TokenOut] = Field(default_factory=list)
    parse_tree: ParseTreeOut = Field(default_factory=ParseTreeOut, alias="parseTree")
    ast: AstOut = Field(default_factory=AstOut)
    errors: List[ErrorOut] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeResp":
        return cls(
            success=result.success,
            tokens=[
                TokenOut(type=t.kind, text=t.text, line=t.line, column=t.column)
                for t in result.tokens
            ],
            parse_tree=ParseTreeOut(lisp=result.cst.lisp, dot=result.cst.dot),
            ast=AstOut(dot=result.ast.dot),
            errors=[
                ErrorOut(line=d.line, column=d.column, message=d.message)
                for d in result.diagnostics
            ],
        )


class ReduceResp(BaseModel):
    """Respuesta de `/reduce`: representaciones del CST recibido y de su AST."""
    model_config = ConfigDict(populate_by_name=True)

    parse_tree: ParseTreeOut = Field(alias="parseTree")
    ast: AstOut
