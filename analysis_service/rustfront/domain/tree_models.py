"""Modelos de los árboles sintácticos (CST y AST).

Define las clases Pydantic que representan los dos árboles del pipeline:
- CST: Terminal, Rule (instantánea inmutable producida por el parser)
- AST: AstTerminal, AstRule (construido siempre de nuevo por el reductor)

Ambos árboles son uniones etiquetadas por el campo `kind`
("terminal" | "rule"); los recorridos despachan sobre ese campo.
"""

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class _FrozenNode(BaseModel):
    """Base común: los nodos no se modifican después de crearse."""
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# 1. ÁRBOL DE SINTAXIS CONCRETA (CST)
# ---------------------------------------------------------------------------

class Terminal(_FrozenNode):
    """
    Hoja del CST: el texto de un token tal como aparece en el código.

    Atributos:
        text (str): texto del token ("<EOF>" para el fin de entrada).
        token_type (Optional[str]): nombre simbólico del token, si se conoce.
    """
    kind: Literal["terminal"] = "terminal"
    text: str
    token_type: Optional[str] = None


class Rule(_FrozenNode):
    """
    Nodo interno del CST: una producción de la gramática.

    Atributos:
        name (str): nombre de la regla tal como la genera el parser.
        children (Tuple[CstNode, ...]): hijos en el orden original.
    """
    kind: Literal["rule"] = "rule"
    name: str
    children: Tuple["CstNode", ...] = ()


CstNode = Annotated[Union[Terminal, Rule], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# 2. ÁRBOL DE SINTAXIS ABSTRACTA (AST)
# ---------------------------------------------------------------------------

class AstTerminal(_FrozenNode):
    """Hoja del AST (identificador, literal, palabra clave u operador)."""
    kind: Literal["terminal"] = "terminal"
    label: str


class AstRule(_FrozenNode):
    """Nodo interno del AST con la etiqueta ya simplificada."""
    kind: Literal["rule"] = "rule"
    label: str
    children: Tuple["AstNode", ...] = ()


AstNode = Annotated[Union[AstTerminal, AstRule], Field(discriminator="kind")]


def count_nodes(node: Union[Terminal, Rule, AstTerminal, AstRule]) -> int:
    """Cuenta los nodos de cualquiera de los dos árboles."""
    total = 0
    pending = [node]
    while pending:
        current = pending.pop()
        total += 1
        if current.kind == "rule":
            pending.extend(current.children)
    return total


# RECONSTRUCCIÓN DE REFERENCIAS CIRCULARES

# Pydantic requiere este paso para resolver forward refs
for _M in (Rule, AstRule):
    _M.model_rebuild()
