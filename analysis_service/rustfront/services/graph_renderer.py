"""
graph_renderer.py - Serialización de árboles a Graphviz DOT
===========================================================

Responsabilidad: producir la descripción DOT (texto) del CST o del AST
con `graphviz.Digraph`.

Los identificadores `node0`, `node1`, ... se asignan en pre-orden; cada
arista aparece justo después de la declaración del hijo.
"""

from enum import Enum
from typing import List, Optional, Tuple, Union

import graphviz

from ..domain.tree_models import AstRule, AstTerminal, Rule, Terminal

TreeLike = Union[Terminal, Rule, AstTerminal, AstRule]


class RenderMode(str, Enum):
    CST = "CST"
    AST = "AST"


_GRAPH_ATTR = {"rankdir": "TB"}

_NODE_ATTR = {
    RenderMode.CST: {"shape": "ellipse", "style": "filled", "fillcolor": "lightblue"},
    RenderMode.AST: {"shape": "ellipse", "style": "filled"},
}

_EDGE_ATTR = {
    RenderMode.CST: {"color": "black"},
    RenderMode.AST: {"color": "darkgreen"},
}

_STYLES = {
    (RenderMode.CST, "terminal"): {"shape": "box", "style": "filled", "fillcolor": "yellow"},
    (RenderMode.CST, "rule"): {},
    (RenderMode.AST, "terminal"): {"fillcolor": "black", "shape": "ellipse", "fontcolor": "white"},
    (RenderMode.AST, "rule"): {"fillcolor": "lightcoral", "shape": "ellipse", "fontcolor": "black"},
}

_WHITESPACE_NAMES = {" ": "SPACE", "\n": "NEWLINE", "\t": "TAB"}


def escape_dot_label(text: Optional[str]) -> str:
    """
    Escapa un texto para usarlo entre comillas en DOT.

    El orden importa: primero la barra invertida, después comillas y
    caracteres de control. graphviz no vuelve a escapar una comilla que ya
    va precedida de barra.
    """
    if text is None:
        return ""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def display_label(node: TreeLike, mode: RenderMode) -> str:
    """Etiqueta visible de un nodo (antes de escapar)."""
    if mode is RenderMode.AST:
        return node.label
    if node.kind == "rule":
        return node.name
    if node.text == "<EOF>":
        return "EOF"
    if node.text and node.text.isspace():
        return _WHITESPACE_NAMES.get(node.text, "WHITESPACE")
    return node.text


def build_graph(tree: TreeLike, mode: RenderMode) -> graphviz.Digraph:
    """
    Construye el `Digraph` de un árbol.

    Recorrido en pre-orden con pila explícita: la profundidad del CST no
    está acotada por el límite de recursión.
    """
    mode = RenderMode(mode)
    graph = graphviz.Digraph(
        mode.value,
        graph_attr=_GRAPH_ATTR,
        node_attr=_NODE_ATTR[mode],
        edge_attr=_EDGE_ATTR[mode],
    )

    next_id = 0
    stack: List[Tuple[TreeLike, Optional[str]]] = [(tree, None)]
    while stack:
        node, parent = stack.pop()
        node_id = f"node{next_id}"
        next_id += 1

        # nohtml: "<EOF>" es una etiqueta de texto, no HTML
        label = graphviz.nohtml(escape_dot_label(display_label(node, mode)))
        graph.node(node_id, label=label, **_STYLES[(mode, node.kind)])
        if parent is not None:
            graph.edge(parent, node_id)

        if node.kind == "rule":
            stack.extend((child, node_id) for child in reversed(node.children))

    return graph


def render_graph(tree: TreeLike, mode: RenderMode) -> str:
    """
    Genera el grafo DOT de un árbol.

    Args:
        tree: raíz del CST o del AST
        mode: RenderMode.CST o RenderMode.AST

    Returns:
        str: documento `digraph` completo
    """
    return build_graph(tree, mode).source
