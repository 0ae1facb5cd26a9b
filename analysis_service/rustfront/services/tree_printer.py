"""Forma LISP del CST: `(regla hijo1 hijo2 ...)`."""

from typing import List, Union

from ..domain.tree_models import Rule, Terminal


def _escape_whitespace(text: str) -> str:
    return text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


def to_lisp(node: Union[Terminal, Rule]) -> str:
    parts: List[str] = []
    # nodos pendientes y separadores ya resueltos
    stack: List[Union[str, Terminal, Rule]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif item.kind == "terminal":
            parts.append(_escape_whitespace(item.text))
        elif not item.children:
            parts.append(item.name)
        else:
            parts.append("(" + item.name)
            stack.append(")")
            for child in reversed(item.children):
                stack.append(child)
                stack.append(" ")
    return "".join(parts)
