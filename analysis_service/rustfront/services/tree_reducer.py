"""
tree_reducer.py - Reducción CST → AST
=====================================

Responsabilidad: construir un AST nuevo a partir del CST eliminando la
puntuación y las reglas que solo envuelven a un único hijo.

El CST de entrada no se modifica.
"""

from typing import List, Mapping, Optional, Tuple, Union

from ..domain.rule_categories import RULE_CATEGORIES, RuleCategory, canonical_rule_name, category_of
from ..domain.tree_models import AstNode, AstRule, AstTerminal, Rule, Terminal


# Puntuación sin contenido semántico
SUPPRESSED_TERMINALS = frozenset({"(", ")", "{", "}", "[", "]", ";", ","})

ROOT_LABEL = "root"


class TreeReducer:
    """
    Reductor CST → AST en post-orden.

    Reglas:
    1. Terminal de puntuación → se descarta.
    2. Regla WRAPPER con un único hijo superviviente → se sustituye por él.
    3. Regla sin hijos que no sea IMPORTANT → se descarta.
    4. Resto → AstRule con el nombre canónico y los hijos supervivientes.
    """

    def __init__(self, categories: Mapping[str, RuleCategory] = RULE_CATEGORIES):
        self.categories = categories

    def reduce(self, root: Union[Terminal, Rule]) -> AstNode:
        """
        Reduce un CST completo.

        Si todo el árbol desaparece se devuelve una regla "root" vacía,
        de modo que el resultado siempre es un nodo.
        """
        reduced = self._reduce_node(root)
        if reduced is None:
            return AstRule(label=ROOT_LABEL)
        return reduced

    def _reduce_node(self, root: Union[Terminal, Rule]) -> Optional[AstNode]:
        # post-orden con pila explícita; `reduced` guarda los hijos ya resueltos
        reduced: List[Optional[AstNode]] = []
        pending: List[Tuple[Union[Terminal, Rule], bool]] = [(root, False)]

        while pending:
            node, expanded = pending.pop()
            if node.kind == "terminal":
                reduced.append(None if node.text in SUPPRESSED_TERMINALS else AstTerminal(label=node.text))
            elif not expanded:
                pending.append((node, True))
                pending.extend((child, False) for child in reversed(node.children))
            else:
                start = len(reduced) - len(node.children)
                survivors = [child for child in reduced[start:] if child is not None]
                del reduced[start:]
                reduced.append(self._reduce_rule(node.name, survivors))

        return reduced[0]

    def _reduce_rule(self, raw_name: str, survivors: List[AstNode]) -> Optional[AstNode]:
        name = canonical_rule_name(raw_name)
        category = category_of(name, self.categories)

        if category == RuleCategory.WRAPPER and len(survivors) == 1:
            return survivors[0]
        if not survivors and category != RuleCategory.IMPORTANT:
            return None
        return AstRule(label=name, children=tuple(survivors))


def reduce_tree(root: Union[Terminal, Rule]) -> AstNode:
    """Atajo con la tabla de categorías de la gramática de Rust."""
    return TreeReducer().reduce(root)
