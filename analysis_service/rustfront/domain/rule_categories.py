"""Clasificación explícita de las reglas de la gramática.

El reductor CST → AST necesita saber qué producciones son solo envoltorios
de precedencia (se aplanan cuando queda un único hijo) y cuáles son
estructuras que deben conservarse aunque queden vacías.

La tabla se indexa por el nombre canónico de la regla (sin sufijos
generados, ver `canonical_rule_name`). Las reglas que no aparecen son
reglas normales.
"""

from enum import Enum
from typing import Dict, Mapping


class RuleCategory(str, Enum):
    """Categoría de una regla para la reducción."""
    WRAPPER = "wrapper"
    IMPORTANT = "important"


# Sufijos puramente sintácticos que añaden los generadores de parsers
# (p. ej. ANTLR nombra las clases de contexto `Function_Context`).
GENERATED_SUFFIXES = ("Context",)


def canonical_rule_name(name: str) -> str:
    """Quita el sufijo generado, si lo hay: `Function_Context` → `Function_`."""
    for suffix in GENERATED_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


_WRAPPER_RULES = (
    # niveles de precedencia de expresiones
    "expression",
    "assignment_expression",
    "range_expression",
    "logical_or_expression",
    "logical_and_expression",
    "comparison_expression",
    "bitwise_or_expression",
    "bitwise_xor_expression",
    "bitwise_and_expression",
    "shift_expression",
    "additive_expression",
    "multiplicative_expression",
    "cast_expression",
    "unary_expression",
    "postfix_expression",
    "primary_expression",
    "block_like_expression",
    "literal_expression",
    # caminos y operadores
    "path_expression",
    "path_segment",
    "path",
    "assignment_operator",
    "comparison_operator",
    "unary_operator",
)

_IMPORTANT_RULES = (
    "crate",
    "item",
    "statement",
    "function_declaration",
    "function_parameters",
    "struct_declaration",
    "struct_fields",
    "tuple_fields",
    "enum_declaration",
    "impl_declaration",
    "trait_declaration",
    "use_declaration",
    "constant_declaration",
    "let_statement",
    "expression_statement",
    "block_expression",
)

RULE_CATEGORIES: Dict[str, RuleCategory] = {
    **{name: RuleCategory.WRAPPER for name in _WRAPPER_RULES},
    **{name: RuleCategory.IMPORTANT for name in _IMPORTANT_RULES},
}


def category_of(name: str, table: Mapping[str, RuleCategory] = RULE_CATEGORIES):
    """Categoría de una regla por su nombre canónico (None si es normal)."""
    return table.get(canonical_rule_name(name))
