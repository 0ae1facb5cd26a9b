"""Adaptador del lexer/parser de Rust basado en Lark.

Responsabilidad: a partir del texto fuente producir
- la lista de tokens y los errores léxicos (`tokenize`)
- el CST y los errores sintácticos (`parse`)

El resto del servicio solo ve los modelos del dominio; los tipos de Lark no
salen de este módulo.
"""

import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from lark import Lark
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken
from lark.visitors import Transformer_NonRecursive

from ..domain.analysis_models import Diagnostic, LexOutcome, ParseOutcome, Token
from ..domain.tree_models import Rule, Terminal
from .grammar_loader import load_grammar


logger = logging.getLogger(__name__)

EOF_KIND = "EOF"
EOF_TEXT = "<EOF>"

# Cierres que se listan primero en "se esperaba ..."
CLOSING_LITERALS = ("'}'", "')'", "']'", "';'")


class LarkParserConfig:
    """Configuración del parser Earley."""

    START = "crate"
    PARSER = "earley"
    LEXER = "basic"
    KEEP_ALL_TOKENS = True
    MAX_EXPECTED = 10
    LEX_CACHE_SIZE = 16


def end_position(code: str) -> Tuple[int, int]:
    """Línea (1-based) y columna (0-based) justo después del último carácter."""
    line = code.count("\n") + 1
    column = len(code) - (code.rfind("\n") + 1)
    return line, column


def _absolute(line: int, column: int, base: Tuple[int, int]) -> Tuple[int, int]:
    """Convierte una posición de Lark relativa a un fragmento (columna 1-based)."""
    base_line, base_column = base
    if line == 1:
        return base_line, base_column + column - 1
    return base_line + line - 1, column - 1


def _expected_rank(literal: str) -> Tuple[int, str]:
    if literal in CLOSING_LITERALS:
        return CLOSING_LITERALS.index(literal), literal
    return len(CLOSING_LITERALS), literal


# ============================================================================
# PARSE TREE → CST
# ============================================================================

class CstBuilder(Transformer_NonRecursive):
    """
    Copia el árbol de Lark en los modelos inmutables del dominio.

    No recursivo: la profundidad del CST crece con cada nivel de precedencia
    y un anidamiento de paréntesis moderado supera el límite de recursión.
    """

    def __default__(self, data, children, meta):
        return Rule(name=str(data), children=tuple(children))

    def __default_token__(self, token: LarkToken):
        return Terminal(text=str(token), token_type=token.type)


# ============================================================================
# ADAPTADOR
# ============================================================================

class RustParser:
    """
    Lexer/parser de Rust basado en Lark.

    La instancia de Lark se construye una sola vez (ver `get_parser`) y solo
    se lee después, por lo que puede compartirse entre peticiones.
    """

    def __init__(self, grammar: Optional[str] = None):
        self._lark = Lark(
            grammar if grammar is not None else load_grammar(),
            start=LarkParserConfig.START,
            parser=LarkParserConfig.PARSER,
            lexer=LarkParserConfig.LEXER,
            keep_all_tokens=LarkParserConfig.KEEP_ALL_TOKENS,
            maybe_placeholders=False,
        )
        self._builder = CstBuilder()
        # `tokenize` y el CST parcial de `parse` comparten el resultado léxico
        self._lex = lru_cache(maxsize=LarkParserConfig.LEX_CACHE_SIZE)(self._lex_source)
        logger.info(
            "Parser Lark inicializado (%s/%s, regla inicial '%s')",
            LarkParserConfig.PARSER, LarkParserConfig.LEXER, LarkParserConfig.START,
        )

    # ------------------------------------------------------------------------
    # FASE LÉXICA
    # ------------------------------------------------------------------------

    def tokenize(self, code: str) -> LexOutcome:
        """
        Tokeniza el código fuente.

        Un carácter no reconocido produce un diagnóstico, se salta y el
        análisis léxico continúa desde el carácter siguiente. La lista
        termina siempre con el token EOF.
        """
        tokens, diagnostics = self._lex(code)
        return LexOutcome(tokens=tokens, diagnostics=diagnostics)

    def _lex_source(self, code: str) -> Tuple[Tuple[Token, ...], Tuple[Diagnostic, ...]]:
        tokens: List[Token] = []
        diagnostics: List[Diagnostic] = []
        offset = 0
        base = (1, 0)

        while True:
            try:
                for tok in self._lark.lex(code[offset:]):
                    line, column = _absolute(tok.line, tok.column, base)
                    tokens.append(Token(kind=tok.type, text=str(tok), line=line, column=column))
                break
            except UnexpectedCharacters as e:
                line, column = _absolute(e.line, e.column, base)
                diagnostics.append(Diagnostic(
                    line=line,
                    column=column,
                    message=f"carácter no reconocido '{e.char}'",
                ))
                # se reanuda justo después del carácter: (line, column + 1)
                base = (line, column + 1) if e.char != "\n" else (line + 1, 0)
                offset += e.pos_in_stream + 1

        line, column = end_position(code)
        tokens.append(Token(kind=EOF_KIND, text=EOF_TEXT, line=line, column=column))
        return tuple(tokens), tuple(diagnostics)

    # ------------------------------------------------------------------------
    # FASE SINTÁCTICA
    # ------------------------------------------------------------------------

    def parse(self, code: str) -> ParseOutcome:
        """
        Parsea el código fuente a CST.

        Ante un error sintáctico se devuelve un único diagnóstico y un CST
        parcial (la regla inicial con todos los tokens reconocidos). Los
        errores léxicos no se repiten aquí: los reporta `tokenize`.
        """
        try:
            tree = self._lark.parse(code)
        except UnexpectedCharacters:
            return ParseOutcome(tree=self._fallback_tree(code))
        except UnexpectedEOF as e:
            diagnostic = self._eof_diagnostic(e.expected, code)
            return ParseOutcome(tree=self._fallback_tree(code), diagnostics=(diagnostic,))
        except UnexpectedToken as e:
            if e.token.type == "$END":
                diagnostic = self._eof_diagnostic(e.expected, code)
            else:
                diagnostic = self._token_diagnostic(e, code)
            return ParseOutcome(tree=self._fallback_tree(code), diagnostics=(diagnostic,))

        root = self._builder.transform(tree)
        eof = Terminal(text=EOF_TEXT, token_type=EOF_KIND)
        return ParseOutcome(tree=Rule(name=root.name, children=(*root.children, eof)))

    def _fallback_tree(self, code: str) -> Rule:
        tokens, _ = self._lex(code)
        return Rule(
            name=LarkParserConfig.START,
            children=tuple(Terminal(text=t.text, token_type=t.kind) for t in tokens),
        )

    # ------------------------------------------------------------------------
    # DIAGNÓSTICOS
    # ------------------------------------------------------------------------

    def _eof_diagnostic(self, expected: Iterable[str], code: str) -> Diagnostic:
        line, column = end_position(code)
        return Diagnostic(
            line=line,
            column=column,
            message=f"fin de entrada inesperado, se esperaba {self._describe_expected(expected)}",
        )

    def _token_diagnostic(self, e: UnexpectedToken, code: str) -> Diagnostic:
        if isinstance(e.line, int) and isinstance(e.column, int) and e.line > 0:
            line, column = e.line, max(e.column - 1, 0)
        else:
            line, column = end_position(code)
        return Diagnostic(
            line=line,
            column=column,
            message=f"entrada inesperada '{e.token}', se esperaba {self._describe_expected(e.expected)}",
        )

    def _describe_expected(self, names: Iterable[str]) -> str:
        """Cierres primero, el resto en orden alfabético."""
        shown = sorted({self._terminal_literal(name) for name in names}, key=_expected_rank)
        if not shown:
            return "nada"
        text = ", ".join(shown[:LarkParserConfig.MAX_EXPECTED])
        if len(shown) > LarkParserConfig.MAX_EXPECTED:
            text += ", ..."
        return text

    def _terminal_literal(self, name: str) -> str:
        """`'('` para terminales literales, el nombre para los demás."""
        if name == "$END":
            return EOF_TEXT
        try:
            pattern = self._lark.get_terminal(name).pattern
        except KeyError:
            return name
        if pattern.type == "str":
            return f"'{pattern.value}'"
        return name


@lru_cache(maxsize=1)
def get_parser() -> RustParser:
    """Factory function para obtener la instancia compartida del parser."""
    return RustParser()
