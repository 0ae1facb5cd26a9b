"""
grammar_loader.py - Carga de gramáticas Lark
============================================

Responsabilidad única: localizar los archivos `.lark` empaquetados junto al
servicio y cachear su contenido.
"""

from pathlib import Path
from functools import lru_cache


GRAMMAR_DIR = Path(__file__).parents[1] / "grammar"
DEFAULT_GRAMMAR = "rust"


def grammar_path(name: str = DEFAULT_GRAMMAR) -> Path:
    """Ruta del archivo `<name>.lark` dentro del paquete."""
    return GRAMMAR_DIR / f"{name}.lark"


@lru_cache(maxsize=4)
def load_grammar(name: str = DEFAULT_GRAMMAR) -> str:
    """
    Lee una gramática empaquetada.

    Args:
        name: nombre del archivo sin extensión (por defecto "rust")

    Returns:
        str: texto de la gramática

    Raises:
        FileNotFoundError: si el archivo no existe
    """
    path = grammar_path(name)
    if not path.is_file():
        raise FileNotFoundError(f"Archivo de gramática no encontrado: {path}")
    return path.read_text(encoding="utf-8")
