"""Servicio de análisis de código Rust: tokens, CST, AST y grafos DOT."""

__version__ = "1.0.0"
