from .debug_dump import DebugRecorder
from .grammar_loader import load_grammar
from .lark_parser import RustParser, get_parser

__all__ = ["DebugRecorder", "RustParser", "get_parser", "load_grammar"]
