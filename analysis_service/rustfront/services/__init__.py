from .analysis_service import AnalysisService, AnalysisState, analyse
from .graph_renderer import RenderMode, escape_dot_label, render_graph
from .tree_printer import to_lisp
from .tree_reducer import SUPPRESSED_TERMINALS, TreeReducer, reduce_tree

__all__ = [
    "AnalysisService",
    "AnalysisState",
    "RenderMode",
    "SUPPRESSED_TERMINALS",
    "TreeReducer",
    "analyse",
    "escape_dot_label",
    "reduce_tree",
    "render_graph",
    "to_lisp",
]
