from .analysis_models import (
    AnalysisResult,
    AstInfo,
    CstInfo,
    Diagnostic,
    LexOutcome,
    ParseOutcome,
    ParserAdapter,
    Token,
)
from .rule_categories import RULE_CATEGORIES, RuleCategory, category_of, canonical_rule_name
from .tree_models import AstNode, AstRule, AstTerminal, CstNode, Rule, Terminal, count_nodes

__all__ = [
    "AnalysisResult",
    "AstInfo",
    "AstNode",
    "AstRule",
    "AstTerminal",
    "CstInfo",
    "CstNode",
    "Diagnostic",
    "LexOutcome",
    "ParseOutcome",
    "ParserAdapter",
    "RULE_CATEGORIES",
    "Rule",
    "RuleCategory",
    "Terminal",
    "Token",
    "canonical_rule_name",
    "category_of",
    "count_nodes",
]
