"""
Natural-language table builders.

Turns free-text requests into tables using OpenAI, with a regex heuristic
fallback.
"""

from .base_builder import TableBuildError, TableBuilder
from .heuristic_builder import HeuristicTableBuilder
from .natural_language import NaturalLanguageTableBuilder, create_table_builder
from .openai_builder import OpenAITableBuilder

__all__ = [
    "TableBuilder",
    "TableBuildError",
    "HeuristicTableBuilder",
    "OpenAITableBuilder",
    "NaturalLanguageTableBuilder",
    "create_table_builder",
]
