#!/usr/bin/env python3
"""
NaturalLanguageTableBuilder: chooses between the remote and local builders.

Creation tries the language model first and falls back to the heuristic
parser. Edits only use the language model; on any failure the original
table is returned untouched.
"""

import logging
from typing import Optional

from ..tables.data_models import TableData
from ..utils.config import config
from .base_builder import TableBuildError, TableBuilder
from .heuristic_builder import HeuristicTableBuilder
from .openai_builder import OpenAITableBuilder

logger = logging.getLogger(__name__)


class NaturalLanguageTableBuilder(TableBuilder):
    """
    Composite builder selecting a strategy by availability and success.

    Responsibilities:
    - Prefer the primary (remote) builder when one is configured
    - Fall back to the heuristic builder for table creation
    - Never partially apply an edit
    """

    def __init__(
        self,
        primary: Optional[TableBuilder] = None,
        fallback: Optional[TableBuilder] = None
    ):
        """
        Initialize the composite builder.

        Args:
            primary: Remote builder, None when no API key is configured
            fallback: Local builder used when the primary fails
        """
        self.primary = primary
        self.fallback = fallback or HeuristicTableBuilder()

    def build_table(self, description: str) -> TableData:
        if self.primary is None:
            logger.warning("No language model configured, using fallback parser")
            return self.fallback.build_table(description)

        try:
            return self.primary.build_table(description)
        except TableBuildError as e:
            logger.warning(f"AI table creation failed, using fallback parser: {e}")
            return self.fallback.build_table(description)

    def modify_table(self, table: TableData, command: str) -> TableData:
        if self.primary is None:
            logger.warning("No language model configured, table left unchanged")
            return table

        try:
            return self.primary.modify_table(table, command)
        except TableBuildError as e:
            logger.error(f"AI table modification failed, keeping original table: {e}")
            return table


def create_table_builder() -> NaturalLanguageTableBuilder:
    """
    Build the default composite from configuration.

    The OpenAI builder is wired in only when OPENAI_API_KEY is set.
    """
    try:
        api_key = config.get_openai_api_key()
    except ValueError as e:
        logger.warning(f"{e}; natural-language requests will use the fallback parser")
        return NaturalLanguageTableBuilder()

    primary = OpenAITableBuilder(
        api_key=api_key,
        model=config.get_openai_model(),
        temperature=config.get_openai_temperature(),
        max_retries=config.get_openai_max_retries()
    )
    return NaturalLanguageTableBuilder(primary=primary)
