#!/usr/bin/env python3
"""
OpenAI-backed table builder.

Sends fixed instructional prompts to the chat completions API and turns
the JSON reply into a TableData. Every failure surfaces as TableBuildError
so callers can fall back.
"""

import json
import re
import time
import logging
from typing import Any, Dict, Tuple
from openai import OpenAI
from openai import APIError, APITimeoutError, AuthenticationError, RateLimitError

from ..tables.data_models import TableData
from ..tables.serializer import table_from_dict
from .base_builder import TableBuildError, TableBuilder

logger = logging.getLogger(__name__)


class OpenAITableBuilder(TableBuilder):
    """
    Builds and edits tables using the OpenAI API.

    This class handles:
    - Prompt construction for table creation and editing
    - OpenAI API calls with retry logic
    - JSON extraction and validation
    """

    CREATE_PROMPT_TEMPLATE = """You are a table creation assistant. Parse the user's request and generate a structured table.

User's request: "{description}"

Your task:
1. If the user specifies dimensions (like "5 rows and 2 columns" or "3x4 table"), create a table with that many rows and columns using generic headers like "Column 1", "Column 2", etc.
2. Otherwise, identify meaningful column headers from the description
3. Extract any row data mentioned, or create appropriate example rows
4. If no specific rows are mentioned, create 3 example rows with placeholder data that matches the context

Return ONLY valid JSON in this exact format (no markdown, no explanation):
{{
  "headers": ["Column 1", "Column 2", "Column 3"],
  "rows": [
    ["value1", "value2", "value3"],
    ["value1", "value2", "value3"]
  ]
}}

Examples:

Input: "5 rows and 2 columns"
Output: {{"headers":["Column 1","Column 2"],"rows":[["",""],["",""],["",""],["",""],["",""]]}}

Input: "3x4 table"
Output: {{"headers":["Column 1","Column 2","Column 3","Column 4"],"rows":[["","","",""],["","","",""],["","","",""]]}}

Input: "project tracker with name, status, owner"
Output: {{"headers":["Name","Status","Owner"],"rows":[["Project A","In Progress","John"],["Project B","Not Started","Sarah"],["Project C","Complete","Mike"]]}}

Input: "meeting schedule with time, topic, and presenter. Add 9am standup with John, 2pm review with Sarah"
Output: {{"headers":["Time","Topic","Presenter"],"rows":[["9am","Standup","John"],["2pm","Review","Sarah"],["TBD","",""]]}}

Now parse the user's request above."""

    EDIT_PROMPT_TEMPLATE = """You are a table editing assistant. Modify the table based on the user's command.

Current table:
Headers: {headers_json}
Rows: {rows_json}

User's command: "{command}"

Possible commands:
- "add a column for [name]"
- "add a row for [data]"
- "remove column [name/number]"
- "remove row [number]"
- "rename column [old] to [new]"
- "sort by [column]"

Return ONLY valid JSON with the complete modified table (no markdown, no explanation):
{{
  "headers": [...],
  "rows": [...]
}}"""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_retries: int = 3
    ):
        """
        Initialize OpenAI table builder.

        Args:
            api_key: OpenAI API key
            model: Model to use (default: gpt-4o-mini)
            temperature: Temperature for generation (default: 0.3)
            max_retries: Attempts per request before giving up
        """
        self.client = OpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_retries = max(1, max_retries)
        self.last_tokens_used = 0
        logger.info(f"OpenAITableBuilder initialized with model={model}, temperature={temperature}")

    def build_table(self, description: str) -> TableData:
        """
        Create a table from a natural-language description.

        Raises:
            TableBuildError: If the API call fails or the reply is unusable
        """
        prompt = self._construct_create_prompt(description)
        return self._run(prompt, purpose="create")

    def modify_table(self, table: TableData, command: str) -> TableData:
        """
        Ask the model for a complete replacement of table reflecting command.

        Raises:
            TableBuildError: If the API call fails or the reply is unusable
        """
        prompt = self._construct_edit_prompt(table, command)
        return self._run(prompt, purpose="edit")

    def _run(self, prompt: str, purpose: str) -> TableData:
        logger.debug(f"Prompt ({purpose}) length: {len(prompt)} characters")

        try:
            response, tokens_used = self._call_openai_with_retry(prompt)
        except (APIError, ValueError) as e:
            logger.error(f"OpenAI API call failed ({purpose}): {e}")
            raise TableBuildError(f"OpenAI API call failed: {e}") from e

        self.last_tokens_used = tokens_used
        logger.debug(f"OpenAI response received: {len(response)} chars, {tokens_used} tokens")

        try:
            table = table_from_dict(self._extract_json_object(response))
        except ValueError as e:
            logger.error(f"JSON extraction/validation failed ({purpose}): {e}")
            raise TableBuildError(f"Failed to extract valid table JSON: {e}") from e

        logger.info(
            f"Model returned table ({purpose}): {table.column_count} columns, {table.row_count} rows"
        )
        return table

    def _construct_create_prompt(self, description: str) -> str:
        """Build the creation prompt from template."""
        return self.CREATE_PROMPT_TEMPLATE.format(description=description)

    def _construct_edit_prompt(self, table: TableData, command: str) -> str:
        """Build the edit prompt, embedding the current table as JSON."""
        return self.EDIT_PROMPT_TEMPLATE.format(
            headers_json=json.dumps(table.headers, ensure_ascii=False),
            rows_json=json.dumps(table.rows, ensure_ascii=False),
            command=command
        )

    def _call_openai_with_retry(self, prompt: str) -> Tuple[str, int]:
        """
        Call OpenAI API with exponential backoff retry logic.

        Authentication errors are raised immediately.

        Args:
            prompt: Prompt to send to API

        Returns:
            Tuple of (response_text, total_tokens_used)

        Raises:
            APIError: If all retries fail
            ValueError: If the response has no choices
        """
        max_retries = self.max_retries
        for attempt in range(max_retries):
            try:
                logger.debug(f"OpenAI API call attempt {attempt + 1}/{max_retries}")

                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": "You turn requests into JSON tables."},
                        {"role": "user", "content": prompt}
                    ],
                    temperature=self.temperature
                )

                if not response.choices:
                    raise ValueError("OpenAI returned no choices")
                response_text = response.choices[0].message.content or ""
                tokens_used = response.usage.total_tokens if response.usage else 0

                logger.info(f"OpenAI API call succeeded on attempt {attempt + 1}")
                return response_text, tokens_used

            except AuthenticationError:
                logger.error("OpenAI rejected the API key, not retrying")
                raise

            except (RateLimitError, APITimeoutError) as e:
                wait_time = 2 ** attempt  # 1s, 2s, 4s
                if attempt < max_retries - 1:
                    logger.warning(
                        f"{type(e).__name__}, waiting {wait_time}s before retry {attempt + 1}/{max_retries}"
                    )
                    time.sleep(wait_time)
                else:
                    logger.error(f"Max retries reached ({type(e).__name__})")
                    raise

            except APIError as e:
                logger.error(f"OpenAI API error: {e}")
                if attempt < max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(f"Waiting {wait_time}s before retry {attempt + 1}/{max_retries}")
                    time.sleep(wait_time)
                else:
                    logger.error("Max retries reached for API error")
                    raise

        raise RuntimeError("Unexpected: exceeded max retries without raising exception")

    def _extract_json_object(self, response: str) -> Dict[str, Any]:
        """
        Extract a JSON object from the model's reply.

        Handles:
        - Pure JSON object
        - JSON wrapped in markdown code fences
        - Text before/after the JSON

        Raises:
            ValueError: If no JSON object can be decoded
        """
        response = response.strip()

        fence_match = re.search(r'```(?:json)?\s*(\{[\s\S]*?\})\s*```', response)
        if fence_match:
            json_str = fence_match.group(1)
            logger.debug("Extracted JSON from markdown code block")
        else:
            object_match = re.search(r'(\{[\s\S]*\})', response)
            if not object_match:
                raise ValueError("No JSON object found in response")
            json_str = object_match.group(1)

        try:
            data = json.loads(json_str)
        except (json.JSONDecodeError, RecursionError) as e:
            raise ValueError(f"Invalid JSON: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        return data
