"""Natural language to SQL orchestration with rule-based fallback."""

import logging
from typing import Protocol

from copilot.LLMClient import TextGenerator
from copilot.errors import GenerationError, GenerationFailedError
from copilot.fallback import generate_fallback
from copilot.models import GeneratedQuery, GenerationRequest
from copilot.parser import parse_response
from copilot.prompts import apply_feedback, build_prompt
from database.errors import QueryError

logger = logging.getLogger(__name__)


class SchemaSource(Protocol):
    def list_tables(self) -> list[str]: ...

    def build_schema_context(self, tables: list[str] | None = None) -> str: ...


class SQLGenerator:
    """Generate a SQL statement for a natural-language request.

    The model path is tried exactly once. Any failure along it (schema
    lookup, network, unparseable answer) drops straight to the rule-based
    fallback, which reuses the table list fetched for the prompt.
    """

    def __init__(self, schema: SchemaSource, llm: TextGenerator) -> None:
        """Initialize the generator.

        Args:
            schema: Source of table names and the prompt schema block.
            llm: Generative text client.
        """
        self._schema = schema
        self._llm = llm

    def generate(self, request: GenerationRequest) -> GeneratedQuery:
        """Return a statement for ``request``.

        Raises:
            GenerationFailedError: If both the model and the fallback
                fail to produce SQL.
        """
        logger.info("Generating SQL for: %.100s", request.natural_language)

        tables: list[str] = []
        try:
            tables = self._schema.list_tables()
            schema_context = self._schema.build_schema_context(tables)
            question = apply_feedback(request.natural_language, request.feedback)
            prompt = build_prompt(question, schema_context, request.previous_query)
            return parse_response(self._llm.generate(prompt))
        except (GenerationError, QueryError) as e:
            logger.warning("Model generation failed, trying fallback: %s", e)

        fallback = generate_fallback(request.natural_language, tables)
        if fallback.sql is None:
            logger.error("Fallback generation produced no SQL")
            raise GenerationFailedError()
        return fallback
