"""Generative text client backed by the OpenAI chat completions API."""

import logging
from typing import Protocol

import tiktoken  # type: ignore
from openai import OpenAI, OpenAIError  # type: ignore

from copilot.errors import LLMServiceError, PromptTooLongError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_PROMPT_TOKENS = 12_000


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw text in one blocking call."""

    def generate(self, prompt: str) -> str: ...


class OpenAIClient:
    """Single-shot, non-streaming completion client.

    No retries: a failed call is reported once and the caller decides
    what to do next.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        max_prompt_tokens: int | None = DEFAULT_MAX_PROMPT_TOKENS,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: OpenAI API key used to authenticate requests.
            model: Chat model name.
            max_prompt_tokens: Refuse prompts larger than this; None
                disables the check.
            client: Preconfigured SDK client, mainly for tests.
        """
        self._client = client or OpenAI(api_key=api_key)
        self._model = model
        self._max_prompt_tokens = max_prompt_tokens
        self._encoding: tiktoken.Encoding | None = None

    def count_tokens(self, text: str) -> int:
        """Return the token count of ``text`` for the configured model."""
        if self._encoding is None:
            try:
                self._encoding = tiktoken.encoding_for_model(self._model)
            except KeyError:
                self._encoding = tiktoken.get_encoding("o200k_base")
        return len(self._encoding.encode(text))

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the model's text.

        Raises:
            PromptTooLongError: If the prompt exceeds the token budget.
            LLMServiceError: If the API call fails or returns no text.
        """
        if self._max_prompt_tokens is not None:
            try:
                tokens = self.count_tokens(prompt)
            except Exception as e:
                # tiktoken may need to download its encoding files
                logger.error("Token counting failed: %s", e)
                raise LLMServiceError("Could not measure prompt size") from e
            if tokens > self._max_prompt_tokens:
                raise PromptTooLongError(
                    f"Prompt is {tokens} tokens, limit is {self._max_prompt_tokens}"
                )

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as e:
            logger.error("AI API error: %s", e)
            raise LLMServiceError("Failed to generate SQL from AI service") from e

        try:
            content = response.choices[0].message.content if response.choices else None
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMServiceError("AI service returned an unexpected response") from e
        if not isinstance(content, str) or not content:
            raise LLMServiceError("AI service returned an empty response")
        return content
