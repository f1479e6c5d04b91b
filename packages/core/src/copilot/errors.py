"""Errors raised while turning natural language into SQL."""


class GenerationError(Exception):
    """A step of the model-backed generation path failed.

    Always recovered by the orchestrator, which falls back to rule-based
    generation.
    """


class ParseError(GenerationError):
    """No SQL could be extracted from the model's response."""


class LLMServiceError(GenerationError):
    """The generative text service could not be reached or answered badly."""


class PromptTooLongError(GenerationError):
    """The prompt exceeds the configured token budget."""


class GenerationFailedError(Exception):
    """Neither the model nor the fallback produced a statement."""

    status_code = 500

    def __init__(
        self,
        message: str = (
            "Failed to generate SQL query. Please check your AI API key "
            "or try a simpler query."
        ),
    ) -> None:
        super().__init__(message)
        self.message = message
