"""Environment configuration and logging setup."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv  # type: ignore

from copilot.LLMClient import DEFAULT_MAX_PROMPT_TOKENS, DEFAULT_MODEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    db_path: str
    openai_api_key: str
    openai_model: str = DEFAULT_MODEL
    max_prompt_tokens: int = DEFAULT_MAX_PROMPT_TOKENS
    db_read_only: bool = False
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        """Load ``.env`` and build settings from the environment.

        Raises:
            KeyError: If ``DB_PATH`` or ``OPENAI_API_KEY`` is missing.
        """
        load_dotenv()
        return cls(
            db_path=os.environ["DB_PATH"],
            openai_api_key=os.environ["OPENAI_API_KEY"],
            openai_model=os.environ.get("OPENAI_MODEL", DEFAULT_MODEL),
            max_prompt_tokens=int(
                os.environ.get("MAX_PROMPT_TOKENS", str(DEFAULT_MAX_PROMPT_TOKENS))
            ),
            db_read_only=_flag(os.environ.get("DB_READ_ONLY", "false")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            api_host=os.environ.get("API_HOST", "0.0.0.0"),
            api_port=int(os.environ.get("API_PORT", "3000")),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
