"""Runtime configuration, read once from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_SERPER_URL = "https://google.serper.dev/search"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    """Explicit settings handed to the search client, generator and app."""

    chat_model: str = DEFAULT_CHAT_MODEL
    api_key: str = ""
    base_url: Optional[str] = None
    serper_api_key: str = ""
    serper_url: str = DEFAULT_SERPER_URL
    search_result_count: int = 10
    # None disables the timeout on the search call
    search_timeout: Optional[float] = None
    responder_api_key: str = ""
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load ``.env`` if present and build settings from environment variables.

        Raises ``ValueError`` when a numeric variable cannot be parsed.
        """
        load_dotenv()
        return cls(
            chat_model=os.getenv("CHAT_MODEL") or DEFAULT_CHAT_MODEL,
            api_key=os.getenv("API_KEY", ""),
            base_url=os.getenv("BASE_URL") or None,
            serper_api_key=os.getenv("SERPER_API_KEY", ""),
            serper_url=os.getenv("SERPER_URL") or DEFAULT_SERPER_URL,
            search_result_count=int(os.getenv("SEARCH_RESULT_COUNT", "10")),
            search_timeout=_optional_float(os.getenv("SEARCH_TIMEOUT")),
            responder_api_key=os.getenv("RESPONDER_API_KEY", ""),
            cors_origins=tuple(
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ),
        )
