"""Chat completion client for the answer stream and the related-questions call."""

import logging
from contextlib import contextmanager
from typing import AsyncGenerator, Iterator, Optional

from openai import AsyncOpenAI, APIError, APIConnectionError, RateLimitError

logger = logging.getLogger(__name__)


class GeneratorError(Exception):
    """Raised when chat completion fails."""


@contextmanager
def _completion_errors(call: str) -> Iterator[None]:
    """Log SDK failures for *call* and re-raise them as ``GeneratorError``."""
    try:
        yield
    except RateLimitError as exc:
        logger.error("%s | rate limited: %s", call, exc)
        raise GeneratorError("OpenAI rate limit exceeded.") from exc
    except APIConnectionError as exc:
        logger.error("%s | connection error: %s", call, exc)
        raise GeneratorError("Could not connect to OpenAI API.") from exc
    except APIError as exc:
        logger.error("%s | API error: %s", call, exc)
        raise GeneratorError(f"OpenAI error: {exc.message}") from exc


class Generator:
    """Both completion calls share one model and one ``AsyncOpenAI`` client."""

    def __init__(
        self,
        model: str = "gpt-3.5-turbo",
        api_key: str = "",
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        # an empty api_key lets the SDK fall back to OPENAI_API_KEY
        self.client = client or AsyncOpenAI(api_key=api_key or None, base_url=base_url)
        self.model = model

    async def generate(self, messages: list[dict[str, str]]) -> str:
        """Whole answer in one response; ``None`` content reads as ``""``."""
        with _completion_errors("complete"):
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,  # type: ignore[arg-type]
            )
        return completion.choices[0].message.content or ""

    async def generate_stream(
        self, messages: list[dict[str, str]]
    ) -> AsyncGenerator[str, None]:
        """Streaming completion.  Yields every content delta as it arrives.

        Missing deltas are yielded as ``""``.  The underlying HTTP stream is
        closed when the consumer stops iterating, including on cancellation.
        """
        with _completion_errors("stream open"):
            stream = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,  # type: ignore[arg-type]
                stream=True,
            )

        try:
            with _completion_errors("stream read"):
                async for event in stream:
                    if not event.choices:
                        yield ""
                        continue
                    delta = event.choices[0].delta
                    yield (delta.content if delta is not None else None) or ""
        finally:
            await stream.close()
