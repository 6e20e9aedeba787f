"""Sequential search -> streamed answer -> related questions pipeline."""

import asyncio
import json
import logging
import time
from contextlib import aclosing
from typing import AsyncGenerator

from models import ContextSnippet
from responder.generator import Generator
from responder.prompt import build_messages
from responder.related import parse_related_questions, serialize_related_questions
from responder.search import SearchClient

logger = logging.getLogger(__name__)

LLM_RESPONSE_MARKER = "__LLM_RESPONSE__"
RELATED_QUESTIONS_MARKER = "__RELATED_QUESTIONS__"


def build_preamble(query: str, rid: str, contexts: list[ContextSnippet]) -> str:
    """JSON header with the echoed request and its contexts, then the answer marker.

    The outer object keeps ``", "`` / ``": "`` spacing; the contexts array is
    compact.
    """
    encoded_contexts = json.dumps(
        [c.model_dump() for c in contexts],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    payload = (
        f'{{"query": {json.dumps(query, ensure_ascii=False)}, '
        f'"rid": {json.dumps(rid, ensure_ascii=False)}, '
        f'"contexts": {encoded_contexts}}}'
    )
    return f"{payload}\n\n{LLM_RESPONSE_MARKER}\n\n"


class Responder:
    """Produces the text/plain body for one query.

    The body is the preamble, the answer deltas in arrival order, the
    related-questions marker and a JSON array of ``{"question": ...}``.
    Both model calls receive the same messages.
    """

    def __init__(self, searcher: SearchClient, generator: Generator) -> None:
        self.searcher = searcher
        self.generator = generator

    async def prepare(self, query: str) -> list[ContextSnippet]:
        """Fetch search contexts.  Errors propagate to the caller."""
        t0 = time.perf_counter()
        contexts = await self.searcher.search(query)
        logger.info(
            "search | %d contexts in %.1fms",
            len(contexts), (time.perf_counter() - t0) * 1000,
        )
        return contexts

    async def stream(
        self, query: str, rid: str, contexts: list[ContextSnippet]
    ) -> AsyncGenerator[str, None]:
        yield build_preamble(query, rid, contexts)

        messages = build_messages(contexts, query)
        t_start = time.perf_counter()
        first_token_ms = None
        try:
            async with aclosing(self.generator.generate_stream(messages)) as deltas:
                async for delta in deltas:
                    if first_token_ms is None:
                        first_token_ms = (time.perf_counter() - t_start) * 1000
                    yield delta
            generation_ms = (time.perf_counter() - t_start) * 1000

            t0 = time.perf_counter()
            answer = await self.generator.generate(messages)
            questions = parse_related_questions(answer)
            related_ms = (time.perf_counter() - t0) * 1000
        except asyncio.CancelledError:
            logger.info("rid=%s | client disconnected, stream cancelled", rid)
            raise
        except Exception:
            logger.exception("rid=%s | stream aborted", rid)
            raise

        yield f"\n\n{RELATED_QUESTIONS_MARKER}\n\n"
        yield serialize_related_questions(questions)

        logger.info(
            "rid=%s | first_token=%.1fms  generate=%.1fms  related=%.1fms  questions=%d",
            rid, first_token_ms or 0.0, generation_ms, related_ms, len(questions),
        )
