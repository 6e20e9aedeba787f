"""Search-grounded streaming answers with related questions."""

from responder.generator import Generator, GeneratorError
from responder.responder import LLM_RESPONSE_MARKER, RELATED_QUESTIONS_MARKER, Responder
from responder.search import SearchClient, SearchError

__all__ = [
    "Generator",
    "GeneratorError",
    "LLM_RESPONSE_MARKER",
    "RELATED_QUESTIONS_MARKER",
    "Responder",
    "SearchClient",
    "SearchError",
]
