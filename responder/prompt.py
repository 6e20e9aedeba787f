"""Prompt template for search-grounded answers."""

from models import ContextSnippet

SYSTEM_PROMPT_HEADER = (
    "You are a large language AI assistant. You are given a user question, "
    "and please write clean, concise and accurate answer to the question. "
    "You will be given a set of related contexts to the question. "
    "Please use the context when crafting your answer. "
    "Your answer must be correct, accurate and written by an expert using an "
    "unbiased and professional tone. Please limit to 1024 tokens. "
    "Do not give any information that is not related to the question, and do "
    "not repeat. Say \"information is missing on\" followed by the related "
    "topic, if the given context do not provide sufficient information.\n\n"
    "Other than code and specific names and citations, your answer must be "
    "written in the same language as the question.\n\n"
    "Here are the set of contexts:\n\n"
)

SYSTEM_PROMPT_FOOTER = (
    "\n\nRemember, don't blindly repeat the contexts verbatim. "
    "And here is the user question: \n\n"
)


def build_system_prompt(contexts: list[ContextSnippet]) -> str:
    """Embed the snippet text of every context, in order, into the system prompt."""
    context = "\n\n".join(c.snippet for c in contexts)
    return f"{SYSTEM_PROMPT_HEADER}{context}{SYSTEM_PROMPT_FOOTER}"


def build_messages(contexts: list[ContextSnippet], query: str) -> list[dict[str, str]]:
    """Build Chat Completions messages from search contexts and the user query."""
    return [
        {"role": "system", "content": build_system_prompt(contexts)},
        {"role": "user", "content": query},
    ]
