"""Turn the model's free-text answer into related-question objects."""

import json

from models import RelatedQuestion


def parse_related_questions(text: str) -> list[RelatedQuestion]:
    """One question per line of *text*; blank lines are kept."""
    return [RelatedQuestion(question=line) for line in text.split("\n")]


def serialize_related_questions(questions: list[RelatedQuestion]) -> str:
    """Compact JSON array, e.g. ``[{"question":"a"},{"question":"b"}]``."""
    return json.dumps(
        [q.model_dump() for q in questions],
        ensure_ascii=False,
        separators=(",", ":"),
    )
