"""Pydantic models for API request schemas and stream payloads."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    rid: str = Field(..., description="Request id, echoed back verbatim")


class ContextSnippet(BaseModel):
    """One search hit used to ground the answer."""

    title: str = ""
    url: str = ""
    snippet: str = ""


class RelatedQuestion(BaseModel):
    question: str
