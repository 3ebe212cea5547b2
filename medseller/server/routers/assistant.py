"""Assistant router: free-text shopping questions."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from medseller.server.dependencies import AssistantDep, require_catalog
from medseller.server.exceptions import ValidationError

router = APIRouter(tags=["assistant"])


class AskRequest(BaseModel):
    query: str = Field(..., max_length=1000)


class AskResponse(BaseModel):
    answer: str
    source: str
    intent: str | None = None


@router.post("/ask", response_model=AskResponse, dependencies=[Depends(require_catalog)])
async def ask(payload: AskRequest, assistant: AssistantDep) -> AskResponse:
    """Answer a shopping question.

    Returns 503 while the catalog is in its load-error state: local answers
    and the remote context both need the catalog.
    """
    if not payload.query.strip():
        raise ValidationError("query must not be blank")

    reply = await assistant.answer(payload.query)
    return AskResponse(answer=reply.text, source=reply.source, intent=reply.intent)
