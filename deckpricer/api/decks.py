"""
Deck API endpoints.

Prices every line of a pasted deck list.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from deckpricer.api.cards import (
    PrintingResponse,
    QuoteResponse,
    printing_to_response,
    quote_to_response,
)
from deckpricer.api.dependencies import get_evaluator
from deckpricer.models.deck import EvaluationResult
from deckpricer.parsers.deck_list import parse_deck_list
from deckpricer.services.deck_evaluator import DeckEvaluator

router = APIRouter(prefix="/api/decks", tags=["decks"])


class EvaluateRequest(BaseModel):
    """Request body for deck evaluation."""

    deck_list: str
    exclude_basic_lands: bool = True
    exclude_special: bool = False


class LineResponse(BaseModel):
    """Pricing outcome for one deck line."""

    name: str
    quantity: int
    printing: PrintingResponse | None = None
    quotes: dict[str, QuoteResponse] = Field(default_factory=dict)
    cheapest: QuoteResponse | None = None
    line_total: float | None = None
    error: str | None = None
    error_message: str | None = None


class EvaluateResponse(BaseModel):
    """Response model for a deck evaluation."""

    results: list[LineResponse]
    store_totals: dict[str, float]
    cheapest_total: float
    count: int


def result_to_response(result: EvaluationResult) -> LineResponse:
    return LineResponse(
        name=result.name,
        quantity=result.quantity,
        printing=printing_to_response(result.printing) if result.printing else None,
        quotes={key: quote_to_response(q) for key, q in result.quotes.items()},
        cheapest=quote_to_response(result.cheapest) if result.cheapest else None,
        line_total=result.line_total,
        error=result.error.value if result.error else None,
        error_message=result.error_message,
    )


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_deck(
    request: EvaluateRequest,
    evaluator: Annotated[DeckEvaluator, Depends(get_evaluator)],
) -> EvaluateResponse:
    """
    Evaluate a deck list.

    Lines are priced one after another. A line that cannot be resolved
    keeps its row with an error. Returns 400 if the list has no cards.
    """
    lines = parse_deck_list(request.deck_list)
    if not lines:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deck list contains no cards",
        )

    evaluation = await evaluator.evaluate(
        lines,
        exclude_basic_lands=request.exclude_basic_lands,
        exclude_special=request.exclude_special,
    )

    return EvaluateResponse(
        results=[result_to_response(r) for r in evaluation.results],
        store_totals=evaluation.store_totals,
        cheapest_total=evaluation.cheapest_total,
        count=len(evaluation.results),
    )
