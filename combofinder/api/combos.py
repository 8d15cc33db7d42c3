"""
Combo finder API endpoint.

Matches a pasted decklist against the combo catalog and returns the exact,
within-identity and outside-identity lists, each in the requested order.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from combofinder.analysis.finder import find_combos
from combofinder.analysis.sorter import SortDirection, SortKey
from combofinder.api.dependencies import (
    CatalogLoader,
    ColorLookupLoader,
    get_catalog_loader,
    get_color_lookup_loader,
)
from combofinder.config import settings
from combofinder.models.color_identity import ColorIdentity, InvalidColorError
from combofinder.models.combo import ComboRecord
from combofinder.models.failure import (
    ApiResponse,
    FailureKind,
    KnownError,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from combofinder.models.match import PotentialMatch
from combofinder.parsers.decklist import parse_decklist

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/combos", tags=["combos"])


class FindCombosRequest(BaseModel):
    """Request model for looking up combos in a decklist."""

    decklist: str = Field(
        ...,
        description="Decklist text, one card per line",
        examples=["1 Thassa's Oracle\n1 Demonic Consultation\n1 Island"],
    )
    selected_colors: str | None = Field(
        default=None,
        description="Colors allowed for combos outside the deck's identity (e.g. 'wub'). "
        "Defaults to all colors.",
    )
    sort_by: SortKey = Field(default=SortKey.ID, description="Sort key for every list")
    order: SortDirection = Field(default=SortDirection.ASCENDING)


class ComboResponse(BaseModel):
    """A combo as rendered by the combo finder."""

    id: int
    permalink: str
    cards: list[str] = Field(default_factory=list)
    templates: list[str] = Field(default_factory=list)
    color_identity: str
    prerequisites: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    results: list[str] = Field(default_factory=list)
    prices: dict[str, float] = Field(default_factory=dict)
    has_banned_card: bool = False
    has_spoiled_card: bool = False


class PotentialComboResponse(BaseModel):
    """A potential combo with the pieces the deck is missing."""

    combo: ComboResponse
    missing: list[str] = Field(default_factory=list)


class FindCombosResponse(BaseModel):
    """Combo finder results for one decklist."""

    card_count: int
    deck_color_identity: str
    selected_color_identity: str
    exact: list[ComboResponse] = Field(default_factory=list)
    within_identity: list[PotentialComboResponse] = Field(default_factory=list)
    outside_identity: list[PotentialComboResponse] = Field(default_factory=list)
    missing_cards: list[str] = Field(default_factory=list)
    partial_catalog: bool = False


def _card_label(name: str, quantity: int) -> str:
    return f"{quantity}x {name}" if quantity > 1 else name


def combo_to_response(combo: ComboRecord) -> ComboResponse:
    return ComboResponse(
        id=combo.id,
        permalink=combo.permalink,
        cards=[_card_label(card.name, card.quantity) for card in combo.cards.cards],
        templates=[template.description for template in combo.cards.templates],
        color_identity=str(combo.color_identity),
        prerequisites=list(combo.prerequisites),
        steps=list(combo.steps),
        results=list(combo.results),
        prices=dict(combo.prices),
        has_banned_card=combo.has_banned_card,
        has_spoiled_card=combo.has_spoiled_card,
    )


def potential_to_response(match: PotentialMatch) -> PotentialComboResponse:
    return PotentialComboResponse(
        combo=combo_to_response(match.combo),
        missing=match.missing_names(),
    )


@router.post("/find", response_model=ApiResponse[FindCombosResponse])
async def find_combos_in_decklist(
    request: FindCombosRequest,
    response: Response,
    load_catalog: Annotated[CatalogLoader, Depends(get_catalog_loader)],
    load_color_lookup: Annotated[ColorLookupLoader, Depends(get_color_lookup_loader)],
) -> ApiResponse[Any]:
    """
    Find combos in a decklist.

    An empty result is still a success; a catalog that cannot be loaded is
    a known failure, so clients can tell the two apart.
    """
    try:
        selected = None
        if request.selected_colors is not None:
            try:
                selected = ColorIdentity(request.selected_colors)
            except InvalidColorError as e:
                raise KnownError(
                    kind=FailureKind.INVALID_INPUT,
                    message=f"Unknown colors in selection {request.selected_colors!r}",
                    detail=str(e),
                    suggestion="Use letters from WUBRG.",
                ) from e

        deck = parse_decklist(request.decklist, load_color_lookup())
        catalog = load_catalog()

        results = find_combos(
            deck,
            catalog,
            selected_identity=selected,
            sort_key=request.sort_by,
            direction=request.order,
            tolerance=settings.potential_tolerance,
            vendor=settings.default_vendor,
        )
    except KnownError as e:
        logger.warning("Combo lookup failed: %s", e.message)
        response.status_code = e.status_code
        return create_known_failure(e)
    except Exception as e:
        logger.exception("Unexpected error during combo lookup")
        response.status_code = 500
        return create_unknown_failure(e)

    return create_success(
        FindCombosResponse(
            card_count=deck.total_cards(),
            deck_color_identity=str(results.deck_identity),
            selected_color_identity=str(results.selected_identity),
            exact=[combo_to_response(c) for c in results.exact],
            within_identity=[potential_to_response(m) for m in results.within_identity],
            outside_identity=[potential_to_response(m) for m in results.outside_identity],
            missing_cards=results.missing_cards,
            partial_catalog=results.is_partial_catalog,
        )
    )
