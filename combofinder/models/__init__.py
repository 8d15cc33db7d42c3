from combofinder.models.card import (
    CardRequirement,
    Requirement,
    TemplateRequirement,
    normalize_card_name,
)
from combofinder.models.color_identity import (
    COLOR_ORDER,
    ColorIdentity,
    InvalidColorError,
    color_order_rank,
)
from combofinder.models.combo import CardGrouping, ComboRecord, SpellbookList
from combofinder.models.deck import Deck
from combofinder.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    CatalogDecodeError,
    CatalogUnavailableError,
    FailureDetail,
    FailureKind,
    InvalidDeckInputError,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from combofinder.models.match import (
    ComboResults,
    DeckMatches,
    IdentityPartition,
    MatchClass,
    PotentialMatch,
)

__all__ = [
    "COLOR_ORDER",
    "ApiResponse",
    "CardGrouping",
    "CardRequirement",
    "CatalogDecodeError",
    "CatalogUnavailableError",
    "ColorIdentity",
    "ComboRecord",
    "ComboResults",
    "Deck",
    "DeckMatches",
    "FailureDetail",
    "FailureKind",
    "IdentityPartition",
    "InvalidColorError",
    "InvalidDeckInputError",
    "KnownError",
    "MatchClass",
    "OutcomeType",
    "PotentialMatch",
    "Requirement",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SpellbookList",
    "TemplateRequirement",
    "color_order_rank",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    "normalize_card_name",
]
