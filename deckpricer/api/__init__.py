from deckpricer.api.cards import router as cards_router
from deckpricer.api.decks import router as decks_router
from deckpricer.api.health import router as health_router
from deckpricer.api.prices import router as prices_router

__all__ = [
    "cards_router",
    "decks_router",
    "health_router",
    "prices_router",
]
