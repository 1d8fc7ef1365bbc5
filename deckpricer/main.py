from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckpricer.api import cards_router, decks_router, health_router, prices_router
from deckpricer.config import settings
from deckpricer.models.failure import KnownError
from deckpricer.services.exchange_rate import load_exchange_rate


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        app.state.http_client = client
        await load_exchange_rate(client)
        yield
        app.state.http_client = None


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckpricer"),
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)
app.include_router(prices_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
