from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from recruitment.negotiation import NegotiationService

logger = logging.getLogger(__name__)


def create_app(service: Optional[NegotiationService] = None) -> FastAPI:
    """Build the API around one NegotiationService (a fresh one by default)."""
    app = FastAPI(title="Guild recruitment negotiation server")
    app.state.negotiation_service = service if service is not None else NegotiationService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    logger.info("negotiation API ready")
    return app


app = create_app()
