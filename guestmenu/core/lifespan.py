"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py;
no business logic here, only wiring of infrastructure (logging,
Firebase clients and their shared HTTP pool).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from guestmenu.infrastructure.firebase import close_firebase, init_firebase
from guestmenu.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, Firebase clients. A failed Firebase init does not stop
    the app; privileged routes answer 503 until credentials are fixed.
    Shutdown: close the shared Firebase HTTP client.
    """
    # ---- Startup ----
    setup_logging()
    app.state.firebase_ready = init_firebase()
    if not app.state.firebase_ready:
        logger.warning("Firebase not initialized; privileged endpoints will return 503")

    yield

    # ---- Shutdown ----
    await close_firebase()
