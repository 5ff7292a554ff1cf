"""
FastAPI application entry point for the profile API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import get_settings
from backend.dependencies import get_snapshot_store
from backend.routes import router
from shared.firebase_constants import (
    POWERLIFTING_USER_DATA_PATH,
    SPEEDCUBING_WCA_DATA_PATH,
)
from shared.snapshot_store import SnapshotStore
from views.powerlifting import build_powerlifting_profile
from views.profile_view import ProfileView
from views.speedcubing import build_speedcubing_profile


@asynccontextmanager
async def _lifespan(app: FastAPI):
    # Views hold their subscriptions exactly as long as the app is running.
    with app.state.powerlifting_view, app.state.speedcubing_view:
        yield


def create_app(store: SnapshotStore | None = None) -> FastAPI:
    settings = get_settings()
    store = store if store is not None else get_snapshot_store()

    app = FastAPI(title="Athlete Profile API", version="0.1.0", lifespan=_lifespan)
    app.state.powerlifting_view = ProfileView(
        store, POWERLIFTING_USER_DATA_PATH, build_powerlifting_profile
    )
    app.state.speedcubing_view = ProfileView(
        store,
        SPEEDCUBING_WCA_DATA_PATH,
        build_speedcubing_profile,
        # A missing WCA record renders an empty page rather than an error.
        absent_is_error=False,
    )
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
