"""
HTTP routes for the profile API. All routes are read-only.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Request

from backend.schemas import HealthResponse, ProfileResponse
from shared.types import WeightUnit
from views.powerlifting import PowerliftingViewOptions
from views.profile_view import ProfileView
from views.speedcubing import SpeedcubingViewOptions

router = APIRouter()


def get_powerlifting_view(request: Request) -> ProfileView:
    return request.app.state.powerlifting_view


def get_speedcubing_view(request: Request) -> ProfileView:
    return request.app.state.speedcubing_view


def _profile_response(view: ProfileView, options) -> ProfileResponse:
    profile = view.render(options)
    return ProfileResponse(
        status=view.status,
        error=view.error,
        profile=asdict(profile) if profile is not None else None,
    )


@router.get("/health", response_model=HealthResponse)
def health(
    powerlifting: ProfileView = Depends(get_powerlifting_view),
    speedcubing: ProfileView = Depends(get_speedcubing_view),
):
    return HealthResponse(
        status="ok",
        views={"powerlifting": powerlifting.status, "speedcubing": speedcubing.status},
    )


@router.get("/powerlifting/profile", response_model=ProfileResponse)
def get_powerlifting_profile(
    unit: WeightUnit = Query(default=WeightUnit.LBS),
    raw_only: bool = Query(default=True),
    show_about: bool = Query(default=False),
    view: ProfileView = Depends(get_powerlifting_view),
):
    options = PowerliftingViewOptions(
        unit=unit, raw_only=raw_only, show_about=show_about
    )
    return _profile_response(view, options)


@router.get("/speedcubing/profile", response_model=ProfileResponse)
def get_speedcubing_profile(
    show_about: bool = Query(default=False),
    limit: int = Query(default=5, ge=1, le=50),
    view: ProfileView = Depends(get_speedcubing_view),
):
    options = SpeedcubingViewOptions(show_about=show_about, max_competitions=limit)
    return _profile_response(view, options)
