"""Session flows: sign-in and sign-up, first-run profile and notification setup, sign-out."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from loguru import logger

from smarthealth.core.exceptions import APIError, ValidationError
from smarthealth.storage import AuthStore, OnboardingStore
from smarthealth.tracking.validation import parse_int_in_range, parse_positive_number, require_text

MAX_AGE = 150


class NextStep(StrEnum):
    """Where the user goes after signing in."""

    PROFILE_SETUP = "profile_setup"
    NOTIFICATION_ONBOARDING = "notification_onboarding"
    HOME = "home"


async def _store_session(auth: AuthStore, result: dict[str, Any]) -> dict[str, Any]:
    token = result.get("token") if isinstance(result, dict) else None
    if not token:
        raise APIError("Server did not return a token")
    user = result.get("user") or {}
    await auth.save_token(token)
    await auth.save_user(user)
    return user


async def login(api, auth: AuthStore, onboarding: OnboardingStore, username: str, password: str) -> NextStep:
    """Sign in, persist the session, and decide the next screen.

    A missing profile (404) sends the user to profile setup; any other
    failure propagates.
    """
    result = await api.login(username, password)
    user = await _store_session(auth, result)
    logger.info(f"Signed in as {username}")

    try:
        profile = await api.get_profile()
    except APIError as e:
        if e.status == 404:
            return NextStep.PROFILE_SETUP
        raise
    if not profile:
        return NextStep.PROFILE_SETUP

    user_id = profile.get("user_id") or user.get("id")
    return await _route_after_profile(onboarding, user_id)


async def _route_after_profile(onboarding: OnboardingStore, user_id: Any) -> NextStep:
    if await onboarding.is_notif_onboarding_done(user_id):
        return NextStep.HOME
    return NextStep.NOTIFICATION_ONBOARDING


async def setup_profile(
    api,
    auth: AuthStore,
    onboarding: OnboardingStore,
    full_name: Any,
    age: Any = None,
    height_cm: Any = None,
    weight_kg: Any = None,
    birthdate: Any = None,
) -> NextStep:
    """Save the first-run profile and decide the next screen.

    Only the name is required; blank optional fields are sent as null.
    Save failures propagate.
    """
    name = require_text(full_name, "Please enter your name")
    age_value = None if _blank(age) else parse_int_in_range(age, 1, MAX_AGE, "Please enter a valid age")
    height = None if _blank(height_cm) else parse_positive_number(height_cm, "Please enter a valid height")
    weight = None if _blank(weight_kg) else parse_positive_number(weight_kg, "Please enter a valid weight")
    born = None if _blank(birthdate) else _parse_birthdate(birthdate)

    await api.upsert_profile(
        name,
        birthdate=born.isoformat() if born else None,
        age=age_value,
        height_cm=height,
        weight_kg=weight,
    )
    logger.info(f"Saved profile for {name}")

    profile = await api.get_profile()
    user_id = (profile.get("user_id") if isinstance(profile, dict) else None) or await auth.get_current_user_id()
    return await _route_after_profile(onboarding, user_id)


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _parse_birthdate(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError("Please enter your birthdate as YYYY-MM-DD") from None


async def register(api, auth: AuthStore, username: str, email: str, password: str) -> dict[str, Any]:
    """Create an account and sign in; all three fields are required."""
    username, email = (username or "").strip(), (email or "").strip()
    if not username or not email or not password:
        raise ValidationError("Please enter a username, email, and password")
    result = await api.register(username, email, password)
    user = await _store_session(auth, result)
    logger.info(f"Registered {username}")
    return user


async def logout(auth: AuthStore) -> None:
    await auth.clear()
    logger.info("Signed out")


async def complete_notification_onboarding(
    api, onboarding: OnboardingStore, enabled: bool = True, push_token: str | None = None
) -> bool:
    """Register for push reminders if wanted, then mark onboarding done.

    Onboarding is marked done even when registration fails so the user is
    not asked again on every launch. Returns whether a token was registered.
    """
    registered = False
    if enabled and push_token:
        try:
            await api.register_push_token(push_token, enabled=True)
            registered = True
        except APIError as e:
            logger.error(f"Push token registration failed: {e.message}")
    elif enabled:
        logger.warning("Notifications enabled but no push token available; skipping registration")

    try:
        profile = await api.get_profile()
    except APIError as e:
        logger.warning(f"Could not load profile to finish onboarding: {e.message}")
        return registered
    user_id = profile.get("user_id") if isinstance(profile, dict) else None
    if user_id:
        await onboarding.set_notif_onboarding_done(user_id, True)
    return registered
