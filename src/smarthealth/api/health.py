"""Smart Health endpoint wrappers.

One method per backend endpoint.  Read endpoints that feed display state
degrade gracefully: on :class:`APIError` (or a payload of the wrong shape)
they return a fresh copy of the fallback listed beside the call, so a missing
backend shows zeroed or empty data instead of failing.  Mutations, auth, and
lookups the caller must report (profile, goal detail) propagate the error.
"""

from __future__ import annotations

import copy
from typing import Any

from loguru import logger

from smarthealth.core.exceptions import APIError

from .client import ApiClient

DEFAULT_WATER_GOAL_ML = 2000
DEFAULT_CALORIE_GOAL = 2000
CHAT_APOLOGY = "Sorry, I can't answer right now. Please try again later."

EMPTY_WATER_DAY: dict[str, Any] = {"entries": [], "total_ml": 0, "goal_ml": DEFAULT_WATER_GOAL_ML}
EMPTY_STREAK: dict[str, Any] = {"current_streak": 0, "longest_streak": 0}
EMPTY_EXERCISE_STATS: dict[str, Any] = {"total_sessions": 0, "total_minutes": 0, "total_calories": 0}
EMPTY_SLEEP_AVERAGE: dict[str, Any] = {"avg_duration_hours": 0, "quality_distribution": {}}
EMPTY_NUTRITION_SUMMARY: dict[str, Any] = {
    "calories": 0,
    "protein_g": 0,
    "carbs_g": 0,
    "fat_g": 0,
    "goal_calories": DEFAULT_CALORIE_GOAL,
}
EMPTY_COMPLIANCE: dict[str, Any] = {"total": 0, "done": 0, "compliance_percent": 0}
DEFAULT_LEVEL: dict[str, Any] = {"level": 1, "points": 0}


class HealthApi:
    """Endpoint surface of the Smart Health backend."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def _read(self, path: str, fallback: Any, params: dict[str, Any] | None = None) -> Any:
        """GET ``path``; on failure or wrong payload type return a copy of ``fallback``."""
        try:
            data = await self.client.get(path, params=params)
        except APIError as e:
            logger.warning(f"Using fallback for GET {path}: {e.message}")
            return copy.deepcopy(fallback)
        if not isinstance(data, type(fallback)):
            logger.warning(f"Unexpected payload for GET {path} ({type(data).__name__}); using fallback")
            return copy.deepcopy(fallback)
        return data

    # Auth
    async def login(self, username: str, password: str) -> dict[str, Any]:
        return await self.client.post("/auth/login", {"username": username, "password": password})

    async def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        return await self.client.post("/auth/register", {"username": username, "email": email, "password": password})

    # Profile
    async def get_profile(self) -> dict[str, Any]:
        return await self.client.get("/profile")

    async def upsert_profile(
        self,
        full_name: str,
        birthdate: str | None = None,
        age: int | None = None,
        height_cm: float | None = None,
        weight_kg: float | None = None,
    ) -> dict[str, Any]:
        return await self.client.put(
            "/profile",
            {"full_name": full_name, "birthdate": birthdate, "age": age, "height_cm": height_cm, "weight_kg": weight_kg},
        )

    # Health stats (newest first)
    async def get_health_stats(self) -> list[dict[str, Any]]:
        return await self._read("/health-stats", [])

    async def save_health_stat(self, height: float, weight: float) -> dict[str, Any]:
        return await self.client.post("/health-stats", {"height": height, "weight": weight})

    # Notifications
    async def register_push_token(self, push_token: str, enabled: bool = True) -> dict[str, Any]:
        return await self.client.post("/notifications/token", {"expo_push_token": push_token, "enabled": enabled})

    # Reminders
    async def get_reminders(self) -> list[dict[str, Any]]:
        return await self._read("/reminders", [])

    async def create_reminder(self, reminder: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/reminders", reminder)

    async def update_reminder(self, reminder_id: Any, patch: dict[str, Any]) -> dict[str, Any]:
        return await self.client.put(f"/reminders/{reminder_id}", patch)

    async def delete_reminder(self, reminder_id: Any) -> None:
        await self.client.delete(f"/reminders/{reminder_id}")

    async def mark_reminder_done(self, reminder_id: Any, done_at: str | None = None) -> dict[str, Any]:
        payload = {"done_at": done_at} if done_at else {}
        return await self.client.post(f"/reminders/{reminder_id}/done", payload)

    async def get_reminder_history(self, reminder_id: Any, date_from: str, date_to: str) -> list[dict[str, Any]]:
        return await self._read(f"/reminders/{reminder_id}/history", [], {"from": date_from, "to": date_to})

    async def get_reminder_compliance(self, date_from: str, date_to: str) -> dict[str, Any]:
        return await self._read("/reminders/compliance", EMPTY_COMPLIANCE, {"from": date_from, "to": date_to})

    # Water intake
    async def get_water_intake(self, day: str) -> dict[str, Any]:
        return await self._read("/water-intake", EMPTY_WATER_DAY, {"date": day})

    async def get_water_intake_weekly(self) -> list[dict[str, Any]]:
        return await self._read("/water-intake/weekly", [])

    async def add_water_intake(self, amount_ml: int, logged_at: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"amount_ml": amount_ml}
        if logged_at:
            payload["logged_at"] = logged_at
        return await self.client.post("/water-intake", payload)

    async def delete_water_intake(self, entry_id: Any) -> None:
        await self.client.delete(f"/water-intake/{entry_id}")

    # Exercise
    async def log_exercise(self, exercise: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/exercises", exercise)

    async def get_exercises(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        return await self._read("/exercises", [], {"from": date_from, "to": date_to})

    async def get_exercise_streak(self) -> dict[str, Any]:
        return await self._read("/exercises/streak", EMPTY_STREAK)

    async def get_exercise_stats(self, date_from: str, date_to: str) -> dict[str, Any]:
        return await self._read("/exercises/stats", EMPTY_EXERCISE_STATS, {"from": date_from, "to": date_to})

    async def delete_exercise(self, exercise_id: Any) -> None:
        await self.client.delete(f"/exercises/{exercise_id}")

    # Sleep
    async def log_sleep(self, sleep: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/sleep-logs", sleep)

    async def get_sleep_logs(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        return await self._read("/sleep-logs", [], {"from": date_from, "to": date_to})

    async def get_sleep_average(self) -> dict[str, Any]:
        return await self._read("/sleep-logs/average", EMPTY_SLEEP_AVERAGE)

    async def delete_sleep_log(self, log_id: Any) -> None:
        await self.client.delete(f"/sleep-logs/{log_id}")

    # Nutrition
    async def search_foods(self, search: str, limit: int = 20) -> list[dict[str, Any]]:
        return await self._read("/foods", [], {"search": search, "limit": limit})

    async def create_food(self, food: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/foods", food)

    async def log_meal(self, meal: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/meal-logs", meal)

    async def get_meal_logs(self, day: str) -> list[dict[str, Any]]:
        return await self._read("/meal-logs", [], {"date": day})

    async def delete_meal_log(self, meal_id: Any) -> None:
        await self.client.delete(f"/meal-logs/{meal_id}")

    async def get_nutrition_summary(self, day: str | None = None) -> dict[str, Any]:
        return await self._read("/nutrition/daily-summary", EMPTY_NUTRITION_SUMMARY, {"date": day})

    # Goals
    async def create_goal(self, goal: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/goals", goal)

    async def get_goals(self, status: str = "active") -> list[dict[str, Any]]:
        return await self._read("/goals", [], {"status": status})

    async def get_goal_detail(self, goal_id: Any) -> dict[str, Any]:
        return await self.client.get(f"/goals/{goal_id}")

    async def update_goal(self, goal_id: Any, updates: dict[str, Any]) -> dict[str, Any]:
        return await self.client.put(f"/goals/{goal_id}", updates)

    async def delete_goal(self, goal_id: Any) -> None:
        await self.client.delete(f"/goals/{goal_id}")

    # Vitals
    async def log_vital(self, vital: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/vitals", vital)

    async def get_vitals(
        self, vital_type: str | None = None, date_from: str | None = None, date_to: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._read("/vitals", [], {"type": vital_type, "from": date_from, "to": date_to})

    async def get_latest_vitals(self) -> dict[str, Any]:
        return await self._read("/vitals/latest", {})

    # Reports
    async def get_weekly_report(self, week_start: str | None = None) -> dict[str, Any]:
        return await self._read("/reports/weekly", {}, {"week_start": week_start})

    async def get_monthly_report(self, month: str | None = None) -> dict[str, Any]:
        return await self._read("/reports/monthly", {}, {"month": month})

    # Achievements
    async def get_achievements(self) -> list[dict[str, Any]]:
        return await self._read("/achievements", [])

    async def get_recent_achievements(self, limit: int = 10) -> list[dict[str, Any]]:
        return await self._read("/achievements/recent", [], {"limit": limit})

    async def get_user_level(self) -> dict[str, Any]:
        return await self._read("/achievements/level", DEFAULT_LEVEL)

    # Period tracking
    async def log_period(self, period: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/period-logs", period)

    async def get_period_logs(self) -> list[dict[str, Any]]:
        return await self._read("/period-logs", [])

    async def get_period_predictions(self) -> dict[str, Any]:
        return await self._read("/period/predictions", {})

    # Symptom checker
    async def get_body_parts(self) -> list[dict[str, Any]]:
        return await self._read("/symptoms/body-parts", [])

    async def check_symptoms(self, symptoms: list[str], duration_days: int = 1, severity: str = "moderate") -> dict:
        return await self.client.post(
            "/symptoms/check", {"symptoms": symptoms, "duration_days": duration_days, "severity": severity}
        )

    # AI assistant
    async def send_ai_chat(self, message: str) -> dict[str, Any]:
        """Send a chat message; ``reply`` is normalised across server versions."""
        try:
            data = await self.client.post("/ai/chat", {"message": message})
        except APIError as e:
            logger.warning(f"AI chat unavailable: {e.message}")
            return {"reply": CHAT_APOLOGY}
        data = data if isinstance(data, dict) else {}
        reply = data.get("reply") or data.get("response") or data.get("message") or CHAT_APOLOGY
        return {**data, "reply": reply}

    async def get_ai_suggestions(self) -> list[Any]:
        return await self._read("/ai/suggestions", [])

    # Friends
    async def get_friends(self) -> list[dict[str, Any]]:
        return await self._read("/friends", [])

    async def send_friend_request(self, user_id: Any) -> dict[str, Any]:
        return await self.client.post("/friends/request", {"user_id": user_id})

    async def respond_friend_request(self, request_id: Any, action: str) -> dict[str, Any]:
        if action not in ("accept", "reject"):
            raise ValueError(f"action must be 'accept' or 'reject', got {action!r}")
        return await self.client.put(f"/friends/request/{request_id}", {"action": action})

    async def get_pending_requests(self) -> list[dict[str, Any]]:
        return await self._read("/friends/requests/pending", [])

    # Challenges
    async def create_challenge(self, challenge: dict[str, Any]) -> dict[str, Any]:
        return await self.client.post("/challenges", challenge)

    async def get_challenges(self, status: str = "active") -> list[dict[str, Any]]:
        return await self._read("/challenges", [], {"status": status})

    async def join_challenge(self, challenge_id: Any) -> dict[str, Any]:
        return await self.client.post(f"/challenges/{challenge_id}/join")

    async def get_leaderboard(self, challenge_id: Any) -> list[dict[str, Any]]:
        return await self._read(f"/challenges/{challenge_id}/leaderboard", [])
