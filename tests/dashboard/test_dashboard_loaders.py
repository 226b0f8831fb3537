"""Tests for the summary, report, cycle, and achievement loaders."""

from datetime import date

import pytest

from smarthealth.core.config import Config
from smarthealth.core.exceptions import APIError, ValidationError
from smarthealth.dashboard import (
    load_achievements,
    load_cycle,
    load_reports,
    load_summary,
    start_period,
    week_start,
)
from smarthealth.dashboard.reports import build_report, month_key
from smarthealth.dashboard.summary import Summary
from smarthealth.metrics import BMICategory, CyclePhase, SleepRating
from smarthealth.models import Profile

TODAY = date(2024, 3, 15)


# ── Summary ─────────────────────────────────────────────────────────


@pytest.fixture
def full_backend(fake_client):
    fake_client.on("GET", "/profile", {"user_id": 7, "full_name": "Lan Nguyen"})
    fake_client.on("GET", "/health-stats", [{"height": 165, "weight": 60, "bmi": 22.04}, {"bmi": 25.5}])
    fake_client.on("GET", "/water-intake", {"total_ml": 1500, "goal_ml": 2500})
    fake_client.on("GET", "/exercises/streak", {"current_streak": 3, "longest_streak": 9})
    fake_client.on("GET", "/exercises/stats", {"total_minutes": 45})
    fake_client.on("GET", "/sleep-logs/average", {"avg_duration_hours": 7.25})
    fake_client.on("GET", "/sleep-logs", [{"id": 1, "duration_hours": 6.5}])
    fake_client.on("GET", "/nutrition/daily-summary", {"total_calories": 1200, "goal_calories": 1800})
    fake_client.on("GET", "/vitals/latest", {"heart_rate": {"value": 72}})
    fake_client.on("GET", "/reminders", [{"id": 1}, {"id": 2}])
    fake_client.on("GET", "/reminders/1/history", [{"done_at": "2024-03-15T08:00:00"}])
    return fake_client


class TestSummary:
    @pytest.mark.asyncio
    async def test_all_widgets(self, api, full_backend):
        summary = await load_summary(api, TODAY)

        assert summary.profile.full_name == "Lan Nguyen"
        assert summary.bmi == 22.0
        assert summary.bmi_category == BMICategory.NORMAL
        assert summary.water_ml == 1500
        assert summary.water_progress == 60
        assert summary.exercise_streak == 3
        assert summary.exercise_minutes_today == 45
        assert summary.sleep_last_night == 6.5
        assert summary.sleep_average == 7.25
        assert summary.calories == 1200
        assert summary.calorie_goal == 1800
        assert summary.vitals["heart_rate"].value == 72
        assert summary.vitals["spo2"] is None
        assert set(summary.vitals) == {"heart_rate", "blood_pressure", "spo2", "temperature"}
        assert (summary.reminders_done, summary.reminders_total) == (1, 2)

    @pytest.mark.asyncio
    async def test_reminder_history_queried_for_today(self, api, full_backend):
        await load_summary(api, TODAY)
        params = full_backend.calls_to("GET", "/reminders/2/history")[0][2]
        assert params == {"from": "2024-03-15", "to": "2024-03-15"}

    @pytest.mark.asyncio
    async def test_defaults_when_only_profile_answers(self, api, fake_client):
        fake_client.on("GET", "/profile", {"full_name": "New User"})
        summary = await load_summary(api, TODAY)

        assert summary.bmi is None
        assert summary.bmi_category is None
        assert summary.water_goal_ml == 2000
        assert summary.calorie_goal == 2000
        assert summary.nutrition_progress == 0
        assert summary.reminders_total == 0

    @pytest.mark.asyncio
    async def test_configured_goals_fill_missing_server_goals(self, api, fake_client, tmp_dir):
        fake_client.on("GET", "/profile", {"full_name": "Lan"})
        fake_client.on("GET", "/water-intake", {"total_ml": 900})
        fake_client.on("GET", "/nutrition/daily-summary", {"calories": 600})
        config = Config(data_dir=tmp_dir, defaults={"goals": {"water_ml": 3000, "calories": 1500}})

        summary = await load_summary(api, TODAY, config)

        assert summary.water_goal_ml == 3000
        assert summary.water_progress == 30
        assert summary.calorie_goal == 1500

    @pytest.mark.asyncio
    async def test_profile_failure_propagates(self, api, fake_client):
        with pytest.raises(APIError):
            await load_summary(api, TODAY)


class TestSummaryInsights:
    @staticmethod
    def _summary(**kwargs):
        values = {"water_ml": 2000, "water_goal_ml": 2000, "exercise_minutes_today": 45, "sleep_last_night": 7.5}
        return Summary(profile=Profile(), **{**values, **kwargs})

    def test_all_good(self):
        assert self._summary().insights == ["Great job! You are taking good care of your health!"]

    def test_low_water(self):
        tips = self._summary(water_ml=900).insights
        assert tips == ["You have only had 45% of your water. Drink some more!"]

    def test_no_exercise(self):
        assert self._summary(exercise_minutes_today=0).insights == [
            "You have not exercised today. Try to move for 30 minutes!"
        ]

    def test_short_sleep(self):
        assert self._summary(sleep_last_night=6.5).insights == [
            "You did not sleep enough last night. Aim for 7-8 hours tonight."
        ]

    def test_unlogged_sleep_gives_no_sleep_tip(self):
        assert self._summary(sleep_last_night=0).insights == []

    def test_good_day_needs_every_threshold(self):
        assert self._summary(water_ml=1500).insights == []
        assert self._summary(exercise_minutes_today=20).insights == []

    def test_empty_day(self):
        assert self._summary(water_ml=0, exercise_minutes_today=0, sleep_last_night=0).insights == [
            "You have only had 0% of your water. Drink some more!",
            "You have not exercised today. Try to move for 30 minutes!",
        ]

    @pytest.mark.asyncio
    async def test_loaded_summary(self, api, full_backend):
        summary = await load_summary(api, TODAY)
        assert summary.insights == ["You did not sleep enough last night. Aim for 7-8 hours tonight."]


# ── Reports ─────────────────────────────────────────────────────────

REPORT_PAYLOAD = {
    "water": {
        "avg_ml": 1750.4,
        "compliance_percent": 71.6,
        "daily_data": [{"total_ml": 1500}, {"total_ml": 2000}],
    },
    "exercise": {"total_minutes": 120, "total_sessions": 4, "current_streak": 2, "longest_streak": 5},
    "sleep": {"avg_hours": 8.04},
    "insights": ["Drink a glass of water after waking up"],
}


class TestReports:
    def test_week_starts_on_monday(self):
        assert week_start(TODAY) == date(2024, 3, 11)
        assert week_start(date(2024, 3, 11)) == date(2024, 3, 11)
        assert week_start(date(2024, 3, 17)) == date(2024, 3, 11)

    def test_month_key(self):
        assert month_key(TODAY) == "2024-03"

    def test_build_report(self):
        report = build_report(REPORT_PAYLOAD, "11/03 - 15/03")
        assert report.water_avg_ml == 1750
        assert report.water_compliance == 72
        assert report.water_trend == [1500.0, 2000.0]
        assert report.exercise_trend is None
        assert report.exercise_streak == 2
        assert report.sleep_avg_hours == 8.0
        assert report.sleep_rating == SleepRating.GOOD
        assert report.insights == ["Drink a glass of water after waking up"]

    def test_empty_payload_is_zeroed(self):
        report = build_report({}, "3/2024")
        assert report.water_avg_ml == 0
        assert report.exercise_minutes == 0
        assert report.sleep_rating is None
        assert report.insights == []
        assert report.month_over_month == {}

    @pytest.mark.asyncio
    async def test_load_reports(self, api, fake_client):
        fake_client.on("GET", "/reports/weekly", REPORT_PAYLOAD)
        fake_client.on("GET", "/reports/monthly", REPORT_PAYLOAD)

        weekly, monthly = await load_reports(api, TODAY)

        assert weekly.period == "11/03 - 15/03"
        assert monthly.period == "3/2024"
        assert weekly.exercise_streak == 2
        assert monthly.exercise_streak == 5
        assert fake_client.calls_to("GET", "/reports/weekly")[0][2] == {"week_start": "2024-03-11"}
        assert fake_client.calls_to("GET", "/reports/monthly")[0][2] == {"month": "2024-03"}


# ── Cycle ───────────────────────────────────────────────────────────


class TestCycle:
    @pytest.mark.asyncio
    async def test_server_prediction(self, api, fake_client):
        fake_client.on("GET", "/period-logs", [{"start_date": "2024-02-19", "flow_level": "medium"}])
        fake_client.on("GET", "/period/predictions", {"next_period": "2024-03-20", "avg_cycle_length": 30})

        status = await load_cycle(api, TODAY)

        assert status.last_period_start == date(2024, 2, 19)
        assert status.cycle_length == 30
        assert status.next_period == date(2024, 3, 20)
        assert status.days_until_period == 5
        assert status.phase == CyclePhase.PMS

    @pytest.mark.asyncio
    async def test_fallback_to_last_start(self, api, fake_client):
        fake_client.on("GET", "/period-logs", [{"start_date": "2024-02-20"}])
        status = await load_cycle(api, TODAY)
        assert status.next_period == date(2024, 3, 19)
        assert status.days_until_period == 4

    @pytest.mark.asyncio
    async def test_config_cycle_length(self, api, fake_client, tmp_dir):
        fake_client.on("GET", "/period-logs", [{"start_date": "2024-02-20"}])
        config = Config(data_dir=tmp_dir, defaults={"cycle": {"length_days": 35, "period_length_days": 4}})

        status = await load_cycle(api, TODAY, config)

        assert status.next_period == date(2024, 3, 26)
        assert status.period_length == 4
        assert status.phase == CyclePhase.FOLLICULAR

    @pytest.mark.asyncio
    async def test_no_data(self, api):
        status = await load_cycle(api, TODAY)
        assert status.next_period is None
        assert status.days_until_period is None
        assert status.phase is None

    @pytest.mark.asyncio
    async def test_start_period(self, api, fake_client):
        fake_client.on("POST", "/period-logs", {"id": 1})
        await start_period(api, TODAY, "heavy", ["cramps", "fatigue"])
        assert fake_client.calls_to("POST", "/period-logs")[0][3] == {
            "start_date": "2024-03-15",
            "flow_level": "heavy",
            "symptoms": "cramps,fatigue",
        }

    @pytest.mark.asyncio
    async def test_start_period_rejects_unknown_values(self, api, fake_client):
        with pytest.raises(ValidationError):
            await start_period(api, TODAY, "extreme")
        with pytest.raises(ValidationError, match="sneezing"):
            await start_period(api, TODAY, symptoms=["sneezing"])
        assert fake_client.calls == []


# ── Achievements ────────────────────────────────────────────────────


class TestAchievements:
    @pytest.mark.asyncio
    async def test_board(self, api, fake_client):
        fake_client.on(
            "GET",
            "/achievements",
            [
                {"id": 1, "name": "Hydrated", "category": "water", "is_unlocked": True},
                {"id": 2, "name": "Ocean", "category": "water", "progress": 100},
                {"id": 3, "name": "Sleeper", "category": "sleep", "progress": 20},
            ],
        )
        fake_client.on("GET", "/achievements/level", {"level": 3, "points": 250})

        board = await load_achievements(api)

        assert board.total == 3
        assert board.unlocked_count == 2
        assert [a.id for a in board.by_category("water")] == [1, 2]
        assert len(board.by_category()) == 3
        assert (board.level, board.points) == (3, 250)

    @pytest.mark.asyncio
    async def test_empty_board(self, api):
        board = await load_achievements(api)
        assert board.total == 0
        assert board.unlocked_count == 0
        assert (board.level, board.points) == (1, 0)
