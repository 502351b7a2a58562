"""Unit test configuration.

Isolates unit tests from integration test setup.
Unit tests should not depend on app.py or external services.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, List

import pytest

from domain.gain_plan.core.entities.body_stats_record import BodyStatsRecord
from domain.gain_plan.core.entities.user_gain_profile import UserGainProfile
from domain.gain_plan.core.entities.workout_log_record import WorkoutLogRecord
from domain.gain_plan.core.value_objects.biometric_profile import BiometricProfile
from domain.gain_plan.core.value_objects.goal import Goal

AS_OF = datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def biometrics() -> BiometricProfile:
    """Male, 30y, 180cm, 75kg, moderately active (BMR 1730, TDEE 2682)."""
    return BiometricProfile(
        age=30,
        biological_sex="male",
        height_cm=180.0,
        current_weight_kg=75.0,
        activity_level="moderate",
    )


@pytest.fixture
def goal() -> Goal:
    """+0.5 kg/week towards 80kg (surplus 550)."""
    return Goal(target_weight_kg=80.0, weekly_gain_kg=0.5)


@pytest.fixture
def gain_profile(biometrics: BiometricProfile, goal: Goal) -> UserGainProfile:
    return UserGainProfile(user_id="user123", biometrics=biometrics, goal=goal)


@pytest.fixture
def weigh_ins() -> Callable[..., List[BodyStatsRecord]]:
    """Build a daily weigh-in series ending at ``end``."""

    def _build(
        weights: List[float], end: date = AS_OF.date(), user_id: str = "user123"
    ) -> List[BodyStatsRecord]:
        start = end - timedelta(days=len(weights) - 1)
        return [
            BodyStatsRecord(user_id=user_id, date=start + timedelta(days=i), weight_kg=w)
            for i, w in enumerate(weights)
        ]

    return _build


@pytest.fixture
def workouts() -> Callable[..., List[WorkoutLogRecord]]:
    """Build one workout per day ending at ``end`` with the given intensities."""

    def _build(
        intensities: List[str], end: date = AS_OF.date(), user_id: str = "user123"
    ) -> List[WorkoutLogRecord]:
        start = end - timedelta(days=len(intensities) - 1)
        return [
            WorkoutLogRecord(
                user_id=user_id,
                date=start + timedelta(days=i),
                duration_min=60,
                intensity=intensity,
            )
            for i, intensity in enumerate(intensities)
        ]

    return _build
