"""Pytest fixtures for CMJ Kinetics tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.orm import Session

from cmj_kinetics.analysis.kinetics import JumpKineticsCalculator
from cmj_kinetics.core.config import DatabaseSettings, DisplaySettings, KineticsSettings
from cmj_kinetics.core.types import MeasurementProfile
from cmj_kinetics.store.database import create_db_engine, init_db, make_session_factory

OWNER = "athlete@example.com"


@pytest.fixture
def kinetics_settings() -> KineticsSettings:
    """Standard gravity settings."""
    return KineticsSettings(gravity=9.81)


@pytest.fixture
def display_settings() -> DisplaySettings:
    """Default display precision."""
    return DisplaySettings(decimals=2, relative_force_decimals=3)


@pytest.fixture
def calculator(kinetics_settings: KineticsSettings) -> JumpKineticsCalculator:
    """Calculator with standard gravity."""
    return JumpKineticsCalculator(kinetics_settings)


@pytest.fixture
def sample_profile() -> MeasurementProfile:
    """Profile with a 30 cm countermovement depth."""
    return MeasurementProfile(
        id=1,
        name="Alex",
        leg_length_cm=100.0,
        height_90_degree_cm=70.0,
        weight_kg=80.0,
    )


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Session on a fresh in-memory database."""
    engine = create_db_engine(DatabaseSettings(url="sqlite:///:memory:"))
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def owner() -> str:
    """Owning identity used by store tests."""
    return OWNER
