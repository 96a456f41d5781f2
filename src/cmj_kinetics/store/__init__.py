"""Persistence for measurement profiles and per-user settings."""

from cmj_kinetics.store.database import (
    create_db_engine,
    init_db,
    make_session_factory,
    session_scope,
)
from cmj_kinetics.store.repository import MeasurementStore, SettingsStore

__all__ = [
    "create_db_engine",
    "init_db",
    "make_session_factory",
    "session_scope",
    "MeasurementStore",
    "SettingsStore",
]
