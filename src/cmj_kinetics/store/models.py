"""SQLAlchemy ORM models for measurement profiles and user settings."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from cmj_kinetics.store.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    leg_length = Column(Float, nullable=False)  # cm
    height_90_degree = Column(Float, nullable=False)  # cm, hip height at 90° knee flexion
    weight_kg = Column(Float, nullable=True)
    user_email = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    __table_args__ = (
        Index("ix_measurements_user_created", "user_email", "created_at"),
    )


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_email = Column(String, primary_key=True)
    frames_per_second = Column(Float, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
