"""Owner-scoped access to measurement profiles and user settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.orm import Session

from cmj_kinetics.analysis.kinetics import parse_number, parse_positive
from cmj_kinetics.core.exceptions import (
    RecordNotFoundError,
    RecordValidationError,
    UnauthorizedError,
)
from cmj_kinetics.core.logging import get_logger
from cmj_kinetics.core.types import MeasurementProfile
from cmj_kinetics.store.models import Measurement, UserSettings

logger = get_logger(__name__)

NAME_KEYS = ("name",)
LEG_LENGTH_KEYS = ("legLength", "leg_length", "leg_length_cm")
HEIGHT_90_KEYS = ("height90Degree", "height_90_degree", "height_90_degree_cm")
WEIGHT_KEYS = ("weightKg", "weight_kg")

MISSING_FIELDS_MESSAGE = "Missing required fields: name, legLength, height90Degree"


class MeasurementPayload(BaseModel):
    """Validated measurement fields from a create or update request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    leg_length_cm: float = Field(validation_alias=AliasChoices(*LEG_LENGTH_KEYS), ge=0)
    height_90_degree_cm: float = Field(validation_alias=AliasChoices(*HEIGHT_90_KEYS), ge=0)
    weight_kg: float | None = Field(
        default=None, validation_alias=AliasChoices(*WEIGHT_KEYS), ge=0
    )

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("leg_length_cm", "height_90_degree_cm", "weight_kg", mode="before")
    @classmethod
    def _parse_numeric(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        number = parse_number(value)
        if number is None:
            raise ValueError("not a finite number")
        return number


def _lookup(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def validate_measurement(data: Mapping[str, Any]) -> MeasurementPayload:
    """Validate a measurement payload.

    Args:
        data: Request body with name, leg length, hip height and optional weight

    Returns:
        Validated payload

    Raises:
        RecordValidationError: With the message of the first failing check
    """
    if (
        not _lookup(data, NAME_KEYS)
        or _lookup(data, LEG_LENGTH_KEYS) is None
        or _lookup(data, HEIGHT_90_KEYS) is None
    ):
        raise RecordValidationError(MISSING_FIELDS_MESSAGE)

    try:
        return MeasurementPayload.model_validate(dict(data))
    except ValidationError as e:
        fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        if fields and fields <= {*WEIGHT_KEYS}:
            raise RecordValidationError("Invalid weight value") from e
        if fields <= {*NAME_KEYS}:
            raise RecordValidationError(MISSING_FIELDS_MESSAGE) from e
        raise RecordValidationError("Invalid numeric values") from e


def _parse_record_id(record_id: int | str) -> int:
    if isinstance(record_id, bool):
        raise RecordValidationError("Invalid measurement ID")
    if isinstance(record_id, int):
        return record_id
    try:
        return int(str(record_id).strip())
    except ValueError as e:
        raise RecordValidationError("Invalid measurement ID") from e


def _to_profile(row: Measurement) -> MeasurementProfile:
    return MeasurementProfile(
        id=row.id,
        name=row.name,
        leg_length_cm=row.leg_length,
        height_90_degree_cm=row.height_90_degree,
        weight_kg=row.weight_kg,
        created_at=row.created_at,
    )


class MeasurementStore:
    """CRUD for one owner's measurement profiles.

    Every query is scoped to the owner; records of other owners behave as
    if they did not exist.
    """

    def __init__(self, db: Session, owner: str | None) -> None:
        """Initialize store for an owner.

        Args:
            db: Open database session
            owner: Owning identity (e.g. e-mail address)

        Raises:
            UnauthorizedError: If no owner is given
        """
        if not owner:
            raise UnauthorizedError()
        self.db = db
        self.owner = owner

    def list(self) -> list[MeasurementProfile]:
        """All profiles of the owner, newest first."""
        rows = (
            self.db.query(Measurement)
            .filter(Measurement.user_email == self.owner)
            .order_by(Measurement.created_at.desc(), Measurement.id.desc())
            .all()
        )
        return [_to_profile(r) for r in rows]

    def get(self, record_id: int | str) -> MeasurementProfile:
        """Fetch a single profile.

        Raises:
            RecordValidationError: If the id is not an integer
            RecordNotFoundError: If the owner has no such profile
        """
        return _to_profile(self._get_row(record_id))

    def create(self, data: Mapping[str, Any]) -> MeasurementProfile:
        """Validate and store a new profile.

        Raises:
            RecordValidationError: If the payload is invalid
        """
        payload = validate_measurement(data)
        row = Measurement(
            name=payload.name,
            leg_length=payload.leg_length_cm,
            height_90_degree=payload.height_90_degree_cm,
            weight_kg=payload.weight_kg,
            user_email=self.owner,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        logger.info("Saved measurement %d (%s)", row.id, row.name)
        return _to_profile(row)

    def update(self, record_id: int | str, data: Mapping[str, Any]) -> MeasurementProfile:
        """Replace the fields of an existing profile.

        An absent or empty weight clears the stored weight.

        Raises:
            RecordValidationError: If the id or payload is invalid
            RecordNotFoundError: If the owner has no such profile
        """
        record_id = _parse_record_id(record_id)
        payload = validate_measurement(data)
        row = self._get_row(record_id)

        row.name = payload.name
        row.leg_length = payload.leg_length_cm
        row.height_90_degree = payload.height_90_degree_cm
        row.weight_kg = payload.weight_kg
        self.db.commit()
        self.db.refresh(row)

        logger.info("Updated measurement %d", row.id)
        return _to_profile(row)

    def delete(self, record_id: int | str) -> None:
        """Delete a profile.

        Raises:
            RecordValidationError: If the id is not an integer
            RecordNotFoundError: If the owner has no such profile
        """
        row = self._get_row(record_id)
        deleted_id = row.id
        self.db.delete(row)
        self.db.commit()

        logger.info("Deleted measurement %d", deleted_id)

    def _get_row(self, record_id: int | str) -> Measurement:
        record_id = _parse_record_id(record_id)
        row = (
            self.db.query(Measurement)
            .filter(Measurement.id == record_id, Measurement.user_email == self.owner)
            .first()
        )
        if row is None:
            raise RecordNotFoundError()
        return row


class SettingsStore:
    """Per-owner settings: currently only the default frame rate."""

    def __init__(self, db: Session, owner: str | None) -> None:
        if not owner:
            raise UnauthorizedError()
        self.db = db
        self.owner = owner

    def get_frames_per_second(self) -> float | None:
        """Stored default frame rate, or None if never set or cleared."""
        row = self.db.get(UserSettings, self.owner)
        return row.frames_per_second if row is not None else None

    def set_frames_per_second(self, value: str | float | None) -> float | None:
        """Store or clear the default frame rate.

        Args:
            value: New frame rate; None clears the setting

        Returns:
            The stored value

        Raises:
            RecordValidationError: If the value is not a positive number
        """
        fps: float | None = None
        if value is not None:
            fps = parse_positive(value)
            if fps is None:
                raise RecordValidationError("Invalid frames per second value")

        row = self.db.get(UserSettings, self.owner)
        if row is None:
            row = UserSettings(user_email=self.owner)
            self.db.add(row)
        row.frames_per_second = fps
        self.db.commit()

        logger.info("Default frame rate set to %s", fps)
        return fps
