"""
Domain models for weather journal.

Pydantic models for stored documents and the views derived from them.
Stored documents keep their on-disk keys (``_id``, ``_rev``, ``temp``,
``rh``, ``ts``); the models expose readable names through aliases.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Observations
# =============================================================================


class ObservationCandidate(BaseModel):
    """Validated user input, not yet enriched or stored."""

    model_config = ConfigDict(frozen=True)

    value: int
    note: str = ""


class Observation(BaseModel):
    """A logged reading with the weather at the time it was logged.

    Immutable: there is no update path, only create and delete.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", description="Store-assigned document ID")
    revision: str = Field(..., alias="_rev", description="Opaque concurrency token")
    value: int
    note: str = ""
    temperature: float = Field(..., alias="temp", description="Degrees Celsius")
    relative_humidity: float = Field(..., alias="rh", description="Percent")
    timestamp: int = Field(..., alias="ts", description="Epoch seconds")

    def to_document(self) -> dict[str, Any]:
        """Return the stored document shape, including ``_id`` and ``_rev``."""
        return self.model_dump(by_alias=True)


# =============================================================================
# External service results
# =============================================================================


class Location(BaseModel):
    """Fixed coordinates the weather is fetched for."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Conditions(BaseModel):
    """Current weather at a location."""

    temperature: float
    relative_humidity: float


class DocumentRef(BaseModel):
    """Identity of a document as assigned by the store."""

    id: str
    revision: str


class DeleteOutcome(StrEnum):
    """What the store reported for a delete request."""

    DELETED = "deleted"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


# =============================================================================
# Derived views
# =============================================================================


class Metric(StrEnum):
    """Weather metric plotted against the logged value."""

    TEMPERATURE = "temperature"
    RELATIVE_HUMIDITY = "relativeHumidity"

    @classmethod
    def _missing_(cls, value: object) -> Metric | None:
        if isinstance(value, str):
            aliases = {
                "temperature": cls.TEMPERATURE,
                "temp": cls.TEMPERATURE,
                "relativehumidity": cls.RELATIVE_HUMIDITY,
                "humidity": cls.RELATIVE_HUMIDITY,
                "relative_humidity": cls.RELATIVE_HUMIDITY,
                "rh": cls.RELATIVE_HUMIDITY,
            }
            return aliases.get(value.lower())
        return None

    @property
    def document_key(self) -> str:
        """Key holding this metric in a stored document."""
        return "temp" if self is Metric.TEMPERATURE else "rh"

    @property
    def label(self) -> str:
        """Axis label for charts."""
        return "Temperature (C)" if self is Metric.TEMPERATURE else "Humidity (%)"


class ScatterPoint(BaseModel):
    """One observation as an (x=value, y=metric) pair."""

    x: int
    y: float
    timestamp: int | None = None


class MonthlyAverage(BaseModel):
    """Rounded mean of all values logged in one calendar month."""

    month: str = Field(..., pattern=r"^(0[1-9]|1[0-2])$")
    average: int
