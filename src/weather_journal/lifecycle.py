"""Create and delete observations.

Creation is all-or-nothing: validate, fetch the current weather, then
write one document. A failure at any step surfaces immediately and leaves
the store untouched. Nothing is retried.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as ModelValidationError

from weather_journal import validator
from weather_journal.errors import (
    EnrichmentUnavailable,
    NotFound,
    PersistenceFailed,
    StaleRevision,
    StoreUnavailable,
    WeatherUnavailable,
    WriteRejected,
)
from weather_journal.schemas import DeleteOutcome, Observation

if TYPE_CHECKING:
    from collections.abc import Callable

    from weather_journal.datasources.store import DocumentStore
    from weather_journal.datasources.weather import WeatherClient
    from weather_journal.schemas import Location

logger = logging.getLogger(__name__)


class ObservationLifecycle:
    """Orchestrates writes to the store for one configured location."""

    def __init__(
        self,
        store: DocumentStore,
        weather: WeatherClient,
        location: Location,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.weather = weather
        self.location = location
        self.clock = clock

    def create(self, raw_value: str | None, raw_note: str | None = None) -> Observation:
        """Validate, enrich and persist a new observation.

        Raises:
            InvalidValue: The value does not reduce to an integer.
            EnrichmentUnavailable: The weather lookup failed; nothing was saved.
            PersistenceFailed: The store did not accept the document.
        """
        candidate = validator.validate(raw_value, raw_note)

        try:
            conditions = self.weather.current_conditions(self.location.lat, self.location.lon)
        except WeatherUnavailable as exc:
            logger.warning("Weather enrichment failed, observation not saved: %s", exc)
            raise EnrichmentUnavailable(str(exc)) from exc

        doc: dict[str, Any] = {
            "value": candidate.value,
            "note": candidate.note,
            "temp": conditions.temperature,
            "rh": conditions.relative_humidity,
            "ts": int(self.clock()),
        }
        try:
            ref = self.store.create(doc)
        except (StoreUnavailable, WriteRejected) as exc:
            logger.warning("Document could not be created: %s", exc)
            msg = f"Document could not be created: {exc}"
            raise PersistenceFailed(msg) from exc

        logger.info("Created observation %s (value=%s)", ref.id, candidate.value)
        return Observation.model_validate({"_id": ref.id, "_rev": ref.revision, **doc})

    def delete(self, doc_id: str, revision: str) -> None:
        """Delete one revision of an observation.

        Raises:
            StaleRevision: ``revision`` is not the document's current revision.
            NotFound: No document with ``doc_id`` exists.
        """
        outcome = self.store.delete(doc_id, revision)
        if outcome is DeleteOutcome.CONFLICT:
            raise StaleRevision(doc_id, revision)
        if outcome is DeleteOutcome.NOT_FOUND:
            raise NotFound(doc_id)
        logger.info("Deleted observation %s", doc_id)

    def list_observations(self) -> list[Observation]:
        """Every stored observation, newest first."""
        observations: list[Observation] = []
        for doc in self.store.list_all(descending=True):
            try:
                observations.append(Observation.model_validate(doc))
            except ModelValidationError as exc:
                logger.warning(
                    "Skipping malformed document %s: %d error(s)",
                    doc.get("_id", "<no id>"),
                    exc.error_count(),
                )
        return observations
