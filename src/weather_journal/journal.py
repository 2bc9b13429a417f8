"""The operations the request layer calls.

``Journal`` ties the lifecycle (writes) and the analysis functions (reads)
to one store, one weather client and one set of settings. Every read does
exactly one ``list_all()``; nothing is cached between calls.

Usage::

    from weather_journal.config import get_settings
    from weather_journal.journal import Journal

    journal = Journal.from_settings(get_settings())
    journal.create_observation("42", "after the run")
    journal.monthly_averages()  # {"03": 25, "04": 5}
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from weather_journal.analysis import aggregation
from weather_journal.config import Settings
from weather_journal.datasources.store import CouchDocumentStore, InMemoryDocumentStore
from weather_journal.datasources.weather import OpenMeteoClient, WeatherCompanyClient
from weather_journal.lifecycle import ObservationLifecycle
from weather_journal.services.http import create_session

if TYPE_CHECKING:
    from collections.abc import Callable

    from weather_journal.analysis.aggregation import MonthlySummary
    from weather_journal.datasources.store import DocumentStore
    from weather_journal.datasources.weather import WeatherClient
    from weather_journal.schemas import Metric, Observation, ScatterPoint

logger = logging.getLogger(__name__)


class Journal:
    """Create, delete, list and chart observations."""

    def __init__(
        self,
        store: DocumentStore,
        weather: WeatherClient,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.weather = weather
        self.settings = settings
        self.lifecycle = ObservationLifecycle(store, weather, settings.location, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings) -> Journal:
        """Build the configured store and weather client.

        For a CouchDB/Cloudant store the database is created first when
        ``store_create_db`` is set.

        Raises:
            StoreUnavailable: The store could not be reached to create the database.
            WriteRejected: The store refused to create the database.
        """
        store: DocumentStore
        if settings.uses_memory_store:
            logger.info("Using in-memory document store")
            store = InMemoryDocumentStore()
        else:
            store_session = create_session(
                timeout=settings.http_timeout, verify=settings.store_verify_tls
            )
            couch = CouchDocumentStore(settings.store_url, settings.store_db, session=store_session)
            if settings.store_create_db:
                couch.ensure_database()
            store = couch

        weather_session = create_session(timeout=settings.http_timeout)
        weather: WeatherClient
        if settings.weather_provider == "open-meteo":
            weather = OpenMeteoClient(session=weather_session)
        else:
            weather = WeatherCompanyClient(
                settings.weather_url, api_key=settings.weather_api_key, session=weather_session
            )
        return cls(store, weather, settings)

    def create_observation(self, raw_value: str | None, raw_note: str | None = None) -> Observation:
        return self.lifecycle.create(raw_value, raw_note)

    def delete_observation(self, doc_id: str, revision: str) -> None:
        self.lifecycle.delete(doc_id, revision)

    def list_observations(self) -> list[Observation]:
        return self.lifecycle.list_observations()

    def scatter_series(self, metric: Metric | str) -> list[ScatterPoint]:
        return aggregation.scatter_series(self.store.list_all(), metric)

    def monthly_averages(self) -> dict[str, int]:
        return self.monthly_summary().averages

    def monthly_summary(self) -> MonthlySummary:
        """Monthly averages along with the ids of documents left out."""
        return aggregation.summarize_months(self.store.list_all(), self.settings.tz)
