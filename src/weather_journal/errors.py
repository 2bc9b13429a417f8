"""Error taxonomy for the observation lifecycle.

Every failure reaches the caller as one of these exceptions; the request
layer decides how to present each one.
"""

from __future__ import annotations


class JournalError(Exception):
    """Base class for all weather-journal errors."""


class ValidationError(JournalError):
    """User input was rejected. The caller may fix it and resubmit."""


class InvalidValue(ValidationError):
    """The reading does not reduce to an integer."""

    def __init__(self, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(f"Value is not valid: {raw_value!r}")


class UnknownMetric(ValidationError):
    """The requested chart metric is not one the journal records."""

    def __init__(self, metric: object) -> None:
        self.metric = metric
        super().__init__(f"Unknown metric: {metric!r}")


class WeatherUnavailable(JournalError):
    """The weather API could not be reached or returned unusable data."""


class EnrichmentUnavailable(JournalError):
    """An observation could not be enriched with weather data; nothing was saved."""


class StoreUnavailable(JournalError):
    """The document store could not be reached."""


class WriteRejected(JournalError):
    """The document store answered a write with a non-success status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        msg = f"Document store rejected write (HTTP {status_code})"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class PersistenceFailed(JournalError):
    """An enriched observation could not be saved."""


class StaleRevision(JournalError):
    """Delete used a revision that is no longer current."""

    def __init__(self, doc_id: str, revision: str) -> None:
        self.doc_id = doc_id
        self.revision = revision
        super().__init__(f"Revision {revision!r} of document {doc_id!r} is not current")


class NotFound(JournalError):
    """The document to delete does not exist."""

    def __init__(self, doc_id: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"Document {doc_id!r} not found")
