"""Weather Journal - log manual readings alongside the weather at the time.

Architecture::

    datasources/   External services (CouchDB/Cloudant document store, weather APIs)
    validator.py   Raw form input -> typed candidate observation
    lifecycle.py   Create (validate -> enrich -> persist) and delete
    analysis/      Pure projections of the stored documents (scatter, monthly bars)
    journal.py     The interface the request layer calls
    services/      Shared utilities (HTTP session with bounded timeouts)

Data flow: user input -> validator -> weather enrichment -> store -> analysis
"""

__version__ = "0.1.0"

from weather_journal.config import Settings
from weather_journal.journal import Journal
from weather_journal.schemas import Observation

__all__ = ["Journal", "Observation", "Settings", "__version__"]
