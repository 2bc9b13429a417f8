"""External services the journal depends on.

Each subdirectory is one service with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── base.py           # Protocol the rest of the package codes against
    └── {backend}.py      # One implementation per backend

- store/    Revisioned document store (CouchDB/Cloudant, in-memory)
- weather/  Current conditions (The Weather Company, Open-Meteo)

Implementations only translate wire formats and HTTP statuses into the
package's models and errors. They never retry.
"""
