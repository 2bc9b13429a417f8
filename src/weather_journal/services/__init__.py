"""
Shared utilities for talking to external services.

- http.py - pre-configured ``requests.Session`` (single-shot, bounded timeout)
"""
