"""
Pydantic schemas for API request/response validation and persisted records.

Persisted records (PreferenceProfile, WatchedMovie) serialize with camelCase
aliases so the stored JSON layout stays the same as the browser storage the
data originally lived in. Always dump them with by_alias=True.
"""
