"""
Pydantic schema definitions for API payloads.

Schemas describe request and response bodies; the persisted form of a
song is the plain dictionary handled by the store.
"""
