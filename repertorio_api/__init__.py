"""Repertorio API: a small JSON-file backed song repertoire service."""
