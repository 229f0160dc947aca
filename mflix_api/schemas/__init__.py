"""Pydantic request/response contracts (kept separate from stored documents)."""
