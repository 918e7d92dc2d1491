"""Pagination Schemas: listing metadata returned next to every page."""

from pydantic import BaseModel


class ResultsMetadata(BaseModel):
    """total counts all matching rows before offset/limit are applied."""
    total: int
    offset: int
    limit: int
