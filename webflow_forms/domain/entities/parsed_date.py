"""ParsedDate entity - Domain model for a normalized calendar date."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedDate:
    """ParsedDate entity - immutable domain model."""
    year: int
    month: int
    day: int
    iso: str
