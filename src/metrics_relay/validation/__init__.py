"""
Validation Package - Metric Name and Source Rules.

Names and sources end up as identifiers on the remote service, which
only accepts a small ASCII alphabet. Everything else is dropped before
it reaches the collector.

Design Principles:
    - Pure functions, no state
    - Whole-string decisions (no partial acceptance, no transliteration)
"""

from metrics_relay.validation.name_validator import (
    MAX_NAME_LENGTH,
    MAX_SOURCE_LENGTH,
    is_valid_name,
    is_valid_source,
)

__all__ = [
    "MAX_NAME_LENGTH",
    "MAX_SOURCE_LENGTH",
    "is_valid_name",
    "is_valid_source",
]
