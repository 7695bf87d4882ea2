"""
Field validation for asset records.

The predicates are pure and total: they never raise, they only report
whether a value is acceptable. validate_asset_fields() turns the first
failing predicate into the matching registry exception.
"""

from typing import Any

from app.core.exceptions import (
    AttributeVerificationException,
    CapacityThresholdException,
    InvalidAttributesException,
)

NAME_MAX_LENGTH = 64
SCHEMA_MAX_LENGTH = 128
TAG_MAX_LENGTH = 32
MAX_TAGS = 10
PAYLOAD_SIZE_CEILING = 1_000_000_000


def valid_text(value: Any, min_length: int = 1, max_length: int = NAME_MAX_LENGTH) -> bool:
    """Return True if value is a string whose length is within [min_length, max_length]."""
    if not isinstance(value, str):
        return False
    return min_length <= len(value) <= max_length


def valid_tag(tag: Any) -> bool:
    """A tag is a 1-32 character string."""
    return valid_text(tag, 1, TAG_MAX_LENGTH)


def valid_tag_sequence(tags: Any) -> bool:
    """Non-empty list of at most MAX_TAGS tags, all of them valid."""
    if not isinstance(tags, (list, tuple)):
        return False
    if not 1 <= len(tags) <= MAX_TAGS:
        return False
    return all(valid_tag(tag) for tag in tags)


def valid_payload_size(size: Any) -> bool:
    """0 < size < PAYLOAD_SIZE_CEILING. Booleans are not sizes."""
    if isinstance(size, bool) or not isinstance(size, int):
        return False
    return 0 < size < PAYLOAD_SIZE_CEILING


def validate_asset_fields(
    name: Any,
    payload_size: Any,
    attribute_schema: Any,
    tags: Any,
) -> None:
    """
    Check the four revisable asset fields.

    Checks run in a fixed order (name, payload size, schema, tags) and
    the first failure is raised.

    Raises:
        InvalidAttributesException: name or schema length out of bounds
        CapacityThresholdException: payload size out of range
        AttributeVerificationException: invalid tag sequence
    """
    if not valid_text(name, 1, NAME_MAX_LENGTH):
        raise InvalidAttributesException("name", 1, NAME_MAX_LENGTH)

    if not valid_payload_size(payload_size):
        raise CapacityThresholdException(payload_size, PAYLOAD_SIZE_CEILING)

    if not valid_text(attribute_schema, 1, SCHEMA_MAX_LENGTH):
        raise InvalidAttributesException("attribute_schema", 1, SCHEMA_MAX_LENGTH)

    if not valid_tag_sequence(tags):
        raise AttributeVerificationException(MAX_TAGS, TAG_MAX_LENGTH)
