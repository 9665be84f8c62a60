"""
Entity identifiers.

Identifiers are UUID7 values generated by the service. Clients send them back
as strings in paths and bodies; anything that does not parse is treated as a
reference to an entity that does not exist, never as a fatal fault.
"""

from typing import Any
from uuid import UUID

import uuid_utils.compat as uuid_compat


def new_entity_id() -> UUID:
    return uuid_compat.uuid7()


def parse_entity_id(value: Any) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None
