from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from car_efficiency.core.types import (
    BODY_TYPES,
    BOOLEAN_FIELDS,
    ENUM_FIELDS,
    FUEL_TYPES,
    NUMERIC_FIELDS,
    TRANSMISSION_TYPES,
    WIRE_NAMES,
    SpecificationRecord,
)
from car_efficiency.utils.numeric_parser import parse_number

logger = logging.getLogger(__name__)

# Accept both the extraction layer's camelCase names and our own field names
KEY_MAP: Dict[str, str] = {wire: name for name, wire in WIRE_NAMES.items()}
KEY_MAP.update({name: name for name in WIRE_NAMES})
KEY_MAP["carName"] = "name"

# Recognised values per enum field; anything else is kept but logged
KNOWN_VALUES = {
    "fuel_type": FUEL_TYPES,
    "transmission_type": TRANSMISSION_TYPES,
    "body_type": BODY_TYPES,
}


def _to_bool(value: Any) -> bool:
    # Plain truthiness: any non-empty string, "false" included, is True
    return bool(value)


def _to_enum(field_name: str, value: Any):
    text = str(value).strip().lower()
    if not text:
        return None
    if text not in KNOWN_VALUES[field_name]:
        logger.debug("normalize_spec: unrecognised %s=%r", field_name, text)
    return text


def _to_number(field_name: str, value: Any):
    num = parse_number(value)
    if num is None:
        logger.debug("normalize_spec: could not parse %s=%r; treating as absent", field_name, value)
        return None
    if num < 0:
        logger.debug("normalize_spec: negative %s=%r; treating as absent", field_name, value)
        return None
    return num


def normalize_spec(raw: Any) -> SpecificationRecord:
    """
    Coerce a loose attribute bag into a SpecificationRecord.

    - numeric fields go through the permissive parser; garbage becomes None
    - esc / isofix become real booleans (plain truthiness)
    - fuel, body and transmission types are lowercased but not validated
    - unknown keys are carried through in `extras`
    """
    if isinstance(raw, SpecificationRecord):
        return raw

    if not isinstance(raw, Mapping):
        logger.warning("normalize_spec: expected a mapping, got %s", type(raw).__name__)
        return SpecificationRecord()

    values: Dict[str, Any] = {}
    extras: Dict[str, Any] = {}

    for key, value in raw.items():
        name = KEY_MAP.get(key)
        if name is None:
            extras[key] = value
            continue

        if value is None:
            continue

        if name in NUMERIC_FIELDS:
            values[name] = _to_number(name, value)
        elif name in BOOLEAN_FIELDS:
            values[name] = _to_bool(value)
        elif name in ENUM_FIELDS:
            values[name] = _to_enum(name, value)
        else:
            values[name] = str(value)

    return SpecificationRecord(**values, extras=extras)
