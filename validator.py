"""Generic validator for the declarative schemas in `schemas`."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from models import ValidationFailure
from schemas import Schema, canonical_category

LOGGER = logging.getLogger(__name__)

_MISSING = object()


def validate(candidate: Any, schema: Schema) -> Any:
    """Return a validated deep copy of `candidate` or a ValidationFailure.

    Every required path is checked; the failure lists all missing and all
    mistyped paths, never just the first. Enumerated values outside the
    allowed set are coerced to the schema's default instead of failing.
    """
    if schema.collection_key is None:
        return _validate_record(candidate, schema)
    return _validate_collection(candidate, schema)


def _validate_collection(candidate: Any, schema: Schema) -> list[dict[str, Any]] | ValidationFailure:
    items = _collection_items(candidate, schema.collection_key)
    if not items:
        return ValidationFailure(missing=(schema.collection_key,))

    valid: list[dict[str, Any]] = []
    missing: list[str] = []
    invalid: list[str] = []
    for item in items:
        result = _validate_record(item, schema)
        if isinstance(result, ValidationFailure):
            _extend_unique(missing, result.missing)
            _extend_unique(invalid, result.invalid)
            continue
        valid.append(result)

    if not valid:
        return ValidationFailure(missing=tuple(missing), invalid=tuple(invalid))

    dropped = len(items) - len(valid)
    if dropped:
        LOGGER.info(
            "Dropped %s/%s %s records failing validation (%s)",
            dropped,
            len(items),
            schema.kind,
            ValidationFailure(missing=tuple(missing), invalid=tuple(invalid)),
        )
    return valid


def _collection_items(candidate: Any, key: str) -> list[Any]:
    if isinstance(candidate, list):
        return candidate
    if isinstance(candidate, Mapping):
        nested = candidate.get(key)
        if isinstance(nested, list):
            return nested
        if key in candidate:
            return []
        return [candidate]
    return []


def _validate_record(candidate: Any, schema: Schema) -> dict[str, Any] | ValidationFailure:
    if not isinstance(candidate, Mapping):
        return ValidationFailure(missing=schema.required)

    record = copy.deepcopy(dict(candidate))

    missing = [path for path in schema.required if _is_empty(_lookup(record, path))]

    invalid = []
    for path, expected in schema.types.items():
        if path in missing:
            continue
        value = _lookup(record, path)
        if value is _MISSING or value is None:
            continue
        if not _matches_type(value, expected):
            invalid.append(path)

    if missing or invalid:
        return ValidationFailure(missing=tuple(missing), invalid=tuple(invalid))

    for path, (allowed, default) in schema.enums.items():
        value = _lookup(record, path)
        if value is _MISSING:
            continue
        coerced = canonical_category(value, allowed, default)
        if coerced != value:
            LOGGER.debug("Coerced %s=%r to %r", path, value, coerced)
        _assign(record, path, coerced)

    return record


def _lookup(data: Any, path: str) -> Any:
    current = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return _MISSING
        current = current[segment]
    return current


def _assign(data: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    current = data
    for segment in parents:
        current = current[segment]
    current[leaf] = value


def _is_empty(value: Any) -> bool:
    if value is _MISSING or value is None or value is False:
        return True
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _matches_type(value: Any, expected: type | tuple[type, ...]) -> bool:
    expected_types = expected if isinstance(expected, tuple) else (expected,)
    if isinstance(value, bool) and bool not in expected_types:
        return False
    return isinstance(value, expected_types)


def _extend_unique(target: list[str], paths: tuple[str, ...]) -> None:
    for path in paths:
        if path not in target:
            target.append(path)
