"""Side-load resolution.

Stitches related entities returned next to a primary payload into the
primary records, following a declarative join map.
"""

from collections.abc import Iterable
from typing import Any

from zendesk_client.sideload.models import SideLoadMapping


def _matches(record: Any, key: str, value: Any) -> bool:
    # Strict equality: 1 must not join True or 1.0.
    if not isinstance(record, dict) or key not in record:
        return False
    candidate = record[key]
    return type(candidate) is type(value) and candidate == value


def find_all_records(dataset: Iterable[Any], key: str, value: Any) -> list[Any]:
    """Return every record in `dataset` whose `key` equals `value`, in order."""
    return [record for record in dataset if _matches(record, key, value)]


def find_one_record(dataset: Iterable[Any], key: str, value: Any) -> Any:
    """Return the first record in `dataset` whose `key` equals `value`, or None."""
    for record in dataset:
        if _matches(record, key, value):
            return record
    return None


def _populate_record(
    record: dict[str, Any],
    envelope: dict[str, Any],
    mappings: Iterable[SideLoadMapping],
) -> None:
    for mapping in mappings:
        # Absent join field, or a missing or non-list dataset, leaves the
        # destination untouched.
        if mapping.field not in record:
            continue
        dataset = envelope.get(mapping.dataset)
        if not isinstance(dataset, list):
            continue

        if mapping.all:
            record[mapping.name] = dataset
        elif mapping.array:
            record[mapping.name] = find_all_records(
                dataset, mapping.data_key, record[mapping.field]
            )
        else:
            record[mapping.name] = find_one_record(
                dataset, mapping.data_key, record[mapping.field]
            )


def resolve(
    primary: Any,
    envelope: Any,
    mappings: Iterable[SideLoadMapping],
) -> Any:
    """Populate side-loaded fields on primary records in place.

    Args:
        primary: A single record or a list of records.
        envelope: The full decoded response body holding sibling datasets.
        mappings: Join rules to apply.

    Returns:
        `primary`, mutated.
    """
    if not isinstance(envelope, dict):
        return primary

    mappings = tuple(mappings)
    records = primary if isinstance(primary, list) else [primary]
    for record in records:
        if isinstance(record, dict):
            _populate_record(record, envelope, mappings)
    return primary
