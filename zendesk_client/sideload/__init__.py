"""Side-load join maps and their resolver."""

from zendesk_client.sideload.models import SideLoadMapping
from zendesk_client.sideload.resolver import find_all_records, find_one_record, resolve


__all__ = [
    "SideLoadMapping",
    "find_all_records",
    "find_one_record",
    "resolve",
]
