"""Unit tests for side-load resolution."""

from typing import Any

import pytest
from pydantic import ValidationError

from zendesk_client.sideload import SideLoadMapping, resolve
from zendesk_client.sideload.resolver import find_all_records, find_one_record


USERS = [
    {"id": 1, "name": "Ann"},
    {"id": 2, "name": "Bo"},
]


class TestSideLoadMapping:
    """Tests for the mapping model."""

    def test_defaults(self) -> None:
        """Join key defaults to id and single-record matching."""
        mapping = SideLoadMapping(field="requester_id", name="requester", dataset="users")

        assert mapping.data_key == "id"
        assert mapping.array is False
        assert mapping.all is False

    def test_frozen(self) -> None:
        """Mappings are immutable once defined."""
        mapping = SideLoadMapping(field="requester_id", name="requester", dataset="users")

        with pytest.raises(ValidationError):
            mapping.name = "submitter"  # type: ignore[misc]

    def test_rejects_empty_names(self) -> None:
        """Empty field names are rejected."""
        with pytest.raises(ValidationError):
            SideLoadMapping(field="", name="requester", dataset="users")


class TestFindRecords:
    """Tests for the dataset lookups."""

    def test_find_one_first_match(self) -> None:
        """The first matching record wins."""
        dataset = [{"id": 1, "n": "a"}, {"id": 1, "n": "b"}]

        assert find_one_record(dataset, "id", 1) == {"id": 1, "n": "a"}

    def test_find_one_no_match(self) -> None:
        """No match yields None."""
        assert find_one_record(USERS, "id", 9) is None

    def test_find_all_preserves_order(self) -> None:
        """Every match is returned in dataset order."""
        dataset = [{"g": 1, "n": "a"}, {"g": 2}, {"g": 1, "n": "c"}]

        assert find_all_records(dataset, "g", 1) == [
            {"g": 1, "n": "a"},
            {"g": 1, "n": "c"},
        ]

    def test_skips_records_without_key(self) -> None:
        """Records lacking the key never match, not even a None value."""
        dataset: list[Any] = [{"name": "orphan"}, "junk", {"id": None}]

        assert find_all_records(dataset, "id", None) == [{"id": None}]

    def test_strict_type_match(self) -> None:
        """Values of another type never match, even when == would."""
        dataset = [
            {"id": True, "n": "bool"},
            {"id": 1.0, "n": "float"},
            {"id": 1, "n": "int"},
        ]

        assert find_one_record(dataset, "id", 1) == {"id": 1, "n": "int"}
        assert find_all_records(dataset, "id", 1) == [{"id": 1, "n": "int"}]
        assert find_one_record([{"id": True}], "id", 1) is None


class TestResolve:
    """Tests for resolve."""

    def test_single_match_on_list(self) -> None:
        """Each primary record receives its matching sibling."""
        primary = [{"id": 10, "user_id": 2}, {"id": 11, "user_id": 1}]
        envelope = {"tickets": primary, "users": USERS}
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        result = resolve(primary, envelope, [mapping])

        assert result is primary
        assert primary[0]["user"] == {"id": 2, "name": "Bo"}
        assert primary[1]["user"] == {"id": 1, "name": "Ann"}

    def test_single_record_primary(self) -> None:
        """A single record is resolved like a one-element list."""
        primary = {"id": 10, "user_id": 1}
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        result = resolve(primary, {"ticket": primary, "users": USERS}, [mapping])

        assert result == {"id": 10, "user_id": 1, "user": {"id": 1, "name": "Ann"}}

    def test_single_no_match_is_null(self) -> None:
        """A lookup without a match stores None."""
        primary = [{"user_id": 42}]
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        resolve(primary, {"users": USERS}, [mapping])

        assert "user" in primary[0]
        assert primary[0]["user"] is None

    def test_array_collects_matches(self) -> None:
        """Array mappings attach every match in dataset order."""
        groups = [
            {"id": 1, "org": 5, "name": "L1"},
            {"id": 2, "org": 6, "name": "Other"},
            {"id": 3, "org": 5, "name": "L2"},
        ]
        primary = [{"id": 5}]
        mapping = SideLoadMapping(
            field="id", name="groups", dataset="groups", data_key="org", array=True
        )

        resolve(primary, {"groups": groups}, [mapping])

        assert [g["name"] for g in primary[0]["groups"]] == ["L1", "L2"]

    def test_array_without_matches_is_empty(self) -> None:
        """Array mappings with no match attach an empty list."""
        primary = [{"group_ids": 99}]
        mapping = SideLoadMapping(
            field="group_ids", name="groups", dataset="groups", array=True
        )

        resolve(primary, {"groups": [{"id": 1}]}, [mapping])

        assert primary[0]["groups"] == []

    def test_all_attaches_whole_dataset(self) -> None:
        """All mappings attach the full dataset regardless of the join value."""
        primary = [{"id": 1, "brand_id": 7}, {"id": 2, "brand_id": 8}]
        brands = [{"id": 100}]
        mapping = SideLoadMapping(field="brand_id", name="brands", dataset="brands", all=True)

        resolve(primary, {"brands": brands}, [mapping])

        assert primary[0]["brands"] == brands
        assert primary[1]["brands"] == brands

    def test_missing_join_field_left_unset(self) -> None:
        """Records without the join field are untouched."""
        primary = [{"id": 1}]
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        resolve(primary, {"users": USERS}, [mapping])

        assert primary == [{"id": 1}]

    def test_missing_dataset_left_unset(self) -> None:
        """Envelopes without the dataset leave records untouched."""
        primary = [{"id": 1, "user_id": 1}]
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        resolve(primary, {"tickets": primary}, [mapping])

        assert primary == [{"id": 1, "user_id": 1}]

    @pytest.mark.parametrize("dataset", [None, {"id": 10}, "organizations"])
    def test_non_list_dataset_left_unset(self, dataset: Any) -> None:
        """A null or non-list dataset is treated as absent."""
        primary = {"id": 1, "organization_id": 10}
        mappings = [
            SideLoadMapping(
                field="organization_id", name="organization", dataset="organizations"
            ),
            SideLoadMapping(
                field="organization_id",
                name="organizations",
                dataset="organizations",
                array=True,
            ),
        ]

        resolve(primary, {"organizations": dataset}, mappings)

        assert primary == {"id": 1, "organization_id": 10}

    def test_several_mappings(self) -> None:
        """Every mapping applies to every record."""
        primary = [{"requester_id": 1, "assignee_id": 2, "organization_id": 3}]
        envelope = {
            "users": USERS,
            "organizations": [{"id": 3, "name": "Acme"}],
        }
        mappings = [
            SideLoadMapping(field="requester_id", name="requester", dataset="users"),
            SideLoadMapping(field="assignee_id", name="assignee", dataset="users"),
            SideLoadMapping(
                field="organization_id", name="organization", dataset="organizations"
            ),
        ]

        resolve(primary, envelope, mappings)

        assert primary[0]["requester"]["name"] == "Ann"
        assert primary[0]["assignee"]["name"] == "Bo"
        assert primary[0]["organization"]["name"] == "Acme"

    def test_non_dict_envelope(self) -> None:
        """Non-object envelopes leave the primary payload alone."""
        primary = [{"user_id": 1}]
        mapping = SideLoadMapping(field="user_id", name="user", dataset="users")

        assert resolve(primary, [USERS], [mapping]) == [{"user_id": 1}]
