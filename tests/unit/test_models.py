from datetime import datetime, timedelta, timezone

import pytest

from onelogin_users.models import User, UserQuery


def test_to_dict_omits_absent_fields():
    user = User(username="alice", email="alice@example.com", group_id=3)
    assert user.to_dict() == {"username": "alice", "email": "alice@example.com", "group_id": 3}


def test_to_dict_serializes_timestamps_and_custom_attributes():
    created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    user = User(id=1, created_at=created, custom_attributes={"badge": "A1"})

    payload = user.to_dict()

    assert payload["created_at"] == "2024-01-02T03:04:05+00:00"
    assert payload["custom_attributes"] == {"badge": "A1"}
    assert payload["custom_attributes"] is not user.custom_attributes


def test_from_dict_parses_known_fields_and_ignores_unknown():
    user = User.from_dict({
        "id": 10,
        "firstname": "Alice",
        "updated_at": "2023-12-31T23:59:59+01:00",
        "custom_attributes": {"cost_center": "42"},
        "role_ids": [1, 2],
        "phone": None,
    })

    assert user.id == 10
    assert user.firstname == "Alice"
    assert user.updated_at.utcoffset() == timedelta(hours=1)
    assert user.custom_attributes == {"cost_center": "42"}
    assert user.phone is None


def test_from_dict_accepts_zulu_suffix():
    user = User.from_dict({"locked_until": "2024-05-01T00:00:00Z"})
    assert user.locked_until == datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("data", [
    {"id": "12"},
    {"id": True},
    {"email": 5},
    {"custom_attributes": ["a"]},
    {"created_at": 1700000000},
])
def test_from_dict_rejects_wrong_types(data):
    with pytest.raises(TypeError):
        User.from_dict(data)


def test_from_dict_rejects_malformed_timestamp():
    with pytest.raises(ValueError):
        User.from_dict({"created_at": "yesterday"})


def test_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        User.from_dict([{"id": 1}])


def test_merged_overlays_server_fields_without_mutating():
    local = User(username="alice", title="Intern")

    merged = local.merged({"id": 5, "title": "Engineer"})

    assert merged == User(id=5, username="alice", title="Engineer")
    assert local == User(username="alice", title="Intern")


def test_user_query_to_dict_only_set_criteria():
    assert UserQuery().to_dict() == {}
    assert UserQuery(username="bob", limit=10).to_dict() == {"limit": 10, "username": "bob"}


def test_user_query_supports_fields_criterion():
    assert UserQuery(fields="id,email").to_dict() == {"fields": "id,email"}


def test_merged_null_clears_field_absent_key_keeps_it():
    local = User(id=5, title="Intern", department="Sales", custom_attributes={"team": "red"})

    merged = local.merged({"id": 5, "title": None, "custom_attributes": None})

    assert merged.title is None
    assert merged.custom_attributes is None
    assert merged.department == "Sales"
    assert local.title == "Intern"
