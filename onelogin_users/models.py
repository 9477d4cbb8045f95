"""Typed representations of the OneLogin users resource.

Both models map one-to-one onto the JSON bodies of the users v2 API:
absent values are ``None`` and are left out of the serialized payload.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional


_TIMESTAMP_FIELDS = frozenset({
    "created_at",
    "updated_at",
    "activated_at",
    "last_login",
    "password_changed_at",
    "locked_until",
    "invitation_sent_at",
})

_INTEGER_FIELDS = frozenset({
    "id",
    "state",
    "status",
    "invalid_login_attempts",
    "group_id",
    "directory_id",
    "trusted_idp_id",
    "manager_ad_id",
    "manager_user_id",
    "external_id",
})


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat() only learned the "Z" suffix in 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _decode_value(name: str, value: Any) -> Any:
    """Convert a raw JSON value into the Python type of the named field.

    Raises:
        TypeError: If the JSON type does not match the field
        ValueError: If a timestamp is malformed
    """
    if name in _TIMESTAMP_FIELDS:
        if not isinstance(value, str):
            raise TypeError(f"{name}: expected ISO-8601 string, got {type(value).__name__}")
        return _parse_timestamp(value)
    if name in _INTEGER_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name}: expected integer, got {type(value).__name__}")
        return value
    if name == "custom_attributes":
        if not isinstance(value, dict):
            raise TypeError(f"{name}: expected object, got {type(value).__name__}")
        return dict(value)
    if not isinstance(value, str):
        raise TypeError(f"{name}: expected string, got {type(value).__name__}")
    return value


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return dict(value)
    return value


@dataclass
class User:
    """A OneLogin user account.

    ``id`` stays ``None`` until the API has created the user.
    """
    id: Optional[int] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    distinguished_name: Optional[str] = None
    samaccountname: Optional[str] = None
    userprincipalname: Optional[str] = None
    member_of: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    password_confirmation: Optional[str] = None
    password_algorithm: Optional[str] = None
    salt: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    activated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None
    locked_until: Optional[datetime] = None
    invitation_sent_at: Optional[datetime] = None
    state: Optional[int] = None
    status: Optional[int] = None
    invalid_login_attempts: Optional[int] = None
    group_id: Optional[int] = None
    directory_id: Optional[int] = None
    trusted_idp_id: Optional[int] = None
    manager_ad_id: Optional[int] = None
    manager_user_id: Optional[int] = None
    external_id: Optional[int] = None
    custom_attributes: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Build a user from a decoded JSON object, ignoring unknown keys.

        Raises:
            TypeError: If data is not an object or a field has the wrong type
            ValueError: If a timestamp is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected user object, got {type(data).__name__}")
        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is not None:
                values[f.name] = _decode_value(f.name, raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON payload for this user, without absent fields."""
        return {
            f.name: _encode_value(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def merged(self, data: Dict[str, Any]) -> "User":
        """Return a copy of this user overlaid with the fields present in data.

        An explicit null clears the field; fields the server did not send
        keep their current value. The receiver is left untouched.
        """
        server = User.from_dict(data)
        overrides = {
            f.name: getattr(server, f.name)
            for f in fields(server)
            if f.name in data
        }
        if "custom_attributes" not in overrides and self.custom_attributes is not None:
            overrides["custom_attributes"] = dict(self.custom_attributes)
        return replace(self, **overrides)


@dataclass
class UserQuery:
    """Search criteria for listing users. An empty query matches every user."""
    limit: Optional[int] = None
    since: Optional[str] = None
    until: Optional[str] = None
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    samaccountname: Optional[str] = None
    username: Optional[str] = None
    directory_id: Optional[str] = None
    external_id: Optional[str] = None
    app_id: Optional[str] = None
    user_ids: Optional[str] = None
    fields: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the criteria that are set, keyed by their API parameter name."""
        return {
            name: value
            for name, value in vars(self).items()
            if value is not None
        }
