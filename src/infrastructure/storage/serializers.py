"""JSON encoding for the profile storage slots.

Slots use camelCase keys (``clinicName``, ``isClinic``, ``createdAt``) so
collections written by the earlier browser client load unchanged.
"""

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import orjson
import structlog

from core.exceptions import StorageCorruptedError
from domain.entities.user_profile import (
    EmergencyContact,
    NotificationPreferences,
    UserProfile,
)
from domain.entities.vet_profile import Profile, ProfileDraft

logger = structlog.get_logger()


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_PROFILE_TEXT_FIELDS = [f.name for f in fields(ProfileDraft) if f.name != "is_clinic"]


# --- Vet profiles ---


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": profile.id,
        "isClinic": profile.is_clinic,
        "createdAt": _format_timestamp(profile.created_at),
    }
    for name in _PROFILE_TEXT_FIELDS:
        data[to_camel(name)] = getattr(profile, name)
    return data


def profile_from_dict(data: dict[str, Any]) -> Profile:
    """Build a profile from a stored record, tolerating legacy shapes.

    Ids may be numbers (millisecond timestamps), ``isClinic`` may be absent
    and ``createdAt`` may carry a trailing ``Z``. Unknown keys are ignored.
    """
    values = {name: _text(data.get(to_camel(name))) for name in _PROFILE_TEXT_FIELDS}
    raw_id = data.get("id")
    return Profile(
        id=str(raw_id) if raw_id not in (None, "") else str(uuid4()),
        created_at=_parse_timestamp(data.get("createdAt")),
        is_clinic=bool(data.get("isClinic")),
        **values,
    )


def encode_profiles(profiles: list[Profile]) -> str:
    return orjson.dumps([profile_to_dict(p) for p in profiles]).decode()


def decode_profiles(raw: str) -> list[Profile]:
    try:
        records = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise StorageCorruptedError("vet profile collection", str(e)) from e
    if not isinstance(records, list):
        raise StorageCorruptedError("vet profile collection", "expected a JSON array")

    profiles = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("stored_profile_skipped", position=position)
            continue
        profiles.append(profile_from_dict(record))
    return profiles


# --- User profile ---


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "name": profile.name,
        "email": profile.email,
        "phone": profile.phone,
        "address": profile.address,
        "city": profile.city,
        "state": profile.state,
        "zipCode": profile.zip_code,
        "emergencyContact": {
            "name": profile.emergency_contact.name,
            "phone": profile.emergency_contact.phone,
            "relationship": profile.emergency_contact.relationship,
        },
        "avatar": profile.avatar,
        "preferences": {
            "notifications": profile.preferences.notifications,
            "emailReminders": profile.preferences.email_reminders,
            "smsReminders": profile.preferences.sms_reminders,
        },
    }


def user_profile_from_dict(data: dict[str, Any]) -> UserProfile:
    blank = UserProfile()
    contact = data.get("emergencyContact") or {}
    prefs = data.get("preferences") or {}
    return UserProfile(
        id=str(data.get("id") or blank.id),
        name=data.get("name") or "",
        email=data.get("email") or "",
        phone=data.get("phone") or "",
        address=data.get("address") or "",
        city=data.get("city") or "",
        state=data.get("state") or "",
        zip_code=data.get("zipCode") or "",
        emergency_contact=EmergencyContact(
            name=contact.get("name") or "",
            phone=contact.get("phone") or "",
            relationship=contact.get("relationship") or "",
        ),
        avatar=data.get("avatar"),
        preferences=NotificationPreferences(
            notifications=prefs.get("notifications", blank.preferences.notifications),
            email_reminders=prefs.get("emailReminders", blank.preferences.email_reminders),
            sms_reminders=prefs.get("smsReminders", blank.preferences.sms_reminders),
        ),
    )


def encode_user_profile(profile: UserProfile) -> str:
    return orjson.dumps(user_profile_to_dict(profile)).decode()


def decode_user_profile(raw: str) -> UserProfile:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise StorageCorruptedError("user profile", str(e)) from e
    if not isinstance(data, dict):
        raise StorageCorruptedError("user profile", "expected a JSON object")
    return user_profile_from_dict(data)


# --- Helpers ---


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            logger.warning("stored_timestamp_unparseable", value=value)
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("stored_timestamp_out_of_range", value=value)
    return datetime.now(timezone.utc)
