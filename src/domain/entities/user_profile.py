"""User profile domain entity."""

from dataclasses import dataclass, field
from typing import Optional

USER_PROFILE_ID = "user-profile"


@dataclass
class EmergencyContact:
    """Who to call when the owner cannot be reached."""

    name: str = ""
    phone: str = ""
    relationship: str = ""


@dataclass
class NotificationPreferences:
    """Reminder channels the owner has opted into."""

    notifications: bool = True
    email_reminders: bool = True
    sms_reminders: bool = False


@dataclass
class UserProfile:
    """Domain entity for the pet owner's own profile (a singleton)."""

    id: str = USER_PROFILE_ID
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    emergency_contact: EmergencyContact = field(default_factory=EmergencyContact)
    avatar: Optional[str] = None
    preferences: NotificationPreferences = field(default_factory=NotificationPreferences)
