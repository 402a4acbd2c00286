"""Pydantic schemas for User Profile API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.user_profile import EmergencyContact, NotificationPreferences


class EmergencyContactSchema(BaseModel):
    """Emergency contact details."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field("", max_length=255)
    phone: str = Field("", max_length=50)
    relationship: str = Field("", max_length=100)


class NotificationPreferencesSchema(BaseModel):
    """Reminder channel opt-ins."""

    model_config = ConfigDict(from_attributes=True)

    notifications: bool = True
    email_reminders: bool = True
    sms_reminders: bool = False


class UserProfileResponse(BaseModel):
    """Schema for the owner's profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    emergency_contact: EmergencyContactSchema
    avatar: Optional[str] = None
    preferences: NotificationPreferencesSchema


class UserProfileDetailResponse(BaseModel):
    """Schema for single user profile."""

    data: UserProfileResponse


class UserProfileUpdate(BaseModel):
    """Schema for updating the owner's profile (all fields optional)."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    emergency_contact: Optional[EmergencyContactSchema] = None
    avatar: Optional[str] = None
    preferences: Optional[NotificationPreferencesSchema] = None

    def to_updates(self) -> dict[str, Any]:
        """Fields that were sent, with nested objects as domain values."""
        updates: dict[str, Any] = {}
        for field_name in self.model_fields_set:
            value = getattr(self, field_name)
            if field_name == "emergency_contact":
                if value is None:
                    continue
                value = EmergencyContact(**value.model_dump())
            elif field_name == "preferences":
                if value is None:
                    continue
                value = NotificationPreferences(**value.model_dump())
            elif value is None and field_name != "avatar":
                continue
            updates[field_name] = value
        return updates
