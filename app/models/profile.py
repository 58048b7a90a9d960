"""Profile domain model"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_BIO = "Hey there! I'm using Amora 👋"
DEFAULT_LOCATION = "Unknown"

# Window used for the "online" badge in the discover grid
ONLINE_WINDOW_MS = 5 * 60 * 1000


class Profile(BaseModel):
    """
    One person's profile, stored as a single row in the users table.

    Attribute names are snake_case; the stored keys (aliases) keep the
    camelCase names the mobile client reads and writes.
    """
    id: str = Field("", alias="userId")
    email: str = ""
    full_name: str = Field("", alias="fullName")

    bio: str = ""
    age: int = 0
    gender: str = ""

    latitude: float = 0.0
    longitude: float = 0.0
    location: str = ""

    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")
    photo_urls: List[str] = Field(default_factory=list, alias="photoUrls")
    voice_note_url: Optional[str] = Field(None, alias="voiceNoteUrl")
    voice_note_duration: int = Field(0, alias="voiceNoteDuration")

    interests: List[str] = Field(default_factory=list)

    # UI-only values, supplied from outside; nothing here computes them
    match_percentage: int = Field(0, alias="matchPercentage")
    distance_km: float = Field(0.0, alias="distanceKm")

    is_verified: bool = Field(False, alias="isVerified")
    created_at: int = Field(0, alias="createdAt")
    last_active: int = Field(0, alias="lastActive")

    class Config:
        populate_by_name = True

    @field_validator("id", "email", "full_name", "bio", "gender", "location", mode="before")
    @classmethod
    def _none_to_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("age", "voice_note_duration", "match_percentage", "created_at", "last_active", mode="before")
    @classmethod
    def _none_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("latitude", "longitude", "distance_km", mode="before")
    @classmethod
    def _none_to_zero_float(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("is_verified", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("photo_urls", mode="before")
    @classmethod
    def _photos_never_null(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("interests", mode="before")
    @classmethod
    def _interests_as_set(cls, value: Any) -> Any:
        if value is None:
            return []
        # set semantics, first occurrence wins the position
        return list(dict.fromkeys(value))

    @classmethod
    def for_signup(cls, user_id: str, full_name: str, email: str, now: int) -> "Profile":
        """Profile created right after account creation, with signup defaults"""
        return cls(
            id=user_id,
            full_name=full_name,
            email=email,
            bio=DEFAULT_BIO,
            age=0,
            latitude=0.0,
            longitude=0.0,
            location=DEFAULT_LOCATION,
            created_at=now,
            last_active=now,
        )

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "Profile":
        """Build a profile from a stored row"""
        return cls.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        """Flat key-value mapping written to the store"""
        return self.model_dump(by_alias=True)

    @property
    def first_name(self) -> str:
        parts = self.full_name.split()
        return parts[0] if parts else self.full_name

    @property
    def formatted_distance(self) -> str:
        return f"{self.distance_km:.1f} km away"

    @property
    def name_age(self) -> str:
        return f"{self.full_name}, {self.age}"

    @property
    def has_multiple_photos(self) -> bool:
        return len(self.photo_urls) > 1

    @property
    def primary_photo(self) -> Optional[str]:
        if self.profile_image_url:
            return self.profile_image_url
        return self.photo_urls[0] if self.photo_urls else None

    def is_recently_active(self, now: int) -> bool:
        return self.last_active > 0 and now - self.last_active <= ONLINE_WINDOW_MS
