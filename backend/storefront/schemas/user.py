"""User Schemas — Pydantic models for user creation, partial update and responses.

Invariants:
    - email is a syntactically valid address (EmailStr)
    - first_name/last_name: 1-30 chars
    - UserCreate requires a preference; UserPatch may update it alone
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class UserPreferenceIn(BaseModel):
    receive_email: bool


class UserCreate(BaseModel):
    """User creation — profile fields plus notification preference."""
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    address: str
    preference: UserPreferenceIn


class UserPatch(BaseModel):
    """Partial user update — only provided fields are written."""
    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1, max_length=30)
    last_name: str | None = Field(None, min_length=1, max_length=30)
    address: str | None = None
    preference: UserPreferenceIn | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self


class UserPreferenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    receive_email: bool


class UserResponse(BaseModel):
    """User response — profile plus preference."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime
    preference: UserPreferenceResponse | None


class SavedProductToggle(BaseModel):
    """Body of POST /users/{id}/saved-products."""
    product_id: UUID
