"""
Pydantic Schemas for Request/Response Validation

Request bodies are explicit records: unknown fields are rejected at the
boundary (422) instead of flowing into the database. Write responses mirror
the MongoDB driver acknowledgement shape in camelCase.

Author: Bistro Boss Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class StrictRequest(BaseModel):
    """Base for request bodies that must not carry unknown fields."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class TokenRequest(BaseModel):
    """
    Sign-in payload sent by the frontend after Firebase login.

    Only the email is signed; other profile fields are accepted and dropped.
    """
    model_config = ConfigDict(extra="ignore")

    email: str = Field(..., min_length=1, examples=["guest@bistro.com"])


class MenuItemCreate(StrictRequest):
    """Request schema for adding a dish."""
    name: str = Field(..., min_length=1, examples=["Grilled Salmon"])
    category: str = Field(..., min_length=1, examples=["salad"])
    price: float = Field(..., examples=[14.5])
    description: Optional[str] = Field(None, examples=["Lettuce, salmon, lemon dressing"])
    image: Optional[str] = Field(None, examples=["https://i.ibb.co/salmon.jpg"])


class MenuItemUpdate(StrictRequest):
    """Request schema for replacing a dish; omitted fields are left alone."""
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @model_validator(mode="after")
    def require_some_field(self) -> "MenuItemUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be supplied")
        return self


class UserCreate(StrictRequest):
    """Request schema for registering a user on first sign-in."""
    email: str = Field(..., min_length=1, examples=["guest@bistro.com"])
    name: Optional[str] = Field(None, examples=["Guest"])


class CartEntryCreate(StrictRequest):
    """Request schema for adding a dish to a cart."""
    email: str = Field(..., min_length=1, examples=["guest@bistro.com"])
    menu_id: str = Field(..., alias="menuId", min_length=1)
    name: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class DriverResult(BaseModel):
    """Base for write acknowledgements, serialized in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    acknowledged: bool


class InsertResponse(DriverResult):
    """Acknowledgement of a single insert."""
    inserted_id: Optional[str] = None


class UserInsertResponse(InsertResponse):
    """Insert acknowledgement, or a notice that the user already exists."""
    acknowledged: bool = False
    message: Optional[str] = None


class UpdateResponse(DriverResult):
    """Acknowledgement of a single update/upsert."""
    matched_count: int
    modified_count: int
    upserted_count: int
    upserted_id: Optional[str] = None


class DeleteResponse(DriverResult):
    """Acknowledgement of a single delete."""
    deleted_count: int


class SuccessResponse(BaseModel):
    """Plain success flag for cookie operations."""
    success: bool = True


class AdminCheckResponse(BaseModel):
    """Whether the signed-in user has the admin role."""
    admin: bool


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class MessageResponse(BaseModel):
    """Error body written by the auth gates."""
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime
