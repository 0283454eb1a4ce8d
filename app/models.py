"""
Document Models

Pydantic models for the documents stored in MongoDB. Identifiers are
exposed as the ``_id`` string field the frontend reads. Stored documents
may carry fields beyond the ones declared here (imported seed data has
``recipe``, for instance); they are passed through untouched.

Author: Bistro Boss Team
Version: 1.0.0
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """User roles."""
    CUSTOMER = "customer"
    ADMIN = "admin"


class Document(BaseModel):
    """Base for stored documents: ``_id`` plus any extra stored fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")


class MenuItem(Document):
    """A dish on the menu."""
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image: Optional[str] = None


class Testimonial(Document):
    """A customer review shown on the home page."""
    name: Optional[str] = None
    details: Optional[str] = None
    rating: Optional[float] = None


class User(Document):
    """A signed-in user. Email is the lookup key."""
    email: str
    name: Optional[str] = None
    role: Union[Role, str] = Role.CUSTOMER


class CartEntry(Document):
    """
    A cart row. ``name``, ``image`` and ``price`` are copied from the menu
    item when the row is added.
    """
    email: str
    menu_id: str = Field(..., alias="menuId")
    name: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None


class CartItem(MenuItem):
    """
    A cart row merged over its menu item for display.

    Cart fields override menu fields, so ``_id`` is the cart row's id.
    """
    email: str
    menu_id: str = Field(..., alias="menuId")
