"""
Pydantic schemas for elected officials.

An elected official belongs to an assembly and, usually, to a
political party.  Contact details are nested under ``contact_info``
and are stored as JSON text alongside the official's row.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class SocialMedia(BaseModel):
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class ContactInfo(BaseModel):
    email: str = Field(..., examples=["jane.doe@example.com"])
    phone: Optional[str] = None
    website: Optional[str] = None
    social_media: Optional[SocialMedia] = None


class ElectedOfficialBase(BaseModel):
    first_name: str = Field(..., examples=["Jane"])
    last_name: str = Field(..., examples=["Doe"])
    party: str = Field(..., examples=["Green Party"])
    party_id: Optional[str] = None
    position: str = Field(..., examples=["Deputy"])
    region: str = Field(..., examples=["Île-de-France"])
    constituency: Optional[str] = None
    mandate_start: Optional[date] = None
    mandate_end: Optional[date] = None
    assembly_id: Optional[str] = None
    bio: Optional[str] = None
    image_url: Optional[str] = None
    contact_info: Optional[ContactInfo] = None


class ElectedOfficialCreate(ElectedOfficialBase):
    """Schema for creating an elected official."""
    pass


class ElectedOfficialRead(ElectedOfficialBase):
    """Schema for reading an elected official."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class ElectedOfficialUpdate(BaseModel):
    """Schema for updating an elected official.

    All fields are optional; only provided values will be updated.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    party: Optional[str] = None
    party_id: Optional[str] = None
    position: Optional[str] = None
    region: Optional[str] = None
    constituency: Optional[str] = None
    mandate_start: Optional[date] = None
    mandate_end: Optional[date] = None
    assembly_id: Optional[str] = None
    bio: Optional[str] = None
    image_url: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
