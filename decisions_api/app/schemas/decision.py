"""
Pydantic models for decisions and votes.

A decision is a text voted on by an assembly.  ``DecisionBase`` holds
the shared fields, ``DecisionCreate`` is used for requests and
``DecisionRead`` adds the identifier for responses.  The aggregated
tally of a vote is nested under ``results_overview``; individual
ballots are exposed separately as ``IndividualVoteRead``.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class VoteValue(str, Enum):
    IN_FAVOR = "IN_FAVOR"
    AGAINST = "AGAINST"
    ABSTENTION = "ABSTENTION"
    ABSENT = "ABSENT"


class VoteResultsOverview(BaseModel):
    in_favor: int = Field(..., ge=0, examples=[250])
    against: int = Field(..., ge=0, examples=[175])
    abstention: int = Field(..., ge=0, examples=[25])
    absent: int = Field(..., ge=0, examples=[10])
    total_voters: int = Field(..., ge=0, examples=[460])
    is_passed: bool = Field(..., examples=[True])


class DecisionBase(BaseModel):
    title: str = Field(..., examples=["Climate Change Initiative"])
    summary: str = Field(..., examples=["A proposal to reduce carbon emissions by 30%"])
    full_text: Optional[str] = None
    date: datetime.date
    source: str = Field(..., examples=["https://example.com/climate-initiative"])
    assembly_id: str
    results_overview: VoteResultsOverview


class DecisionCreate(DecisionBase):
    """Schema for creating a decision."""
    pass


class DecisionRead(DecisionBase):
    """Schema for reading a decision from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class VoteResultsUpdate(BaseModel):
    in_favor: int | None = Field(default=None, ge=0)
    against: int | None = Field(default=None, ge=0)
    abstention: int | None = Field(default=None, ge=0)
    absent: int | None = Field(default=None, ge=0)
    total_voters: int | None = Field(default=None, ge=0)
    is_passed: bool | None = None


class DecisionUpdate(BaseModel):
    """Schema for updating a decision.

    All fields are optional; only provided fields will be updated.
    """
    title: str | None = None
    summary: str | None = None
    full_text: str | None = None
    date: Optional[datetime.date] = None
    source: str | None = None
    assembly_id: str | None = None
    results_overview: VoteResultsUpdate | None = None


class DecisionFilters(BaseModel):
    """Optional criteria for listing decisions.

    ``search_term`` matches title, summary or full text without regard
    to case.  ``party_id`` is accepted for API compatibility but not
    applied yet.
    """
    assembly_id: str | None = None
    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    party_id: str | None = None
    search_term: str | None = None


class IndividualVoteRead(BaseModel):
    """A single elected official's ballot on a decision."""

    id: str
    decision_id: str
    elected_official_id: str
    vote_value: VoteValue
