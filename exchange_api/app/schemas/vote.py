"""Pydantic models for ballots."""

from typing import List

from pydantic import BaseModel, Field

from .entry import Vote


class BallotCreate(BaseModel):
    """Schema for casting a ballot.

    A new ballot from the same participant replaces the previous one
    wholesale.
    """

    name: str = Field(..., min_length=1, examples=["bob"])
    votes: List[Vote]
