"""
Pydantic models for exchange data.

``Exchange`` is the full record: it is what gets persisted to disk and
what administrators (holders of the secret) receive.  ``ExchangeView``
is the public, stage‑dependent projection built by
``services.projection``; it never carries the secret or raw votes.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .entry import Entry, Stage, Vote


class Exchange(BaseModel):
    """Schema for a stored exchange, including its secret."""

    title: str
    id: int
    secret: str
    stage: Stage = Stage.SUBMISSION
    user_max: int = Field(2, ge=1)
    assignment_factor: float = Field(0.5, ge=0.0, le=1.0)
    submissions: Dict[str, List[Entry]] = Field(default_factory=dict)
    votes: Dict[str, List[Vote]] = Field(default_factory=dict)
    results: Dict[str, List[Entry]] = Field(default_factory=dict)


class ExchangeCreate(BaseModel):
    """Schema for creating an exchange.

    ``user_max`` and ``assignment_factor`` fall back to the configured
    defaults when omitted.
    """

    title: str = Field(..., min_length=1, examples=["Summer Book Swap"])
    user_max: Optional[int] = Field(None, ge=1, examples=[2])
    assignment_factor: Optional[float] = Field(None, ge=0.0, le=1.0, examples=[0.5])


class StageChange(BaseModel):
    stage: Stage = Field(..., examples=["Voting"])


class ResultSettings(BaseModel):
    """Schema for retuning the assignment before the exchange is frozen.

    Only provided fields are changed; results are recomputed either way.
    """

    user_max: Optional[int] = Field(None, ge=1)
    assignment_factor: Optional[float] = Field(None, ge=0.0, le=1.0)


class ExchangeView(BaseModel):
    """Public view of an exchange.

    ``submissions`` is only filled during voting and ``results`` only
    once the exchange is frozen.
    """

    title: str
    id: int
    stage: Stage
    submissions: Optional[List[Entry]] = None
    results: Optional[Dict[str, List[Entry]]] = None
