"""
Pydantic models for story submissions.

Stories are sent as nested arrays, one inner array per entry, e.g.
``{"name": "alice", "stories": [["A", "B"], ["C"]]}``.
"""

from typing import List

from pydantic import BaseModel, Field

from .entry import Entry


class SubmissionCreate(BaseModel):
    """Schema for adding a participant's entries."""

    name: str = Field(..., min_length=1, examples=["alice"])
    stories: List[List[str]] = Field(..., examples=[[["The Hobbit", "Dune"]]])

    @property
    def entries(self) -> List[Entry]:
        return [Entry(stories=stories) for stories in self.stories]


class SubmissionDeletion(BaseModel):
    """Schema for removing entries from every participant."""

    stories: List[List[str]] = Field(..., examples=[[["The Hobbit", "Dune"]]])

    @property
    def entries(self) -> List[Entry]:
        return [Entry(stories=stories) for stories in self.stories]


class SubmissionRead(BaseModel):
    """A participant's entries after a submission was merged."""

    name: str
    entries: List[Entry]
