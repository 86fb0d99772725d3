"""
Value types shared by exchanges and request payloads.

An ``Entry`` is one candidate set of stories offered by a participant.
Entries compare structurally: two entries are equal when their stories
are equal element‑wise and in the same order.  Both ``Entry`` and
``Vote`` are frozen, so they are hashable and can be used as keys when
tallying ballots.
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, Field


class Stage(str, Enum):
    """Lifecycle stage of an exchange."""

    SUBMISSION = "Submission"
    VOTING = "Voting"
    SELECTION = "Selection"
    FROZEN = "Frozen"


class Entry(BaseModel):
    # A tuple keeps the order significant and the model hashable; JSON
    # input and output are plain arrays.
    stories: Tuple[str, ...] = Field(..., examples=[["The Hobbit", "Dune"]])

    model_config = {
        "frozen": True,
    }


class Vote(BaseModel):
    """A single ranked vote for an entry.

    Lower ``priority`` values are preferred: ``1`` is a voter's first
    choice.
    """

    priority: int = Field(..., examples=[1])
    entry: Entry

    model_config = {
        "frozen": True,
    }
