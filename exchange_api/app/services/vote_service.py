"""
Business logic for ballots.

A ballot may only reference entries that are open for voting to its
caster: entries someone submitted, excluding the caster's own.
Casting again replaces the previous ballot.
"""

import logging
from typing import List, Optional

from ..core.errors import InputValidationError, InvalidStateError, NotFoundError
from ..core.storage import ExchangeStore
from ..schemas.entry import Stage, Vote
from ..schemas.exchange import Exchange
from ..schemas.vote import BallotCreate
from .exchange_service import ensure_not_frozen, get_or_404, require_secret
from .projection import voting_options


logger = logging.getLogger(__name__)


def _ensure_voting_stage(exchange: Exchange) -> None:
    ensure_not_frozen(exchange)
    if exchange.stage != Stage.VOTING:
        raise InvalidStateError("Not in voting stage")


class VoteService:
    """Service for casting and removing ballots."""

    def __init__(self, store: ExchangeStore) -> None:
        self.store = store

    async def cast_votes(self, exchange_id: int, ballot: BallotCreate) -> List[Vote]:
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            _ensure_voting_stage(exchange)
            if not ballot.votes:
                raise InputValidationError("No votes sent")

            own = exchange.submissions.get(ballot.name, [])
            options = voting_options(exchange, ballot.name)
            for vote in ballot.votes:
                if vote.entry in own:
                    raise InputValidationError("Participants cannot vote for their own entries")
                if vote.entry not in options:
                    raise InputValidationError(
                        f"Unknown entry: {', '.join(vote.entry.stories)}"
                    )

            updated = exchange.model_copy(deep=True)
            updated.votes[ballot.name] = list(ballot.votes)
            self.store.save(updated)
        logger.debug("Exchange %s: %s cast %d vote(s)", exchange_id, ballot.name, len(ballot.votes))
        return list(ballot.votes)

    async def delete_votes(self, exchange_id: int, secret: Optional[str], name: str) -> Exchange:
        """Drop ``name``'s ballot.  Raises ``NotFoundError`` for unknown voters."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            _ensure_voting_stage(exchange)
            if name not in exchange.votes:
                raise NotFoundError("Voter not found")

            updated = exchange.model_copy(deep=True)
            del updated.votes[name]
            self.store.save(updated)
        logger.info("Exchange %s: removed ballot of %s", exchange_id, name)
        return updated
