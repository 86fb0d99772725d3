"""
Business logic for exchanges.

``ExchangeService`` implements the administrative commands (creation,
stage changes, result tuning, deletion) and the read commands.  Every
command runs inside one store transaction: the exchange is looked up,
the secret and stage are checked, the new value is computed on a copy
and saved, and only then is it visible to other requests.

The module level helpers are shared with ``SubmissionService`` and
``VoteService`` so all commands report errors in the same order:
unknown exchange, wrong secret, frozen exchange, wrong stage, invalid
input.
"""

import logging
from typing import Optional

from ..core.errors import InvalidStateError, LockedError, NotFoundError, UnauthorizedError
from ..core.security import generate_secret, verify_secret
from ..core.storage import ExchangeStore
from ..schemas.entry import Stage
from ..schemas.exchange import Exchange, ExchangeCreate, ExchangeView, ResultSettings
from .projection import project
from .stage_machine import transition
from .tally import compute_results


logger = logging.getLogger(__name__)


def get_or_404(store: ExchangeStore, exchange_id: int) -> Exchange:
    exchange = store.get(exchange_id)
    if exchange is None:
        raise NotFoundError("Exchange not found")
    return exchange


def require_secret(exchange: Exchange, secret: Optional[str]) -> None:
    if not verify_secret(exchange.secret, secret):
        raise UnauthorizedError("Invalid secret")


def ensure_not_frozen(exchange: Exchange) -> None:
    if exchange.stage == Stage.FROZEN:
        raise LockedError("This exchange is frozen and cannot be modified")


class ExchangeService:
    """Service for creating, inspecting and steering exchanges."""

    def __init__(
        self,
        store: ExchangeStore,
        default_user_max: int = 2,
        default_assignment_factor: float = 0.5,
    ) -> None:
        self.store = store
        self.default_user_max = default_user_max
        self.default_assignment_factor = default_assignment_factor

    async def create_exchange(self, data: ExchangeCreate) -> Exchange:
        """Create a new exchange in the submission stage and return it with its secret."""
        user_max = data.user_max if data.user_max is not None else self.default_user_max
        factor = (
            data.assignment_factor
            if data.assignment_factor is not None
            else self.default_assignment_factor
        )
        with self.store.transaction():
            exchange = Exchange(
                title=data.title,
                id=self.store.next_id(),
                secret=generate_secret(),
                stage=Stage.SUBMISSION,
                user_max=user_max,
                assignment_factor=factor,
            )
            self.store.save(exchange)
        logger.info("Created exchange %s '%s'", exchange.id, exchange.title)
        return exchange

    async def get_admin(self, exchange_id: int, secret: Optional[str]) -> Exchange:
        """Return the full record, secret and votes included."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            return exchange.model_copy(deep=True)

    async def get_view(self, exchange_id: int, name: Optional[str] = None) -> ExchangeView:
        """Return what participant ``name`` (or an anonymous reader) may see."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            return project(exchange, name)

    async def delete_exchange(self, exchange_id: int, secret: Optional[str]) -> None:
        """Delete an exchange and its file.  Allowed in every stage, frozen included."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            self.store.remove(exchange_id)
        logger.info("Deleted exchange %s", exchange_id)

    async def change_stage(self, exchange_id: int, secret: Optional[str], stage: Stage) -> Exchange:
        """Apply a stage transition (see ``stage_machine.TRANSITIONS``)."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            previous = exchange.stage
            updated = transition(exchange, stage)
            self.store.save(updated)
        logger.info(
            "Exchange %s moved from %s to %s", exchange_id, previous.value, updated.stage.value
        )
        return updated

    async def update_results(
        self, exchange_id: int, secret: Optional[str], result_settings: ResultSettings
    ) -> Exchange:
        """Store new assignment settings and recompute results.

        Only possible during selection; once frozen the results are final.
        """
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            ensure_not_frozen(exchange)
            if exchange.stage != Stage.SELECTION:
                raise InvalidStateError("Stage is not in selection")

            updated = exchange.model_copy(deep=True)
            if result_settings.user_max is not None:
                updated.user_max = result_settings.user_max
            if result_settings.assignment_factor is not None:
                updated.assignment_factor = result_settings.assignment_factor
            updated.results = compute_results(
                updated.votes,
                updated.submissions,
                user_max=updated.user_max,
                assignment_factor=updated.assignment_factor,
            )
            self.store.save(updated)
        logger.info(
            "Recomputed results for exchange %s (user_max=%s, assignment_factor=%s)",
            exchange_id,
            updated.user_max,
            updated.assignment_factor,
        )
        return updated

    async def count(self) -> int:
        with self.store.transaction():
            return len(self.store)
