"""
Business logic for submissions.

Participants add entries without a secret; removing entries is an
administrative action and needs the exchange secret.  Both are only
possible while the exchange is in the submission stage.
"""

import logging
from typing import List, Optional

from ..core.errors import InputValidationError, InvalidStateError
from ..core.storage import ExchangeStore
from ..schemas.entry import Entry, Stage
from ..schemas.exchange import Exchange
from ..schemas.submission import SubmissionCreate, SubmissionDeletion
from .exchange_service import ensure_not_frozen, get_or_404, require_secret
from .reconciliation import delete_entries, reconcile_submissions


logger = logging.getLogger(__name__)


def _ensure_submission_stage(exchange: Exchange) -> None:
    ensure_not_frozen(exchange)
    if exchange.stage != Stage.SUBMISSION:
        raise InvalidStateError("Submission stage is over")


class SubmissionService:
    """Service for adding and removing entries."""

    def __init__(self, store: ExchangeStore) -> None:
        self.store = store

    async def add_submission(self, exchange_id: int, submission: SubmissionCreate) -> List[Entry]:
        """Merge ``submission`` into the participant's entries.

        Entries the participant already submitted in an earlier call are
        ignored.  Returns the participant's entries after the merge.
        """
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            _ensure_submission_stage(exchange)
            if not submission.stories:
                raise InputValidationError("No submission sent")
            if any(not stories for stories in submission.stories):
                raise InputValidationError("Entries must contain at least one story")

            updated = exchange.model_copy(deep=True)
            existing = updated.submissions.get(submission.name, [])
            updated.submissions[submission.name] = reconcile_submissions(
                existing, submission.entries
            )
            self.store.save(updated)
        logger.debug(
            "Exchange %s: %s now has %d entr(ies)",
            exchange_id,
            submission.name,
            len(updated.submissions[submission.name]),
        )
        return list(updated.submissions[submission.name])

    async def delete_submission(
        self, exchange_id: int, secret: Optional[str], deletion: SubmissionDeletion
    ) -> Exchange:
        """Remove the given entries from every participant."""
        with self.store.transaction():
            exchange = get_or_404(self.store, exchange_id)
            require_secret(exchange, secret)
            _ensure_submission_stage(exchange)
            if not deletion.stories:
                raise InputValidationError("No submission sent")
            if not exchange.submissions:
                raise InputValidationError("No submission to delete")

            updated = exchange.model_copy(deep=True)
            updated.submissions = delete_entries(exchange.submissions, deletion.entries)
            self.store.save(updated)
        logger.info("Exchange %s: deleted %d entr(ies)", exchange_id, len(deletion.stories))
        return updated
