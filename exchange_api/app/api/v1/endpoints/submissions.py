"""
Submission endpoints for API v1.

Participants add entries by name; removing entries needs the secret.
Both routes only work while the exchange is in the submission stage.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from exchange_api.app.api.deps import get_submission_service
from exchange_api.app.core.security import get_secret
from exchange_api.app.schemas.submission import SubmissionCreate, SubmissionDeletion, SubmissionRead
from exchange_api.app.services.submission_service import SubmissionService


router = APIRouter()


@router.post("/{exchange_id}/submissions", response_model=SubmissionRead)
async def add_submission(
    exchange_id: int,
    submission: SubmissionCreate,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionRead:
    """Add entries for a participant, ignoring ones they already submitted."""
    entries = await service.add_submission(exchange_id, submission)
    return SubmissionRead(name=submission.name, entries=entries)


@router.delete("/{exchange_id}/submissions", response_model=Dict[str, Any])
async def delete_submission(
    exchange_id: int,
    deletion: SubmissionDeletion,
    secret: Optional[str] = Depends(get_secret),
    service: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    """Remove entries from all participants.

    Participants left without entries disappear from the exchange.
    Entries that match nothing are ignored.
    """
    exchange = await service.delete_submission(exchange_id, secret, deletion)
    return {"detail": "Submissions deleted", "participants": len(exchange.submissions)}
