"""
Shared FastAPI dependencies.

The exchange store is created by ``create_app`` and kept on
``app.state``; these helpers hand it (wrapped in the relevant service)
to endpoint functions, so no module reaches for a global store.
"""

from fastapi import Request

from ..core.storage import ExchangeStore
from ..services.exchange_service import ExchangeService
from ..services.submission_service import SubmissionService
from ..services.vote_service import VoteService


def get_store(request: Request) -> ExchangeStore:
    return request.app.state.store


def get_exchange_service(request: Request) -> ExchangeService:
    app_settings = request.app.state.settings
    return ExchangeService(
        get_store(request),
        default_user_max=app_settings.default_user_max,
        default_assignment_factor=app_settings.default_assignment_factor,
    )


def get_submission_service(request: Request) -> SubmissionService:
    return SubmissionService(get_store(request))


def get_vote_service(request: Request) -> VoteService:
    return VoteService(get_store(request))
