"""
Exchange endpoints for API v1.

Creating an exchange and reading its public view need no credentials.
Every other route here is administrative and expects the exchange
secret as a bearer token.  Domain errors raised by the service are
rendered by the application's ``ExchangeError`` handler.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from exchange_api.app.api.deps import get_exchange_service
from exchange_api.app.core.security import get_secret
from exchange_api.app.schemas.exchange import (
    Exchange,
    ExchangeCreate,
    ExchangeView,
    ResultSettings,
    StageChange,
)
from exchange_api.app.services.exchange_service import ExchangeService


router = APIRouter()


@router.post("/", response_model=Exchange, status_code=status.HTTP_201_CREATED)
async def create_exchange(
    data: ExchangeCreate,
    service: ExchangeService = Depends(get_exchange_service),
) -> Exchange:
    """Create a new exchange.

    The response is the only time the secret is handed out; the
    creator must keep it to administer the exchange.
    """
    return await service.create_exchange(data)


@router.get("/{exchange_id}", response_model=ExchangeView)
async def get_exchange(
    exchange_id: int,
    name: Optional[str] = Query(None, description="Participant asking; hides their own entries while voting"),
    service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeView:
    """Return the stage‑dependent public view of an exchange."""
    return await service.get_view(exchange_id, name)


@router.get("/{exchange_id}/admin", response_model=Exchange)
async def get_exchange_admin(
    exchange_id: int,
    secret: Optional[str] = Depends(get_secret),
    service: ExchangeService = Depends(get_exchange_service),
) -> Exchange:
    """Return the full exchange record, including submissions, votes and results."""
    return await service.get_admin(exchange_id, secret)


@router.delete("/{exchange_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exchange(
    exchange_id: int,
    secret: Optional[str] = Depends(get_secret),
    service: ExchangeService = Depends(get_exchange_service),
) -> None:
    await service.delete_exchange(exchange_id, secret)
    return None


@router.patch("/{exchange_id}/stage", response_model=Dict[str, Any])
async def change_stage(
    exchange_id: int,
    change: StageChange,
    secret: Optional[str] = Depends(get_secret),
    service: ExchangeService = Depends(get_exchange_service),
) -> Dict[str, Any]:
    """Move the exchange to another stage.

    Moving from voting to selection computes the results; moving back
    clears votes or results respectively.  Frozen exchanges reject
    every request with 423.
    """
    exchange = await service.change_stage(exchange_id, secret, change.stage)
    return {"detail": "Stage updated", "stage": exchange.stage.value}


@router.patch("/{exchange_id}/results", response_model=Exchange)
async def update_results(
    exchange_id: int,
    result_settings: ResultSettings,
    secret: Optional[str] = Depends(get_secret),
    service: ExchangeService = Depends(get_exchange_service),
) -> Exchange:
    """Retune ``user_max``/``assignment_factor`` and recompute results (selection stage only)."""
    return await service.update_results(exchange_id, secret, result_settings)
