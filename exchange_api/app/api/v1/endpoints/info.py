"""
Information endpoint for API v1.

Returns the service name and version together with the number of
exchanges currently loaded.  Publicly accessible.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from exchange_api.app.api.deps import get_exchange_service
from exchange_api.app.services.exchange_service import ExchangeService

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def get_info(
    request: Request,
    service: ExchangeService = Depends(get_exchange_service),
) -> Dict[str, Any]:
    app_settings = request.app.state.settings
    return {
        "service": app_settings.project_name,
        "version": app_settings.api_version,
        "exchanges": await service.count(),
    }
