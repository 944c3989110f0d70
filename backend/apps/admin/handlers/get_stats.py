"""POST /admin/getAdminStats - Counts for the admin dashboard."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.admin.schemas import AdminStatsResponse
from dependencies import get_caller, get_stats_service
from errors import AdminError
from responses import error_response
from services.authorization import CallerIdentity
from services.stats import StatsService

logger = logging.getLogger(__name__)


async def get_admin_stats(
    caller: CallerIdentity | None = Depends(get_caller),
    stats_service: StatsService = Depends(get_stats_service),
) -> AdminStatsResponse | JSONResponse:
    """Count users, posts and conversations."""
    request_id = str(uuid.uuid4())[:8]

    try:
        stats = await stats_service.get_admin_stats(caller)
        return AdminStatsResponse.model_validate(stats.to_dict())

    except AdminError as e:
        logger.warning("[%s] Stats request rejected: %s", request_id, e.message)
        return error_response(e, request_id=request_id)
