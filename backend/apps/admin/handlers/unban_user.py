"""POST /admin/unbanUser - Re-enable a user's account."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.admin.schemas import OperationResponse, UserTargetRequest
from dependencies import get_caller, get_moderation_service
from errors import AdminError
from responses import error_response
from services.authorization import CallerIdentity
from services.moderation import ModerationService

logger = logging.getLogger(__name__)


async def unban_user(
    payload: UserTargetRequest | None = None,
    caller: CallerIdentity | None = Depends(get_caller),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> OperationResponse | JSONResponse:
    """Lift a ban: re-enable the account and drop its ban record."""
    request_id = str(uuid.uuid4())[:8]
    user_id = payload.user_id if payload else None
    logger.info("[%s] Unban user request: %s", request_id, user_id)

    try:
        result = await moderation_service.unban_user(caller, user_id)
        return OperationResponse.model_validate(result.to_dict())

    except AdminError as e:
        logger.warning("[%s] Unban user rejected: %s", request_id, e.message)
        return error_response(e, request_id=request_id)
