"""Hook routes - triggers fired by the identity platform.

Every hook requires the shared X-Hook-Secret header; clients cannot call
them.
"""

from fastapi import APIRouter, Depends

from apps.hooks.handlers import on_user_created
from apps.hooks.handlers.user_created import HookResponse
from dependencies import verify_hook_secret

router = APIRouter(
    prefix="/hooks", tags=["Hooks"], dependencies=[Depends(verify_hook_secret)]
)

# POST /hooks/user-created - New account trigger
router.post("/user-created", response_model=HookResponse)(on_user_created)
