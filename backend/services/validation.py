"""Input checks shared by admin operations."""

from errors import InvalidArgument
from services.authorization import CallerIdentity


def require_user_id(
    user_id: str | None,
    caller: CallerIdentity | None = None,
    self_action: str | None = None,
) -> str:
    """Validate a target user id.

    Args:
        user_id: Target user id from the request payload.
        caller: When given with ``self_action``, targeting the caller's own
            account is rejected.
        self_action: Verb used in the self-targeting message ("delete", "ban").

    Raises:
        InvalidArgument: Missing id, or the caller targets itself.
    """
    user_id = (user_id or "").strip()
    if not user_id:
        raise InvalidArgument("User ID is required.")
    if caller is not None and self_action and user_id == caller.uid:
        raise InvalidArgument(f"Cannot {self_action} your own account.")
    return user_id
