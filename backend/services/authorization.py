"""Admin authorization gate.

The admin set is supplied from configuration (an email allow-list and a
custom token claim) so changing admins never needs a redeploy.
"""

from dataclasses import dataclass, field
from typing import Any

from config import Settings
from errors import PermissionDenied, Unauthenticated


@dataclass(frozen=True)
class CallerIdentity:
    """Verified identity of the user calling an operation."""

    uid: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_token(cls, decoded_token: dict[str, Any]) -> "CallerIdentity":
        """Build from a decoded Firebase ID token."""
        return cls(
            uid=decoded_token["uid"],
            email=decoded_token.get("email"),
            claims=decoded_token,
        )


@dataclass(frozen=True)
class AdminPolicy:
    """Who counts as an admin."""

    admin_emails: frozenset[str] = frozenset()
    admin_claim: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdminPolicy":
        return cls(
            admin_emails=frozenset(settings.admin_emails),
            admin_claim=settings.admin_claim or None,
        )

    def authorize(self, caller: CallerIdentity | None) -> CallerIdentity:
        """Return the caller if it is an admin, raise otherwise.

        Raises:
            Unauthenticated: No caller identity.
            PermissionDenied: Caller is not an admin.
        """
        if caller is None:
            raise Unauthenticated("User must be authenticated.")
        if not is_admin(caller, self):
            raise PermissionDenied("Only admin can perform this action.")
        return caller


def is_admin(caller: CallerIdentity, policy: AdminPolicy) -> bool:
    """Check a caller against the admin policy. Pure, no I/O.

    The email allow-list only matches when the token marks the email as
    verified.
    """
    if policy.admin_claim and caller.claims.get(policy.admin_claim) is True:
        return True
    if caller.claims.get("email_verified") is not True:
        return False
    email = (caller.email or "").lower()
    return bool(email) and email in policy.admin_emails
