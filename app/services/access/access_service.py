"""Phone-number access control over call sheet data.

Unauthenticated callers get the production without crew and cast phone
numbers. The closed set flag stays in ``properties`` for everyone because the
client needs it to refuse skipping the phone prompt, but the authentication
result only reports a closed set to a caller that matched.
"""

import re
from typing import Optional

from app.models.callsheet import AuthenticationResult, Production, UserInfo
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

PHONE_FIELD = "Phone"
NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: Optional[str]) -> str:
    """Strip every non-digit character."""
    if not phone:
        return ""
    return NON_DIGITS.sub("", str(phone))


def find_user(production: Production, phone: Optional[str]) -> Optional[UserInfo]:
    """Find the first crew member, then cast member, with a matching phone."""
    wanted = normalize_phone(phone)
    if not wanted:
        return None

    for member in production.crew:
        if normalize_phone(member.get(PHONE_FIELD)) == wanted:
            return UserInfo(
                name=member.get("Name"),
                role=member.get("Role"),
                call_time=member.get("Call Time"),
                kind="crew",
            )

    for member in production.cast:
        if normalize_phone(member.get(PHONE_FIELD)) == wanted:
            return UserInfo(
                name=member.get("Name"),
                character=member.get("Character"),
                call_time=member.get("Call Time"),
                kind="cast",
            )

    return None


def sanitize(production: Production) -> Production:
    """Deep copy of ``production`` without crew and cast phone numbers."""
    redacted = production.model_copy(deep=True)
    for member in redacted.crew + redacted.cast:
        member.pop(PHONE_FIELD, None)
    return redacted


def authenticate(production: Production, phone: Optional[str]) -> AuthenticationResult:
    """Resolve what a caller identified by ``phone`` may see.

    Args:
        production: Full production
        phone: Caller supplied phone number, any formatting

    Returns:
        AuthenticationResult: Full production and closed set flag on a match,
        otherwise the sanitized production with ``is_closed_set`` forced off
    """
    user_info = find_user(production, phone)

    if user_info is None:
        LOGGER.info("Phone number not found in crew or cast", extra={"production_id": production.id})
        return AuthenticationResult(
            authenticated=False,
            user_info=None,
            production=sanitize(production),
            is_closed_set=False,
        )

    LOGGER.info(
        "Caller authenticated",
        extra={"production_id": production.id, "kind": user_info.kind},
    )
    return AuthenticationResult(
        authenticated=True,
        user_info=user_info,
        production=production,
        is_closed_set=production.is_closed_set,
    )
