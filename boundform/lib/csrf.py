"""Session-backed anti-forgery tokens for Litestar requests.

The form engine only embeds a token it is handed; this module issues and
checks one:

    options = RenderOptions(anti_forgery_token=current_token(request))
    ...
    if not await verify_token(request):
        raise PermissionDeniedException()

Handlers that already parsed the body can call check_token directly.
"""

from __future__ import annotations

import hmac
import logging
import secrets
from collections.abc import MutableMapping
from typing import Any

from litestar import Request

from boundform.config import get_settings

logger = logging.getLogger(__name__)

CSRF_SESSION_KEY = "_csrf_token"


def _issue(session: MutableMapping[str, Any]) -> str:
    token = secrets.token_urlsafe(32)
    session[CSRF_SESSION_KEY] = token
    return token


def current_token(request: Request) -> str:
    """Return the session's token, creating one if needed."""
    if CSRF_SESSION_KEY not in request.session:
        return _issue(request.session)
    return request.session[CSRF_SESSION_KEY]


def check_token(session: MutableMapping[str, Any], submitted: Any) -> bool:
    """Compare *submitted* with the session token, rotating it on a match.

    A session without a token never matches.
    """
    stored = session.get(CSRF_SESSION_KEY, "")
    if not stored or not hmac.compare_digest(str(submitted or ""), str(stored)):
        logger.debug("Anti-forgery token mismatch")
        return False
    _issue(session)
    return True


async def verify_token(request: Request, field_name: str | None = None) -> bool:
    """Read the token from the submitted form and check it.

    The field defaults to the configured ``anti_forgery_field``.
    """
    form_data = await request.form()
    return check_token(request.session, form_data.get(field_name or get_settings().anti_forgery_field))
