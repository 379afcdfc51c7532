"""Binding between a browser session and the logged in user.

The session is any mutable mapping; in the web application it is the
signed-cookie dict Starlette exposes as ``request.session``. Besides the user
binding it carries one-shot flash messages shown on the next rendered page.
"""

from collections.abc import MutableMapping
from typing import Any

USER_KEY = "logged_in_user"
FLASHES_KEY = "_flashes"


def set_user(session: MutableMapping[str, Any], user_id: int) -> None:
    """Bind the session to a user, replacing any previous binding."""
    session[USER_KEY] = user_id


def get_user(session: MutableMapping[str, Any]) -> int | None:
    """Return the bound user id, if any."""
    user_id = session.get(USER_KEY)
    if user_id is None:
        return None
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


def clear(session: MutableMapping[str, Any]) -> None:
    """Reset the whole session, not just the user binding."""
    session.clear()


def flash(session: MutableMapping[str, Any], category: str, message: str) -> None:
    """Queue a message for the next rendered page."""
    flashes = list(session.get(FLASHES_KEY, []))
    flashes.append([category, message])
    session[FLASHES_KEY] = flashes


def pop_flashes(session: MutableMapping[str, Any]) -> list[tuple[str, str]]:
    """Remove and return queued messages as (category, message) pairs."""
    return [(category, message) for category, message in session.pop(FLASHES_KEY, [])]
