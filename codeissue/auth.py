"""ClientLogin authentication against the account service."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from . import __version__
from .errors import AuthError, TransportError

logger = logging.getLogger(__name__)

CLIENT_LOGIN_URL = "https://www.google.com/accounts/ClientLogin"
SOURCE = f"codeissue-{__version__}"


def status_line(response) -> str:
    """Return ``"<code> <reason>"`` for a response."""
    return f"{response.status_code} {response.reason}".strip()


def login(email: str, password: str, session: Optional[requests.Session] = None) -> str:
    """Exchange account credentials for an authorization token.

    The token is the third line of the response body, taken verbatim
    (normally ``Auth=...``). Its format is not checked.
    """
    http = session or requests
    form = {
        "accountType": "GOOGLE",
        "Email": email,
        "Passwd": password,
        "service": "code",
        "source": SOURCE,
    }
    logger.info("Authenticating %s", email)
    try:
        with http.post(CLIENT_LOGIN_URL, data=form) as response:
            if response.status_code != 200:
                raise AuthError(f"failed to authenticate: {status_line(response)}")
            body = response.text
    except requests.RequestException as exc:
        raise TransportError(f"failed to authenticate: {exc}") from exc

    lines = body.split("\n")
    if len(lines) < 3:
        raise AuthError("failed to authenticate: malformed login response")
    logger.debug("Received authorization token")
    return lines[2]


def authorization_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"GoogleLogin {token}"}
