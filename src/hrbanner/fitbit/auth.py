"""
Fitbit OAuth2 credentials with disk persistence.

Fitbit uses the authorization-code grant. After the user approves access in
the browser they are redirected to `redirect_uri?code=...`; that code is
exchanged once for an access token + refresh token:

    {
        "access_token": "eyJ...",
        "refresh_token": "c643...",
        "scope": "heartrate",
        "user_id": "ABC123",
        ...
    }

We serialize the tokens to JSON on disk so the browser step is only needed
once. Access tokens expire after ~8 hours; FitbitClient refreshes them with
the refresh token and saves the new pair (Fitbit refresh tokens are single
use, so the new pair must always be written back).
"""
import json
import os
import stat
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import httpx
from pydantic import BaseModel

# ── Constants ─────────────────────────────────────────────────────────────────

CREDENTIALS_DIR_DEFAULT = Path.home() / ".hrbanner"
CREDENTIALS_FILE_NAME = "credentials.json"

AUTHORIZE_URL = "https://www.fitbit.com/oauth2/authorize"
TOKEN_URL = "https://api.fitbit.com/oauth2/token"
REQUIRED_SCOPE = "heartrate"
TOKEN_LIFETIME_SECONDS = 604800  # requested lifetime for the authorize link


# ── Exceptions ────────────────────────────────────────────────────────────────

class NoCredentialsError(RuntimeError):
    """Raised when no saved credentials exist (setup has not been run)."""


class TokenExpiredError(RuntimeError):
    """Raised when Fitbit rejects the access token as expired."""


class FitbitAPIError(RuntimeError):
    """Raised on any other non-2xx response from Fitbit."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# ── Models ────────────────────────────────────────────────────────────────────

class UserCredentials(BaseModel):
    access_token: str = ""
    refresh_token: str = ""
    scope: str = ""
    user_id: str = ""


def error_messages(response: httpx.Response) -> List[str]:
    """
    Pull the `errors[].message` strings out of a Fitbit error body.

    Fitbit error bodies look like:
        {"errors": [{"errorType": "expired_token", "message": "Access token expired: ..."}],
         "success": false}
    """
    try:
        body = response.json()
    except ValueError:
        return []
    if not isinstance(body, dict):
        return []
    return [e.get("message", "") for e in body.get("errors", []) if isinstance(e, dict)]


def raise_for_fitbit_error(response: httpx.Response) -> None:
    """Raise FitbitAPIError carrying Fitbit's own messages for a non-2xx response."""
    if response.is_success:
        return
    messages = error_messages(response)
    if messages:
        raise FitbitAPIError(", ".join(messages), status_code=response.status_code)
    raise FitbitAPIError(
        f"{response.status_code} {response.reason_phrase} - {response.text}",
        status_code=response.status_code,
    )


def code_from_redirect(url_or_code: str) -> str:
    """
    Accept either the bare authorization code or the full redirect URL the
    browser landed on, and return the code.
    """
    value = url_or_code.strip()
    if "?" not in value:
        return value.split("#")[0]
    codes = parse_qs(urlparse(value).query).get("code", [])
    if not codes or not codes[0]:
        raise ValueError(f"no code parameter in {value!r}")
    # Fitbit appends "#_=_" to the redirect; urlparse keeps it out of the query
    return codes[0]


# ── Main class ────────────────────────────────────────────────────────────────

class FitbitAuth:
    """
    Manages Fitbit OAuth tokens on disk and the token endpoint.

    Usage:
        auth = FitbitAuth(client_id, client_secret)
        if not auth.has_credentials():
            print(auth.authorize_url())
            auth.exchange_code(code)          # saves credentials.json
        creds = auth.load()
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str = "http://localhost:8090",
        credentials_dir: Path = CREDENTIALS_DIR_DEFAULT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            client_id, client_secret: from the app registered at dev.fitbit.com.
            redirect_uri: must match the app's registered callback URL.
            credentials_dir: where credentials.json is kept.
            transport: httpx transport override (tests pass httpx.MockTransport).
        """
        self.client_id = client_id
        self._client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._credentials_dir = Path(credentials_dir)
        self._credentials_file = self._credentials_dir / CREDENTIALS_FILE_NAME
        self._transport = transport

    @property
    def credentials_file(self) -> Path:
        return self._credentials_file

    # ── Persistence ───────────────────────────────────────────────────────────

    def has_credentials(self) -> bool:
        return self._credentials_file.exists()

    def save(self, credentials: UserCredentials) -> None:
        """
        Persist credentials to disk with owner-only permissions.

        Directory: 0700 (rwx------)
        File:      0600 (rw-------)
        """
        self._credentials_dir.mkdir(parents=True, exist_ok=True)
        os.chmod(self._credentials_dir, stat.S_IRWXU)  # 0700

        self._credentials_file.write_text(json.dumps(credentials.model_dump(), indent=2))
        os.chmod(self._credentials_file, stat.S_IRUSR | stat.S_IWUSR)  # 0600

    def load(self) -> UserCredentials:
        """
        Raises:
            NoCredentialsError: if no credentials file exists.
        """
        if not self._credentials_file.exists():
            raise NoCredentialsError(
                f"No Fitbit credentials found at {self._credentials_file}. "
                "Run `python -m hrbanner setup` to authorize."
            )
        return UserCredentials.model_validate_json(self._credentials_file.read_text())

    def clear(self) -> None:
        """Delete the credentials file (does not raise if already absent)."""
        if self._credentials_file.exists():
            self._credentials_file.unlink()

    # ── OAuth ─────────────────────────────────────────────────────────────────

    def authorize_url(self) -> str:
        """Link the user opens in a browser to grant heartrate access."""
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": REQUIRED_SCOPE,
            "expires_in": TOKEN_LIFETIME_SECONDS,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> UserCredentials:
        """
        Trade a one-time authorization code for tokens and save them.

        Raises:
            FitbitAPIError: on a rejected code or a response missing the
                heartrate scope / tokens.
        """
        creds = self._request_tokens({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        })
        self.save(creds)
        return creds

    def refresh(self, credentials: UserCredentials) -> UserCredentials:
        """Trade the refresh token for a new token pair and save it."""
        creds = self._request_tokens({
            "grant_type": "refresh_token",
            "refresh_token": credentials.refresh_token,
        })
        self.save(creds)
        return creds

    def _request_tokens(self, form: Dict[str, Any]) -> UserCredentials:
        form = {"clientId": self.client_id, **form}
        with httpx.Client(transport=self._transport, timeout=30) as client:
            resp = client.post(
                TOKEN_URL,
                data=form,
                auth=(self.client_id, self._client_secret),
            )
        raise_for_fitbit_error(resp)

        creds = UserCredentials.model_validate(resp.json())
        if REQUIRED_SCOPE not in creds.scope:
            raise FitbitAPIError("heartrate was not given as a scope permission")
        if not creds.access_token:
            raise FitbitAPIError("api token empty")
        if not creds.refresh_token:
            raise FitbitAPIError("refresh token is empty")
        return creds
