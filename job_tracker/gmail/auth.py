"""Gmail OAuth2 authentication."""
import logging
from pathlib import Path
from typing import Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from job_tracker.exceptions import GmailAuthError

logger = logging.getLogger(__name__)

# Reading mail and applying the processed label
SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.modify",
]

TOKEN_URI = "https://oauth2.googleapis.com/token"
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"


class GmailAuth:
    """Build Gmail credentials from a refresh token or a cached token file."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        refresh_token: Optional[str] = None,
        token_file: str = "token.json",
        redirect_uri: str = "http://localhost:3000/oauth2callback",
    ):
        """
        Initialize Gmail authentication.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            refresh_token: Refresh token obtained once via the consent flow
            token_file: Path of a cached authorized-user token
            redirect_uri: Redirect URI registered for the OAuth client
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.token_file = Path(token_file)
        self.redirect_uri = redirect_uri
        self._credentials: Optional[Credentials] = None

    def get_credentials(self) -> Credentials:
        """
        Return valid credentials, refreshing the access token when needed.

        Raises:
            GmailAuthError: if no refresh token or token file is usable
        """
        if self._credentials and self._credentials.valid:
            return self._credentials

        if self._credentials is None:
            self._credentials = self._load_credentials()

        if not self._credentials.valid:
            try:
                self._credentials.refresh(Request())
            except RefreshError as e:
                self._credentials = None
                raise GmailAuthError(f"token refresh failed: {e}") from e
            self._save_token()

        return self._credentials

    def _load_credentials(self) -> Credentials:
        if self.refresh_token and self.client_id and self.client_secret:
            return Credentials(
                token=None,
                refresh_token=self.refresh_token,
                token_uri=TOKEN_URI,
                client_id=self.client_id,
                client_secret=self.client_secret,
                scopes=SCOPES,
            )

        if self.token_file.exists():
            logger.debug("Loading Gmail token from %s", self.token_file)
            return Credentials.from_authorized_user_file(str(self.token_file), SCOPES)

        raise GmailAuthError(
            "set GMAIL_CLIENT_ID, GMAIL_CLIENT_SECRET and GMAIL_REFRESH_TOKEN"
        )

    def _save_token(self) -> None:
        """Cache refreshed credentials when they came from the token file."""
        if self._credentials and self.token_file.exists():
            with open(self.token_file, "w", encoding="utf-8") as f:
                f.write(self._credentials.to_json())

    def run_consent_flow(self) -> Credentials:
        """Run the interactive consent flow to obtain a refresh token."""
        if not self.client_id or not self.client_secret:
            raise GmailAuthError("set GMAIL_CLIENT_ID and GMAIL_CLIENT_SECRET first")

        client_config = {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }
        flow = InstalledAppFlow.from_client_config(client_config, SCOPES)
        credentials = flow.run_local_server(port=0, access_type="offline", prompt="consent")
        self._credentials = credentials
        return credentials
