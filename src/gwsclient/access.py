"""
Authenticated access to Google APIs.
See https://developers.google.com/workspace/guides/create-credentials for what
you need.  Point the singleton at a client secrets file; the first connect runs
the OAuth consent flow and the refresh token is cached locally so it does not
have to happen again until the requested scopes change.

There is only ever one authenticated session per application so this is a
module singleton (gws), and the per-API adapters pull their services from it.
"""

from collections.abc import Iterable
from pathlib import Path
import json
import logging

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

from .errors import ConfigurationError, describe_error

logger = logging.getLogger(__name__)

class GoogleAccess():
    """
    Holds credentials, requested scopes and built services.
    Adapters append the scopes they need; a scope not covered by the current
    session triggers a reconnect.
    """

    SCOPES = {
        "sheets": "https://www.googleapis.com/auth/spreadsheets",
        "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "calendar": "https://www.googleapis.com/auth/calendar",
        "calendar-ro": "https://www.googleapis.com/auth/calendar.readonly",
        "events": "https://www.googleapis.com/auth/calendar.events",
        "events-ro": "https://www.googleapis.com/auth/calendar.events.readonly",
        "gmail": "https://mail.google.com/",
        "gmail-ro": "https://www.googleapis.com/auth/gmail.readonly",
        "gmail-send": "https://www.googleapis.com/auth/gmail.send",
        "gmail-labels": "https://www.googleapis.com/auth/gmail.labels",
    }
    SCOPE_URL_PREFIXES = ("https://www.googleapis.com/", "https://mail.google.com/")

    DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize access: {url}"
    DEFAULT_FLOW_SUCCESS_MSG = "Authorization complete, you may close this window."
    DEFAULT_SECRETS = Path.home() / "gws_client_secrets.json"
    DEFAULT_CACHE = Path.home() / "gws_tokens.json"

    def __init__(self) -> None:
        self.reset()

    def __bool__(self) -> bool:
        """True if we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{self.session_scopes}"
        return f"Disconnected:{self._scopes}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Full scope URL from a short label, or the scope itself if it is already a URL.
        Empty string if neither.
        """
        s = str(scope)
        sc = cls.SCOPES.get(s, "")
        if not sc and s.startswith(cls.SCOPE_URL_PREFIXES):
            sc = s
        return sc

    @classmethod
    def scope_list(cls, value: None|str|Iterable) -> list[str]:
        """Normalize one scope or several into a list of URLs, dropping unknowns"""
        if value is None:
            return []
        vals = [value] if isinstance(value, str) or not isinstance(value, Iterable) else value
        slist = []
        for v in vals:
            s = cls.get_scope(v)
            if s and s not in slist:
                slist.append(s)
            elif not s:
                logger.warning("ignoring unknown scope: %s", v)
        return slist

    def reset(self) -> None:
        """Reset all connection state to defaults."""
        self._secrets = self.DEFAULT_SECRETS
        self._cache = self.DEFAULT_CACHE
        self._discovery_cache = gws_discovery_cache.autodetect()
        self._creds = None
        self._scopes = []
        self._services = {}
        self._developer_key = None
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.DEFAULT_AUTH_PROMPT_MSG
        self.auth_flow_success_msg = self.DEFAULT_FLOW_SUCCESS_MSG

    def clear(self) -> None:
        """Drop credentials and services, keeping configuration."""
        self._creds = None
        self._services = {}

    @property
    def client_secrets(self) -> Path:
        """Client secrets file as downloaded from the Google cloud console"""
        return self._secrets

    @client_secrets.setter
    def client_secrets(self, value: Path|str) -> None:
        val = Path(value)
        if val != self._secrets:
            self._secrets = val
            if self.connected:
                self.connect()

    @property
    def cred_cache(self) -> Path:
        """Local token cache so the consent flow isn't needed each time"""
        return self._cache

    @cred_cache.setter
    def cred_cache(self, value: Path|str) -> None:
        val = Path(value)
        if val != self._cache:
            self._cache = val
            if self.connected:
                self.connect()

    @property
    def connected(self) -> bool:
        return bool(self._creds) and bool(self._creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """Scopes granted for this session, as opposed to the requested self.scopes"""
        if self.connected:
            return list(self._creds.scopes or [])
        return []

    @property
    def scopes(self) -> list[str]:
        """Scopes requested or to be requested on next authentication"""
        return self._scopes

    @scopes.setter
    def scopes(self, value: None|list[str]|str) -> None:
        self._scopes = self.scope_list(value)
        if self._scopes and self.connected:
            self.refresh()
        else:
            self.clear()

    def append_scopes(self, *args) -> bool:
        """
        Add to the requested scopes.  Adapters call this on init with the
        scopes they need.
        """
        for a in args:
            for s in self.scope_list(a):
                if s not in self._scopes:
                    self._scopes.append(s)
        return self.refresh()

    def scope_in_session(self, scope: str) -> bool:
        s = self.get_scope(scope)
        return bool(s) and s in self.session_scopes

    @property
    def creds(self) -> Credentials|None:
        return self._creds

    @property
    def services(self) -> dict[str, Resource]:
        return self._services

    @property
    def developer_key(self) -> str|None:
        return self._developer_key

    @developer_key.setter
    def developer_key(self, value: str|None) -> None:
        v = value if value is None else str(value)
        if v != self._developer_key:
            self._services = {}
            self._developer_key = v

    @property
    def config(self) -> dict:
        """
        All configuration state as a dict, for pushing into a json or toml file.
        """
        return {
            'secrets': str(self._secrets),
            'cache': str(self._cache),
            'scopes': list(self._scopes),
            'server': self.auth_server,
            'port': self.auth_port,
            'developer_key': self._developer_key,
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration from a dict as read from a config file.
        Keys that change the credentials reconnect an existing session.
        """
        reconnect = False
        v = config.get('port', None)
        if v is not None:
            self.auth_port = int(v)
        v = config.get('server', None)
        if v is not None:
            self.auth_server = str(v)
        v = config.get('scopes', None)
        if v:
            self._scopes = self.scope_list(v)
            reconnect = True
        v = config.get('cache', None)
        if v is not None:
            self._cache = Path(v)
            reconnect = True
        v = config.get('secrets', None)
        if v is not None:
            self._secrets = Path(v)
            reconnect = True
        if 'developer_key' in config:
            self.developer_key = config['developer_key']
        v = config.get('auth_prompt_msg', None)
        if v is not None:
            self.auth_prompt_msg = str(v)
        v = config.get('flow_success_msg', None)
        if v is not None:
            self.auth_flow_success_msg = str(v)
        if reconnect and self.connected:
            self.connect()

    def refresh(self) -> bool:
        """
        Reconnect if a requested scope is missing from the current session.
        """
        if self.connected and not all(self.scope_in_session(s) for s in self._scopes):
            return self.connect()
        return True

    def _load_cached_creds(self, requested: list[str]) -> None:
        """Load the token cache, unless it was granted for fewer scopes than we now want"""
        if not self._cache.is_file():
            return
        with open(self._cache, 'r', encoding='utf-8') as f:
            cached = json.load(f)
        if all(s in cached.get('scopes', []) for s in requested):
            self._creds = Credentials.from_authorized_user_file(str(self._cache), requested)
        else:
            logger.debug("token cache %s lacks requested scopes, discarding", self._cache)
            self._cache.unlink()

    def _save_cached_creds(self, requested: list[str]) -> None:
        user_info = {'refresh_token': self._creds.refresh_token,
                     'client_id': self._creds.client_id,
                     'client_secret': self._creds.client_secret,
                     'scopes': requested}
        with open(self._cache, 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session, trying in order: the token cache,
        a refresh of cached credentials, the installed app consent flow, and
        finally application default credentials.
        """
        self.clear()
        if not self._scopes:
            return False
        requested = list(self._scopes)
        self._load_cached_creds(requested)
        if self._creds and not self.connected and self._creds.refresh_token:
            try:
                self._creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds (%s), re-authorizing", describe_error(e))
            if not self.connected:
                self._creds = None
                self._cache.unlink(missing_ok=True)

        if not self.connected:
            if self._secrets.is_file():
                flow = InstalledAppFlow.from_client_secrets_file(str(self._secrets), requested)
                self._creds = flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                                    authorization_prompt_message=self.auth_prompt_msg,
                                                    success_message=self.auth_flow_success_msg)
            else:
                # looks at GOOGLE_APPLICATION_CREDENTIALS and the cloud default locations
                try:
                    self._creds, _ = google.auth.default(scopes=requested)
                except google.auth.exceptions.DefaultCredentialsError:
                    logger.debug("no client secrets at %s and no default credentials", self._secrets)
                    self._creds = None
                if self._creds is not None and not self._creds.valid:
                    self._creds.refresh(Request())
                # default credentials manage their own tokens
                return self.connected

        if self.connected and getattr(self._creds, 'refresh_token', None):
            self._save_cached_creds(requested)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource|None:
        """
        Build the requested service if not already available, connecting if required.
        None if there is no authenticated session.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            return None
        key = f'{name}:{version}'
        s = self._services.get(key, None)
        if s is None:
            logger.debug("building service %s", key)
            s = build(name, version, credentials=self._creds,
                      developerKey=self._developer_key, cache=self._discovery_cache)
            self._services[key] = s
        return s

gws = GoogleAccess()

class GoogleServiceClient():
    """
    Base for the per-API adapters.  Subclasses name the discovery service and the
    scopes they need.  A prebuilt service can be handed in, which is mostly for tests.
    """
    service_name: str = ""
    service_version: str = ""
    scopes: tuple[str, ...] = ()

    def __init__(self, service: Resource|None = None) -> None:
        self._service = service
        if service is None and self.scopes:
            gws.append_scopes(*self.scopes)

    def service(self) -> Resource:
        """
        The discovery service for this adapter, built on first use.
        """
        if self._service is None:
            s = gws.get_service(self.service_name, self.service_version)
            if s is None:
                raise ConfigurationError(
                    f"The Google {self.service_name} client is not yet configured, "
                    f"check client secrets at {gws.client_secrets}")
            self._service = s
        return self._service
