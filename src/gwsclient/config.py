"""
Configuration loading.  A JSON or TOML file, found from the argument or the
GWSCLIENT_CONFIG environment variable, with a few single value environment
overrides on top.  For example gwsclient.toml:

    secrets = "~/gws_client_secrets.json"
    cache = "~/gws_tokens.json"
    scopes = ["sheets", "calendar-ro"]
    spreadsheet = "https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit#gid=0"
    calendar = "primary"
"""
from pathlib import Path
import json
import logging
import os
import tomllib

from .access import gws
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV = "GWSCLIENT_CONFIG"
ENV_OVERRIDES = {
    "GWSCLIENT_SECRETS": "secrets",
    "GWSCLIENT_TOKEN_CACHE": "cache",
    "GWSCLIENT_SCOPES": "scopes",
}
ACCESS_KEYS = ('secrets', 'cache', 'scopes', 'server', 'port', 'developer_key',
               'auth_prompt_msg', 'flow_success_msg')
ADAPTER_KEYS = ('calendar', 'spreadsheet', 'sheet', 'missing_sheet')

def _read(path: Path) -> dict:
    try:
        if path.suffix == '.toml':
            with open(path, 'rb') as f:
                return tomllib.load(f)
        if path.suffix == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Unable to read config {path}: {e}") from e
    raise ConfigurationError(f"Config must be a .json or .toml file, not: {path}")

def load_config(path: Path|str|None = None, environ: dict|None = None) -> dict:
    """
    Config as a dict.  No file is fine, the environment alone may be enough.
    Paths in secrets/cache have ~ expanded, scopes from the environment are
    comma separated.
    """
    env = os.environ if environ is None else environ
    p = path if path is not None else env.get(CONFIG_ENV, None)
    config = _read(Path(p).expanduser()) if p else {}
    for var, key in ENV_OVERRIDES.items():
        v = env.get(var, None)
        if v:
            config[key] = [s.strip() for s in v.split(',') if s.strip()] if key == 'scopes' else v
    for key in list(config):
        if key not in ACCESS_KEYS and key not in ADAPTER_KEYS:
            logger.warning("ignoring unknown config key: %s", key)
            del config[key]
    for key in ('secrets', 'cache'):
        if config.get(key):
            config[key] = str(Path(config[key]).expanduser())
    return config

def configure(path: Path|str|None = None, environ: dict|None = None) -> dict:
    """
    Load config and apply the access part to the gws singleton.  The full
    dict is returned so callers can pick adapter defaults (spreadsheet,
    calendar, ...) out of it.
    """
    config = load_config(path, environ)
    gws.config = {k: v for k, v in config.items() if k in ACCESS_KEYS}
    return config
