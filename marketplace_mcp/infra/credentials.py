"""
up CLI credential source for marketplace-mcp-server.

The server never logs in on its own. It reuses the session that the
``up`` CLI stored after ``up login``, from a JSON file shaped like::

    {
      "upbound": {
        "default": "team-a",
        "profiles": {
          "team-a": {"id": "...", "session": "...", "domain": "https://upbound.io"}
        }
      }
    }

The file is re-read on every call, so switching profiles with the CLI is
picked up by the next ``reload_auth``.
"""

import json
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from urllib.parse import urlparse, urlunparse

from ..domain.profile import Profile, Token
from ..exceptions import CredentialError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.upbound.io"

# Config mounted into the container image
MOUNTED_CONFIG_PATH = Path("/mcp/.up/config.json")


def get_up_config_path() -> Path:
    """Locate the up CLI configuration file.

    Checks in order:
    1. UP_CONFIG_PATH environment variable
    2. /mcp/.up/config.json (mounted into a container)
    3. ~/.up/config.json
    """
    env_path = os.environ.get('UP_CONFIG_PATH')
    if env_path:
        return Path(env_path)

    if MOUNTED_CONFIG_PATH.exists():
        return MOUNTED_CONFIG_PATH

    return Path.home() / '.up' / 'config.json'


def server_url_for_domain(domain: str) -> str:
    """
    Derive the API base URL from a profile domain.

    ``""`` gives the default API host; ``example.com`` and
    ``https://example.com`` give ``https://api.example.com``; a host that
    already starts with ``api.`` is left alone.
    """
    if not domain:
        return DEFAULT_API_URL

    if '://' not in domain:
        domain = f"https://{domain}"

    parsed = urlparse(domain)
    if not parsed.netloc:
        raise CredentialError(f"failed to parse domain URL: {domain!r}")

    host = parsed.netloc
    if not host.startswith('api.'):
        host = f"api.{host}"

    return urlunparse((parsed.scheme, host, parsed.path.rstrip('/'), '', '', ''))


class CredentialManager:
    """
    Read-only access to the up CLI configuration.

    Example:
        creds = CredentialManager()
        token = creds.current_token()
        base_url = creds.current_server_url()
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize CredentialManager.

        Args:
            config_path: Explicit config file (defaults to get_up_config_path())
        """
        self.config_path = Path(config_path) if config_path else get_up_config_path()

    def _load(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise CredentialError(
                f"UP CLI config not found at {self.config_path}. Please run 'up login' first"
            )

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CredentialError(f"failed to parse UP CLI config: {e}") from e
        except OSError as e:
            raise CredentialError(f"failed to read UP CLI config: {e}") from e

        upbound = data.get('upbound') if isinstance(data, dict) else None
        if not isinstance(upbound, dict):
            return {}

        profiles = upbound.get('profiles')
        if profiles is not None and not isinstance(profiles, dict):
            raise CredentialError(
                f"failed to parse UP CLI config: 'profiles' must be an object, "
                f"got {type(profiles).__name__}"
            )
        return upbound

    def list_profiles(self) -> Dict[str, Profile]:
        """Return every profile keyed by name."""
        profiles = self._load().get('profiles') or {}
        return {
            name: Profile.from_dict(entry)
            for name, entry in profiles.items()
            if isinstance(entry, dict)
        }

    def default_profile_name(self) -> str:
        name = self._load().get('default') or ''
        if not name:
            raise CredentialError("no default profile set in UP CLI config")
        return name

    def current_profile(self) -> Profile:
        """Return the default profile."""
        name = self.default_profile_name()
        profiles = self.list_profiles()
        if name not in profiles:
            raise CredentialError(f"default profile '{name}' not found in UP CLI config")
        return profiles[name]

    def token_for_profile(self, name: str) -> Token:
        profile = self.list_profiles().get(name)
        if profile is None:
            raise CredentialError(f"profile '{name}' not found in UP CLI config")
        return self._token(name, profile)

    def current_token(self) -> Token:
        """Return the session token of the default profile."""
        name = self.default_profile_name()
        profile = self.current_profile()
        return self._token(name, profile)

    def current_server_url(self) -> str:
        """Return the API base URL of the default profile."""
        return server_url_for_domain(self.current_profile().domain)

    def validate_token(self) -> None:
        """Raise CredentialError unless the default profile holds a session."""
        self.current_token()

    @staticmethod
    def _token(name: str, profile: Profile) -> Token:
        if not profile.session:
            raise CredentialError(
                f"no session token found in profile '{name}'. "
                "Please run 'up login' to authenticate"
            )
        return Token(access_token=profile.session)
