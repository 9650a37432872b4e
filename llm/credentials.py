"""
Credential providers for the external model.

Providers are tried in order; the first non-empty key wins. A provider that
raises is logged and skipped so a broken source never hides a working one.

Usage:
    chain = default_chain()
    api_key = chain.resolve()          # None when nothing is configured
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger


class MissingCredentialError(LookupError):
    """No provider in the chain supplied an API key."""


class CredentialProvider(ABC):
    """One source of an API key."""

    name: str = "provider"

    @abstractmethod
    def get_api_key(self) -> Optional[str]:
        """Return the key, or None when this source has none."""


class StaticCredentialProvider(CredentialProvider):
    """A key handed in directly (CLI flag, test fixture)."""

    name = "static"

    def __init__(self, api_key: Optional[str]):
        self._api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return self._api_key


class SettingsCredentialProvider(CredentialProvider):
    """``OPENAI_API_KEY`` from ``config.settings`` (environment or .env)."""

    name = "settings"

    def __init__(self, settings=None):
        self._settings = settings

    def get_api_key(self) -> Optional[str]:
        settings = self._settings
        if settings is None:
            from config import settings
        return settings.OPENAI_API_KEY


class EnvironmentCredentialProvider(CredentialProvider):
    """A key read from an environment variable at call time."""

    name = "environment"

    def __init__(self, variable: str = "OPENAI_API_KEY"):
        self.variable = variable

    def get_api_key(self) -> Optional[str]:
        return os.environ.get(self.variable)


class KeyFileCredentialProvider(CredentialProvider):
    """A key remembered on disk by ``save_api_key``."""

    name = "key_file"

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_api_key(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8").strip()


def save_api_key(path: Path, api_key: str) -> None:
    """Remember a key for ``KeyFileCredentialProvider``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(api_key.strip(), encoding="utf-8")
    try:
        path.chmod(0o600)
    except OSError as e:
        logger.warning(f"Could not restrict permissions on {path}: {e}")
    logger.info(f"Saved API key to {path}")


class CredentialChain:
    """Ordered collection of providers."""

    def __init__(self, providers: Iterable[CredentialProvider]):
        self.providers: List[CredentialProvider] = list(providers)

    def resolve(self) -> Optional[str]:
        for provider in self.providers:
            try:
                api_key = provider.get_api_key()
            except Exception as e:
                logger.warning(f"Credential provider '{provider.name}' failed: {e}")
                continue
            if api_key and api_key.strip():
                logger.debug(f"Using API key from '{provider.name}'")
                return api_key.strip()
        return None

    def require(self) -> str:
        api_key = self.resolve()
        if not api_key:
            names = ", ".join(p.name for p in self.providers) or "none"
            raise MissingCredentialError(f"No API key found (tried: {names})")
        return api_key


def default_chain(api_key: Optional[str] = None) -> CredentialChain:
    """Explicit key, then settings, then environment, then the key file."""
    from config import settings

    providers: List[CredentialProvider] = []
    if api_key:
        providers.append(StaticCredentialProvider(api_key))
    providers.extend([
        SettingsCredentialProvider(settings),
        EnvironmentCredentialProvider("OPENAI_API_KEY"),
        KeyFileCredentialProvider(settings.API_KEY_FILE),
    ])
    return CredentialChain(providers)
