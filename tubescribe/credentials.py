"""
tubescribe.credentials - Credential providers.

Backends never read the environment directly; they ask a provider and
turn an empty answer into CredentialError via require_key().
"""

from __future__ import annotations

import os

from tubescribe.exceptions import CredentialError
from tubescribe.protocols import CredentialProvider


class EnvCredentialProvider:
    """Reads the credential from an environment variable."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var

    @property
    def name(self) -> str:
        return self.env_var

    def get_key(self) -> str:
        return os.environ.get(self.env_var, "")


class StaticCredentialProvider:
    """Returns a fixed credential; useful for config-supplied keys and tests."""

    def __init__(self, key: str, name: str = "static credential") -> None:
        self._key = key
        self.name = name

    def get_key(self) -> str:
        return self._key


def require_key(provider: CredentialProvider | None, name: str | None = None) -> str:
    """Fetch a credential, refusing to continue unauthenticated.

    Args:
        provider: Credential provider (None counts as absent)
        name: Label used in the error; defaults to the provider's name

    Returns:
        The non-empty credential

    Raises:
        CredentialError: If the provider is missing or returns an empty key
    """
    label = name or getattr(provider, "name", None) or "credential"
    if provider is None:
        raise CredentialError(label)
    key = provider.get_key()
    if not key:
        raise CredentialError(label)
    return key
