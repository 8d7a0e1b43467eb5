"""Secure credential storage using the system keychain.

Credentials resolve from an environment variable first (for CI and
automation), then the system keychain. Nothing is prompted for; a missing
credential is returned as None and the caller decides what that means.

Usage:
    from report_engine.credentials import get_credential_store

    store = get_credential_store()
    api_key = store.get(GEMINI_API_KEY)
"""

from __future__ import annotations

import os

import keyring
import keyring.errors

# Service name used for all keychain entries
SERVICE_NAME = "report-engine"

GEMINI_API_KEY = "gemini-api-key"

# Environment variable mappings - delegates can register additional mappings
ENV_VAR_MAPPING: dict[str, str] = {
    GEMINI_API_KEY: "GEMINI_API_KEY",
}


def register_credential_env_var(key: str, env_var: str) -> None:
    """Register an environment variable mapping for a credential key.

    Args:
        key: Credential key (e.g., "gemini-api-key")
        env_var: Environment variable name (e.g., "GEMINI_API_KEY")
    """
    ENV_VAR_MAPPING[key] = env_var


def env_var_for(key: str) -> str:
    """Environment variable consulted for a credential key."""
    return ENV_VAR_MAPPING.get(key, f"RPE_{key.upper().replace('-', '_')}")


class CredentialStore:
    """Credential lookup with environment and keychain sources.

    Priority order for credential resolution:
    1. Environment variable
    2. System keychain
    """

    def __init__(self, service_name: str = SERVICE_NAME) -> None:
        self.service_name = service_name

    def get(self, key: str) -> str | None:
        """Get a credential, checking env then keychain.

        Args:
            key: Credential key

        Returns:
            The credential string, or None if not found
        """
        env_value = os.environ.get(env_var_for(key))
        if env_value:
            return env_value

        try:
            keychain_value = keyring.get_password(self.service_name, key)
            if keychain_value:
                return keychain_value
        except keyring.errors.KeyringError:
            # Keychain not available (e.g., headless CI without keychain)
            pass

        return None

    def set(self, key: str, value: str) -> bool:
        """Store a credential in the system keychain.

        Returns:
            True if stored successfully, False if keychain unavailable
        """
        try:
            keyring.set_password(self.service_name, key, value)
            return True
        except keyring.errors.KeyringError:
            return False

    def delete(self, key: str) -> bool:
        """Delete a credential from the system keychain.

        Returns:
            True if deleted, False if it did not exist or keychain unavailable
        """
        try:
            keyring.delete_password(self.service_name, key)
            return True
        except keyring.errors.PasswordDeleteError:
            return False
        except keyring.errors.KeyringError:
            return False

    def exists(self, key: str) -> bool:
        """Check if a credential exists in env or keychain."""
        return self.get(key) is not None


_default_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Get or create the default credential store."""
    global _default_store
    if _default_store is None:
        _default_store = CredentialStore()
    return _default_store
