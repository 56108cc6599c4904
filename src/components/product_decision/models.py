"""
Product decision component - Data models.

Connection settings handed to each platform's connectivity checker.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlackDuckServerConfig:
    """Connection settings for a Black Duck server."""

    url: str
    api_token: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: int = 120
    trust_cert: bool = False

    @property
    def uses_api_token(self) -> bool:
        return bool(self.api_token)

    @property
    def has_credentials(self) -> bool:
        return self.uses_api_token or bool(self.username and self.password)

    def __repr__(self) -> str:
        # Secrets stay out of logs and tracebacks.
        return (
            f"BlackDuckServerConfig(url={self.url!r}, "
            f"auth={'api_token' if self.uses_api_token else 'username'}, "
            f"timeout={self.timeout}, trust_cert={self.trust_cert})"
        )


@dataclass(frozen=True)
class PolarisServerConfig:
    """Connection settings for a Polaris instance."""

    url: str
    access_token: str
    timeout: int = 120

    def __repr__(self) -> str:
        return f"PolarisServerConfig(url={self.url!r}, timeout={self.timeout})"
