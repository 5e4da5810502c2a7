from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_API_URL = "http://localhost:3000/api"


@dataclass(frozen=True)
class BackendConnection:
    """URL and publishable key of the persistence/auth backend."""

    url: Optional[str] = None
    publishable_key: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.publishable_key)


@dataclass
class Config:
    # --- HTTP ---
    api_url: str = DEFAULT_API_URL
    content_type: str = "application/json"

    # --- Environment ---
    # "development" selects the NEXT_PUBLIC_* backend credentials,
    # anything else the server-side pair.
    environment: str = "production"
    backend: BackendConnection = field(default_factory=BackendConnection)

    # --- Images ---
    image_remote_patterns: list[str] = field(
        default_factory=lambda: [
            "https://images.unsplash.com/photo-1519494080410-f9aa8f52f1e7?auto=format&fit=crop&w=900&q=80",
            "https://images.unsplash.com/photo-1546659934-038aab8f3f3b?q=80&w=899&auto=format&fit=crop",
        ]
    )

    # --- Logging ---
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Config":
        """
        Resolve the configuration once from environment variables.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Returns:
            A fully resolved Config. Missing backend credentials stay ``None``.
        """
        env = os.environ if environ is None else environ
        environment = env.get("NODE_ENV", "production")
        if environment == "development":
            backend = BackendConnection(
                url=env.get("NEXT_PUBLIC_SUPABASE_URL"),
                publishable_key=env.get("NEXT_PUBLIC_SUPABASE_PUBLISHABLE_KEY"),
            )
        else:
            backend = BackendConnection(
                url=env.get("SUPABASE_URL"),
                publishable_key=env.get("SUPABASE_PUBLISHABLE_KEY"),
            )
        return cls(
            api_url=env.get("NEXT_PUBLIC_API_URL") or DEFAULT_API_URL,
            environment=environment,
            backend=backend,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
