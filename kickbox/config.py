"""Configuration for command-line use, loaded from the environment / .env."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import BASE_URL, DEFAULT_TIMEOUT, Client


@dataclass
class Settings:
    api_key: Optional[str]
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read KICKBOX_API_KEY, KICKBOX_BASE_URL and KICKBOX_TIMEOUT.

        A ``.env`` file in the working directory is loaded first; variables
        already set in the environment win.
        """
        load_dotenv()
        raw_timeout = os.getenv("KICKBOX_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(
                f"KICKBOX_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from None
        return cls(
            api_key=os.getenv("KICKBOX_API_KEY") or None,
            base_url=os.getenv("KICKBOX_BASE_URL") or BASE_URL,
            timeout=timeout,
        )

    def client(self) -> Client:
        if not self.api_key:
            raise ValueError(
                "API key required. Set KICKBOX_API_KEY in the environment or .env"
            )
        return Client(self.api_key, base_url=self.base_url, timeout=self.timeout)
