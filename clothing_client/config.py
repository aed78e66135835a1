"""Client configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:8000/api/"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SHIPPING_FEE = Decimal("25000")


def _default_session_path() -> Path:
    return Path.home() / ".clothing_client" / "session.json"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for :class:`clothing_client.api.ApiClient`.

    Attributes:
        base_url: API root, always ending with ``/``.
        timeout: Per-request timeout in seconds.
        session_path: JSON file backing the session store.
        shipping_fee: Flat fee used for the payment summary shown before checkout.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    session_path: Path | None = None
    shipping_fee: Decimal = DEFAULT_SHIPPING_FEE

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls) -> ClientConfig:
        raw_timeout = os.getenv("CLOTHING_API_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            timeout = DEFAULT_TIMEOUT

        raw_path = os.getenv("CLOTHING_SESSION_PATH", "").strip()
        return cls(
            base_url=os.getenv("CLOTHING_API_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
            timeout=timeout,
            session_path=Path(raw_path).expanduser() if raw_path else _default_session_path(),
        )
