"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    log_level: str = "INFO"
    log_json: bool = True
    currency: str = "INR"
    gateway_base_url: str = "https://api.razorpay.com"
    gateway_key_id: str | None = None
    gateway_key_secret: str | None = None
    gateway_timeout_secs: float = 10.0

    @staticmethod
    def from_env() -> AppConfig:
        return AppConfig(
            data_dir=Path(os.getenv("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool("STOREFRONT_LOG_JSON", True),
            currency=os.getenv("STOREFRONT_CURRENCY", "INR"),
            gateway_base_url=os.getenv("GATEWAY_BASE_URL", "https://api.razorpay.com"),
            gateway_key_id=os.getenv("GATEWAY_KEY_ID") or None,
            gateway_key_secret=os.getenv("GATEWAY_KEY_SECRET") or None,
            gateway_timeout_secs=float(os.getenv("GATEWAY_TIMEOUT_SECS", "10")),
        )
