"""
Runtime configuration read from the environment.

AppSettings.from_env() is called once by the composition root, after its
load_dotenv() has merged a local .env file into os.environ; everything
downstream receives plain values, never os.environ.
"""

import os
from dataclasses import dataclass
from typing import Optional

from src.infrastructure.payments.x402_gate import USDC_ON_BASE


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppSettings:
    agent_name: str = "calendar-context-agent"
    agent_version: str = "1.0.0"
    agent_description: str = (
        "Date context for AI agents — holidays, historical events, notable births. "
        "Know what day it is."
    )
    holidays_api_url: str = "https://date.nager.at/api/v3"
    on_this_day_api_url: str = "https://en.wikipedia.org/api/rest_v1/feed/onthisday"
    user_agent: str = "calendar-context-agent/1.0.0"
    upstream_timeout: float = 10.0
    slow_upstream_timeout: float = 15.0
    public_base_url: Optional[str] = None
    icon_path: str = "icon.png"
    payments_receivable_address: Optional[str] = None
    payments_facilitator_url: str = "https://facilitator.daydreams.systems"
    payments_network: str = "base"
    payments_asset: str = USDC_ON_BASE
    analytics_enabled: bool = True
    log_level: str = "INFO"
    port: int = 8000

    @property
    def payments_enabled(self) -> bool:
        return bool(self.payments_receivable_address)

    @classmethod
    def from_env(cls) -> "AppSettings":
        defaults = cls()

        public_domain = os.environ.get("PUBLIC_DOMAIN")
        public_base_url = (
            f"https://{public_domain}" if public_domain else os.environ.get("PUBLIC_BASE_URL")
        )
        return cls(
            agent_name=os.environ.get("AGENT_NAME", defaults.agent_name),
            agent_version=os.environ.get("AGENT_VERSION", defaults.agent_version),
            holidays_api_url=os.environ.get("HOLIDAYS_API_URL", defaults.holidays_api_url),
            on_this_day_api_url=os.environ.get("ON_THIS_DAY_API_URL", defaults.on_this_day_api_url),
            user_agent=os.environ.get("HTTP_USER_AGENT", defaults.user_agent),
            upstream_timeout=float(
                os.environ.get("UPSTREAM_TIMEOUT_SECONDS", defaults.upstream_timeout)
            ),
            slow_upstream_timeout=float(
                os.environ.get("SLOW_UPSTREAM_TIMEOUT_SECONDS", defaults.slow_upstream_timeout)
            ),
            public_base_url=public_base_url.rstrip("/") if public_base_url else None,
            icon_path=os.environ.get("ICON_PATH", defaults.icon_path),
            payments_receivable_address=os.environ.get("PAYMENTS_RECEIVABLE_ADDRESS") or None,
            payments_facilitator_url=os.environ.get(
                "PAYMENTS_FACILITATOR_URL", defaults.payments_facilitator_url
            ),
            payments_network=os.environ.get("PAYMENTS_NETWORK", defaults.payments_network),
            payments_asset=os.environ.get("PAYMENTS_ASSET", defaults.payments_asset),
            analytics_enabled=_env_bool("ANALYTICS_ENABLED", defaults.analytics_enabled),
            log_level=os.environ.get("LOG_LEVEL", defaults.log_level).upper(),
            port=int(os.environ.get("PORT", defaults.port)),
        )
