"""Configuration settings loaded from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("solarclock.config")


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    # Great-circle discretisation: 15.00 +/- 0.01 km average spacing
    route_spacing_km: float = float(os.getenv("SOLARCLOCK_ROUTE_SPACING_KM", "15.0"))
    route_tolerance_km: float = float(os.getenv("SOLARCLOCK_ROUTE_TOLERANCE_KM", "0.01"))

    log_level: str = os.getenv("SOLARCLOCK_LOG_LEVEL", "INFO")
    lang: str = os.getenv("SOLARCLOCK_LANG", "en")
    results_dir: str = os.getenv("SOLARCLOCK_RESULTS_DIR", "results")

    # Airport lookup
    nominatim_url: str = os.getenv(
        "SOLARCLOCK_NOMINATIM_URL", "https://nominatim.openstreetmap.org/search"
    )
    http_timeout: float = float(os.getenv("SOLARCLOCK_HTTP_TIMEOUT", "10"))


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level. Called by entry points only."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level or settings.log_level)


__all__ = ["settings", "Settings", "configure_logging"]
