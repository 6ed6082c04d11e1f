"""Process-wide logging setup."""

import logging

_CONFIGURED = False


def configure_logging(level_name: str = "INFO") -> int:
    """Configure root logging once and return the numeric level applied."""
    global _CONFIGURED
    level = getattr(logging, level_name.upper(), logging.INFO)
    if not _CONFIGURED:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        _CONFIGURED = True
    logging.getLogger("admin_core").setLevel(level)
    return level
