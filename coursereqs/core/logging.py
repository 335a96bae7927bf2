import logging

from coursereqs.core.config import settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    """
    Install a single stream handler on the root logger. Safe to call more
    than once (uvicorn reloads, tests).
    """
    global _configured
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.log_format))
    root.addHandler(handler)
    _configured = True
