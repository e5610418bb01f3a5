"""
Process-wide logging setup. Modules log through `logging.getLogger(__name__)`.
"""
import logging
import sys

from wellness.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "wellness-stdout"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
