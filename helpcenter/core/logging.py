from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Re-importing the app (tests) must not stack handlers.
    if any(getattr(h, "_helpcenter", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._helpcenter = True  # type: ignore[attr-defined]
    root.addHandler(handler)
