import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    # idempotent: uvicorn reload and tests may call this more than once
    if any(getattr(h, "_portal_handler", False) for h in root.handlers):
        root.setLevel(level.upper())
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._portal_handler = True
    root.addHandler(handler)
    root.setLevel(level.upper())
