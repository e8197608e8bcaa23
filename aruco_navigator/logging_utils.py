import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(device)s] %(message)s"


class DeviceTagFilter(logging.Filter):
    """Stamp every record with the capture device it came from."""

    def __init__(self, device: str):
        super().__init__()
        self.device = device

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "device"):
            record.device = self.device
        return True


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logger(device: str, level: int | str = logging.INFO) -> logging.Logger:
    """Logger for one navigator session, named after its device.

    Calling it again for the same device only updates the level.
    """
    logger = logging.getLogger(f"aruco_navigator.{device}")
    logger.setLevel(resolve_level(level))

    if not any(isinstance(f, DeviceTagFilter) for h in logger.handlers for f in h.filters):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(DeviceTagFilter(device))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
