from __future__ import annotations

import logging
import signal
import sys

from cruiser.config import log_level_from_env, web_config_from_env
from cruiser.hardware.outputs import get_pin_specs
from cruiser.hardware.registry import PinRegistry, PinSetupError
from cruiser.web.app import create_app

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stdout with timestamps."""
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)


def open_registry() -> PinRegistry:
    """
    Open every configured pin or exit. Serving with half the wiring resolved
    is never attempted.
    """
    try:
        return PinRegistry().initialize(get_pin_specs())
    except (PinSetupError, ValueError) as e:
        logger.critical("GPIO setup failed: %s", e)
        sys.exit(1)


def install_signal_handlers(registry: PinRegistry) -> None:
    def _shutdown(signum, frame):
        logger.info("Received %s, releasing GPIO lines", signal.Signals(signum).name)
        registry.close()
        sys.exit(0)

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)


def main() -> None:
    setup_logging(log_level_from_env())
    cfg = web_config_from_env()

    registry = open_registry()
    install_signal_handlers(registry)
    app = create_app(registry)

    logger.info("Server running at %s:%d...", cfg.host, cfg.port)
    try:
        # The reloader would fork a second process fighting over the same lines.
        app.run(host=cfg.host, port=cfg.port, debug=cfg.debug, use_reloader=False)
    finally:
        registry.close()


if __name__ == "__main__":
    main()
