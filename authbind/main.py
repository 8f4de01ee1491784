from __future__ import annotations

import logging

from authbind.config import EngineConfig
from authbind.core.engine import Authorization, NavigatorSupplier
from authbind.logging_config import configure_app_logging
from authbind.session import SessionInitNotifier
from authbind.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_authorization(
    notifier: SessionInitNotifier,
    navigator_supplier: NavigatorSupplier | None = None,
    settings: Settings | None = None,
) -> Authorization:
    """
    Build an ``Authorization`` from process settings.

    Configures logging, loads the engine YAML (if ``AUTHBIND_CONFIG_PATH`` is
    set) and wires the result to ``notifier``. The caller still has to call
    ``start()``.
    """

    settings = settings or get_settings()
    configure_app_logging(settings.log_level)

    config = EngineConfig.from_settings(settings)
    logger.info("Loaded engine config path=%s", settings.resolved_config_path())
    return Authorization(notifier, navigator_supplier=navigator_supplier, config=config)
