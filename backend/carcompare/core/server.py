from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI

from backend.carcompare.core.logging import get_logger, setup_logging
from backend.carcompare.core.settings import Settings, settings as default_settings

logger = get_logger(__name__)


class ApiServer:
    """uvicorn server bound to the configured host and port.

    ``run()`` blocks until SIGINT/SIGTERM (handled by uvicorn) or ``stop()``.
    """

    def __init__(self, settings: Optional[Settings] = None, app: Optional[FastAPI] = None):
        self.settings = settings or default_settings
        if app is None:
            from backend.carcompare.api.main import create_app

            app = create_app(self.settings)
        self.app = app
        self.config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_config=None,
        )
        self._server = uvicorn.Server(self.config)

    @property
    def url(self) -> str:
        return f"http://{self.settings.host}:{self.settings.port}"

    def run(self) -> None:
        logger.info(f"API läuft auf {self.url}", extra={"host": self.settings.host, "port": self.settings.port})
        self._server.run()

    def stop(self) -> None:
        self._server.should_exit = True


def main() -> None:
    setup_logging(default_settings.log_level, default_settings.log_format)
    ApiServer(default_settings).run()


if __name__ == "__main__":
    main()
