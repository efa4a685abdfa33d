from __future__ import annotations

import socket
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from core.config import Settings, get_settings
from core.logging import get_logger
from api.app import create_app, schedule_startup_analysis

logger = get_logger("api.server")


class PronosticsServer(uvicorn.Server):
    """
    Server uvicorn che lancia l'analisi solo dopo il bind del socket.
    Se il bind fallisce uvicorn termina in startup() e l'analisi non parte.
    """

    def __init__(self, config: uvicorn.Config, app: FastAPI, run_analysis: bool = True) -> None:
        super().__init__(config)
        self.app = app
        self.run_analysis = run_analysis

    async def startup(self, sockets: Optional[List[socket.socket]] = None) -> None:
        await super().startup(sockets=sockets)
        if not self.started or self.should_exit:
            return
        settings: Settings = self.app.state.settings
        logger.info("Server avviato su %s:%s (%s)", self.config.host, self.config.port, settings.app_env)
        if self.run_analysis:
            schedule_startup_analysis(self.app)


def build_server(settings: Settings) -> PronosticsServer:
    # Il lifespan non lancia l'analisi: la lancia il server a bind avvenuto
    app = create_app(settings, run_on_startup=False)
    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
    return PronosticsServer(config, app, run_analysis=settings.run_analysis_on_startup)


def main() -> None:
    load_dotenv()
    settings = get_settings()
    logger.info("Avvio server su %s:%s", settings.host, settings.port)
    build_server(settings).run()


if __name__ == "__main__":
    main()
