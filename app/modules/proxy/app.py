from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging import get_module_logger
from modules.proxy.router import router

logger = get_module_logger()


def create_app() -> FastAPI:
    """Build the translation proxy application.

    Serve with any ASGI server, e.g. ``uvicorn modules.proxy.app:handler``.
    """
    app = FastAPI(title="Tradux Translation Proxy")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(router)
    logger.info("proxy_app_created")
    return app


handler = create_app()
