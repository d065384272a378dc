from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from archexport.api.routes import router
from archexport.config import CORS_ORIGINS, GENERATOR_VERSION
from archexport.logging_config import configure_logging


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="TOGAF Vault Exporter",
        version=GENERATOR_VERSION,
    )

    # Middleware before routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()
