"""Main server application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from edfview.core.config import get_settings
from edfview.core.logging import configure_logging
from edfview.routes import router as api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and report the data directory on startup."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    logger.info(
        "Viewer configured with host={}, port={}, data_dir={}",
        settings.host,
        settings.port,
        settings.data_dir,
    )
    yield
    logger.info("Viewer shutting down")


def create_app() -> FastAPI:
    app = FastAPI(title="edfview", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


def main():
    """Run the viewer API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("edfview.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
