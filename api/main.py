from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from comments import router as comments_router
from core.db import Database
from core.errors import register_exception_handlers
from core.logging import configure_logging
from core.settings import Settings, cors_allow_origins
from projects import router as projects_router


def create_app(database: Database | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One pool per process; a failed probe is logged, startup continues.
        db = database
        if db is None:
            settings = Settings.from_env()
            configure_logging(settings.log_level)
            db = Database(settings)
        await db.connect()
        await db.check_connection()
        app.state.db = db
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(title="portfolio-api", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(projects_router.router, tags=["projects"])
    app.include_router(comments_router.router, tags=["comments"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


load_dotenv()
app = create_app()


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
