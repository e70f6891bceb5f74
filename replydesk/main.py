from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .database import init_db
from .logging_config import configure_logging, create_request_context_middleware
from .middleware.error_handler import (
    ErrorHandlingMiddleware,
    RateLimitMiddleware,
    APIKeyValidationMiddleware,
)
from .routers import (
    ask_ai,
    auth,
    diagnostics,
    document,
    editor,
    faq,
    headlines,
    health,
    onemap,
    preferences,
    records,
    status,
    summary,
)

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("ReplyDesk API started")
    yield


app = FastAPI(title="ReplyDesk API", version=__version__, lifespan=lifespan, debug=settings.debug_mode)

# Error handler first so it sits closest to the routes
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(APIKeyValidationMiddleware)
app.add_middleware(RateLimitMiddleware, max_requests=settings.ask_ai_daily_limit)
create_request_context_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router)
app.include_router(records.router)
app.include_router(status.router)
app.include_router(editor.router)
app.include_router(document.router)
app.include_router(summary.router)
app.include_router(headlines.router)
app.include_router(ask_ai.router)
app.include_router(faq.router)
app.include_router(diagnostics.router)
app.include_router(preferences.router)
app.include_router(onemap.router)


@app.get("/")
async def root():
    return {"message": "ReplyDesk API", "version": __version__}


def run():
    import uvicorn

    uvicorn.run("replydesk.main:app", host="0.0.0.0", port=8002)


if __name__ == "__main__":
    run()
