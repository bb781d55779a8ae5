from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.deps import get_history_store
from app.core.logger import get_logger
from app.routers.admin import router as admin_router
from app.routers.history import router as history_router
from app.routers.scraper import router as scraper_router
from app.routers.verification import router as verification_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the history database so schema problems surface at boot."""
    if settings.HISTORY_ENABLED:
        try:
            get_history_store()
            logger.info(f"[Main] History store ready at {settings.HISTORY_DB_PATH}")
        except Exception as e:
            # Verification keeps working without history
            logger.error(f"[Main] Failed to initialize history store: {e}")
    else:
        logger.info("[Main] History disabled")

    yield
    logger.info("[Main] Content Verifier Service shutting down")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse({"error": message}, status_code=400)


app = FastAPI(title="Content Verifier Service", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Include routers
app.include_router(verification_router)
app.include_router(scraper_router)
app.include_router(history_router)
app.include_router(admin_router)

logger.info("Content Verifier Service initialized")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
