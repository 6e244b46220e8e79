import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.router import api_router
from app.config import settings
from app.database import async_session, engine, init_models
from app.exceptions import InvalidStateError, NotFoundError, PortfolioError, ValidationFailure
from app.services.seed import seed_defaults

logger = logging.getLogger("uvicorn.error")
logging.getLogger("app").setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    if settings.DATABASE_URL.startswith("sqlite"):
        Path("data").mkdir(exist_ok=True)
        logger.info("Directory ensured: data/")

    await init_models(engine)
    logger.info("Database tables ensured (create_all)")

    if settings.SEED_ON_STARTUP:
        await seed_defaults(async_session)

    yield

    # --- Shutdown ---
    await engine.dispose()


app = FastAPI(
    title="Photography Portfolio API",
    version="0.1.0",
    lifespan=lifespan,
)

allowed_origins = [settings.FRONTEND_URL]
if settings.APP_ENV != "development":
    allowed_origins.append("*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        if response.status_code >= 400:
            logger.warning(f"{request.method} {request.url.path} → {response.status_code}")
        return response
    except Exception as exc:
        logger.exception(f"{request.method} {request.url.path} → Exception: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


_ERROR_STATUS = {
    NotFoundError: 404,
    InvalidStateError: 409,
    ValidationFailure: 400,
}


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    status_code = _ERROR_STATUS.get(type(exc), 500)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.include_router(api_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Photography portfolio backend is running"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)
