import asyncio
import logging
from datetime import datetime, timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.db.init_db import create_database, seed_slot_templates
from app.db.base import Base
from app.db.session import engine, SessionLocal
from app.core.config import settings
from app.core.errors import AppError
from app.core.tracing import build_tracer
from app.api.v1.router import api_router

logger = logging.getLogger(__name__)


def materialize_upcoming_slots(db, days_ahead: int) -> int:
    """Materialize daily slots from today through ``days_ahead`` days out."""
    from app.services.slots import SlotService

    slots = SlotService(db, build_tracer("slots"))
    today = datetime.now(slots.tz).date()
    return sum(
        slots.ensure_daily_slots(today + timedelta(days=offset))
        for offset in range(days_ahead + 1)
    )


async def _slot_materialize_loop() -> None:
    """Background task: keep upcoming days' daily slots materialized."""
    while True:
        try:
            db = SessionLocal()
            try:
                count = materialize_upcoming_slots(db, settings.SLOT_PREMATERIALIZE_DAYS)
                if count:
                    logger.info("Pre-materialized %d daily slot(s).", count)
            finally:
                db.close()
        except Exception:
            logger.exception("Error during daily slot materialization.")
        await asyncio.sleep(settings.SLOT_MATERIALIZE_INTERVAL_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists, create tables and sync slot templates
    create_database()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_slot_templates(db)
    finally:
        db.close()

    # Materialize immediately, then keep running in the background
    materialize_task = asyncio.create_task(_slot_materialize_loop())
    yield

    # Shutdown: cancel background task
    materialize_task.cancel()
    try:
        await materialize_task
    except asyncio.CancelledError:
        pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "error_message": message},
        headers=headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        # the cause stays in the logs, the client only gets the generic message
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error(422, message)


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "Residence Cinema"}
