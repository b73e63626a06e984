import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from studio_pos.api.v1.routes_customers import router as customers_router
from studio_pos.api.v1.routes_maintenance import router as maintenance_router
from studio_pos.api.v1.routes_pos import router as pos_router
from studio_pos.api.v1.routes_transactions import router as transactions_router
from studio_pos.core.config import settings
from studio_pos.core.errors import PosError
from studio_pos.core.logging import configure_logging
from studio_pos.db.base import init_models
from studio_pos.domain.pos.session import SessionRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.AUTO_CREATE_TABLES:
        await init_models()
    logger.info("Studio POS started (env=%s)", settings.APP_ENV)
    yield
    await app.state.billing_sessions.close_all()


app = FastAPI(title="Studio POS", lifespan=lifespan)
app.state.billing_sessions = SessionRegistry()

app.include_router(pos_router)
app.include_router(customers_router)
app.include_router(transactions_router)
app.include_router(maintenance_router)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""


@app.exception_handler(PosError)
async def _pos_error(_req: Request, exc: PosError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def _request_validation_error(_req: Request, exc: RequestValidationError):
    content = {"detail": "validation failed"}
    if settings.APP_ENV in {"local", "dev"}:
        content["errors"] = jsonable_errors(exc)
    return JSONResponse(status_code=422, content=content)


@app.exception_handler(Exception)
async def _unhandled_exception(req: Request, exc: Exception):
    rid = _request_id(req)
    logger.error("Unhandled error on %s %s (request %s)", req.method, req.url.path, rid, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "internal error", "request_id": rid})


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


# Correlation id + request logging.
@app.middleware("http")
async def _request_logging(request: Request, call_next):
    rid = (request.headers.get("X-Request-Id") or "").strip() or uuid.uuid4().hex
    request.state.request_id = rid
    started = time.time()

    response = await call_next(request)

    response.headers["X-Request-Id"] = rid
    if request.url.path != "/health":
        logger.info(
            "%s %s -> %s in %dms (request %s)",
            request.method, request.url.path, response.status_code,
            int((time.time() - started) * 1000), rid,
        )
    return response


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("studio_pos.main:app", host="0.0.0.0", port=8000)
