# src/services/collector/app.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.common.constants import TypeMsg
from src.common.exceptions import UnrecognizedEventTypeError
from src.common.logger import log_info, log_warning, setup_logging
from src.config import settings
from src.infra.event_bus import close_event_bus, get_event_bus, init_event_bus
from src.services.collector.routes import router
from src.shared.models.common import ErrorMessage, HealthStatus
from src.shared.models.telemetry import HubEventType, SensorEventType


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    await log_info("Starting Collector...", type_msg=TypeMsg.INFO)
    await init_event_bus()
    yield
    # Shutdown
    await log_info("Shutting down Collector...", type_msg=TypeMsg.INFO)
    await close_event_bus()

app = FastAPI(
    title="Telemetry Collector",
    description="Accepts sensor and hub events and forwards them to the broker",
    version=settings.system.VERSION,
    lifespan=lifespan
)

app.include_router(router)


# Теги вариантов union: pydantic ставит их в loc сразу после "body"
_EVENT_TAGS = frozenset(t.value for t in (*SensorEventType, *HubEventType))


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc[:1] == ["body"]:
            loc = loc[1:]
        if loc[:1] and loc[0] in _EVENT_TAGS:
            loc = loc[1:]
        loc = [str(p) for p in loc]
        parts.append(f"{'.'.join(loc) or 'body'} {error.get('msg', '')}".strip())
    return "; ".join(parts)


def _error_response(message: str, details: str | None) -> JSONResponse:
    body = ErrorMessage(status=status.HTTP_400_BAD_REQUEST, message=message, details=details)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=jsonable_encoder(body))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _format_validation_errors(exc)
    await log_warning(f"Ошибка валидации запроса {request.url.path}: {details}")
    return _error_response("Validation failed", details)


@app.exception_handler(UnrecognizedEventTypeError)
async def unrecognized_event_handler(request: Request, exc: UnrecognizedEventTypeError) -> JSONResponse:
    await log_warning(str(exc))
    return _error_response(str(exc), None)


@app.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    broker_ok = await get_event_bus().health_check()
    return HealthStatus(
        service="collector",
        status="healthy" if broker_ok else "degraded",
        version=settings.system.VERSION,
        dependencies={"rabbitmq": "healthy" if broker_ok else "unhealthy"},
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.services.collector.app:app",
        host="0.0.0.0",
        port=settings.deployment.COLLECTOR_PORT,
        reload=True
    )
