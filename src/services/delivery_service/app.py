from contextlib import asynccontextmanager
from fastapi import FastAPI
from src.services.delivery_service.routes import router
from src.services.delivery_service.dependencies import init_clients, close_clients
from src.infra.database import init_db, close_db, get_db
from src.common.logger import log_info, setup_logging
from src.common.constants import TypeMsg
from src.shared.models.common import HealthStatus
from src.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    await log_info("Starting Delivery Service...", type_msg=TypeMsg.INFO)
    await init_db()
    init_clients()
    yield
    # Shutdown
    await log_info("Shutting down Delivery Service...", type_msg=TypeMsg.INFO)
    await close_clients()
    await close_db()

app = FastAPI(
    title="Delivery Service",
    description="Microservice for delivery lifecycle and delivery cost calculation",
    version=settings.system.VERSION,
    lifespan=lifespan
)

app.include_router(router, prefix="/api/v1")


@app.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    postgres_ok = await get_db().health_check()
    return HealthStatus(
        service="delivery_service",
        status="healthy" if postgres_ok else "degraded",
        version=settings.system.VERSION,
        dependencies={"postgres": "healthy" if postgres_ok else "unhealthy"},
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.services.delivery_service.app:app",
        host="0.0.0.0",
        port=settings.deployment.DELIVERY_SERVICE_PORT,
        reload=True
    )
