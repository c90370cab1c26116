from contextlib import asynccontextmanager
from fastapi import FastAPI
from src.services.warehouse_service.routes import router
from src.services.warehouse_service.dependencies import init_warehouse_address
from src.infra.database import init_db, close_db, get_db
from src.common.logger import log_info, setup_logging
from src.common.constants import TypeMsg
from src.shared.models.common import HealthStatus
from src.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    await log_info("Starting Warehouse Service...", type_msg=TypeMsg.INFO)
    await init_db()
    address = init_warehouse_address()
    await log_info(f"Warehouse address: {address.city}", type_msg=TypeMsg.INFO)
    yield
    # Shutdown
    await log_info("Shutting down Warehouse Service...", type_msg=TypeMsg.INFO)
    await close_db()

app = FastAPI(
    title="Warehouse Service",
    description="Microservice for warehouse stock and address lookup",
    version=settings.system.VERSION,
    lifespan=lifespan
)

app.include_router(router, prefix="/api/v1")


@app.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    postgres_ok = await get_db().health_check()
    return HealthStatus(
        service="warehouse_service",
        status="healthy" if postgres_ok else "degraded",
        version=settings.system.VERSION,
        dependencies={"postgres": "healthy" if postgres_ok else "unhealthy"},
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.services.warehouse_service.app:app",
        host="0.0.0.0",
        port=settings.deployment.WAREHOUSE_SERVICE_PORT,
        reload=True
    )
