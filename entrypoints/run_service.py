#!/usr/bin/env python3
# entrypoints/run_service.py
"""
Запуск одного микросервиса под uvicorn.

Usage:
    python entrypoints/run_service.py delivery_service
    python entrypoints/run_service.py warehouse_service
    python entrypoints/run_service.py collector

SERVICE_NAME выставляется до импорта конфига: по нему логгер
подписывает JSON-записи и выбирает файл logs/app_<service>.log.
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

# service -> (ASGI-приложение, поле порта в settings.deployment)
SERVICES: dict[str, tuple[str, str]] = {
    "delivery_service": ("src.services.delivery_service.app:app", "DELIVERY_SERVICE_PORT"),
    "warehouse_service": ("src.services.warehouse_service.app:app", "WAREHOUSE_SERVICE_PORT"),
    "collector": ("src.services.collector.app:app", "COLLECTOR_PORT"),
}


async def serve(service: str) -> None:
    import uvicorn

    from src.common.constants import TypeMsg
    from src.common.logger import log_info
    from src.config import settings

    app_path, port_field = SERVICES[service]
    port = getattr(settings.deployment, port_field)

    await log_info(f"Запуск {service} на порту {port}", type_msg=TypeMsg.INFO)

    server = uvicorn.Server(
        uvicorn.Config(
            app_path,
            host="0.0.0.0",
            port=port,
            log_level="debug" if settings.system.DEBUG else "info",
        )
    )
    await server.serve()


def main() -> None:
    parser = argparse.ArgumentParser(description="Commerce service runner")
    parser.add_argument("service", choices=sorted(SERVICES))
    args = parser.parse_args()

    os.environ.setdefault("SERVICE_NAME", args.service)
    asyncio.run(serve(args.service))


if __name__ == "__main__":
    main()
