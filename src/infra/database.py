# src/infra/database.py
"""
Пул соединений PostgreSQL для delivery_service и warehouse_service.

Репозитории берут соединение через acquire() (чтение) или работают
внутри transaction(), которую открывает сервисный слой.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from functools import wraps
from pathlib import Path
from typing import Any, AsyncGenerator, Awaitable, Callable, TypeVar

import asyncpg
from asyncpg import Connection, Pool

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresConnectionError,
    asyncpg.InterfaceError,
    ConnectionRefusedError,
    OSError,
)

# Ключ advisory-лока, под которым применяется migrations/init.sql
SCHEMA_LOCK_ID = 802311


def retry_on_connection_error(
    max_attempts: int | None = None,
    delay: float | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Повторяет корутину при сетевых ошибках PostgreSQL.

    Без аргументов берёт DB_RETRY_ATTEMPTS / DB_RETRY_DELAY из конфига.
    Пауза удваивается после каждой неудачной попытки.
    Остальные исключения (SQL, домен) пробрасываются сразу.
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempts, pause = _retry_policy(max_attempts, delay)

            attempt = 1
            while True:
                try:
                    return await func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    if attempt >= attempts:
                        await log_error(f"{func.__name__}: PostgreSQL недоступен после {attempts} попыток: {e}")
                        raise
                    await log_info(
                        f"{func.__name__}: ошибка соединения с PostgreSQL ({attempt}/{attempts}), "
                        f"повтор через {pause:.2f} c: {e}",
                        type_msg=TypeMsg.WARNING,
                    )
                    await asyncio.sleep(pause)
                    pause *= 2
                    attempt += 1

        return wrapper

    return decorator


def _retry_policy(max_attempts: int | None, delay: float | None) -> tuple[int, float]:
    if max_attempts is not None and delay is not None:
        return max_attempts, delay
    from src.config import settings

    return (
        max_attempts if max_attempts is not None else settings.database.DB_RETRY_ATTEMPTS,
        delay if delay is not None else settings.database.DB_RETRY_DELAY,
    )


class DatabaseManager:
    """Один asyncpg-пул на процесс (singleton)."""

    _instance: DatabaseManager | None = None
    _pool: Pool | None = None

    def __new__(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._pool = None

    @property
    def pool(self) -> Pool:
        if self._pool is None:
            raise RuntimeError("Пул соединений не инициализирован. Вызовите connect() сначала.")
        return self._pool

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @retry_on_connection_error()
    async def connect(self, dsn: str | None = None, **pool_options: Any) -> None:
        """
        Создаёт пул. Повторный вызов ничего не делает.

        Args:
            dsn: строка подключения; по умолчанию settings.database.dsn
            pool_options: min_size, max_size, command_timeout для asyncpg.create_pool
        """
        if self._pool is not None:
            return

        if dsn is None:
            from src.config import settings

            dsn = settings.database.dsn
            pool_options.setdefault("min_size", settings.database.DB_MIN_POOL_SIZE)
            pool_options.setdefault("max_size", settings.database.DB_MAX_POOL_SIZE)
            pool_options.setdefault("command_timeout", settings.database.DB_COMMAND_TIMEOUT)

        self._pool = await asyncpg.create_pool(dsn=dsn, **pool_options)
        await log_info("Пул соединений PostgreSQL создан", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None
        await log_info("Пул соединений PostgreSQL закрыт", type_msg=TypeMsg.INFO)

    @asynccontextmanager
    async def acquire(self) -> AsyncGenerator[Connection, None]:
        """Соединение из пула на время блока, без транзакции."""
        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(
        self,
        isolation: str = "read_committed",
        readonly: bool = False,
    ) -> AsyncGenerator[Connection, None]:
        """
        Явная граница транзакции.

        BEGIN на входе, COMMIT при нормальном выходе из блока,
        ROLLBACK если блок завершился исключением (исключение пробрасывается).

        Example:
            async with db.transaction() as conn:
                row = await repo.get_delivery_by_id(delivery_id, conn=conn, for_update=True)
                await repo.update_delivery_state(delivery_id, state, conn=conn)
        """
        async with self.pool.acquire() as connection:
            async with connection.transaction(isolation=isolation, readonly=readonly):
                yield connection

    async def health_check(self) -> bool:
        try:
            async with self.acquire() as connection:
                return await connection.fetchval("SELECT 1") == 1
        except (RuntimeError, asyncpg.PostgresError, *RETRYABLE_ERRORS) as e:
            await log_error(f"Health check PostgreSQL failed: {e}")
            return False


_db_manager: DatabaseManager | None = None


def get_db() -> DatabaseManager:
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def init_db() -> None:
    """Подключается к БД из конфигурации и применяет migrations/init.sql."""
    from src.config import settings
    from src.config.loader import get_project_root

    db = get_db()
    await db.connect()
    await log_info(
        f"PostgreSQL подключён: {settings.database.DB_HOST}:{settings.database.DB_PORT}/{settings.database.DB_NAME}",
        type_msg=TypeMsg.INFO,
    )
    await apply_schema(db, get_project_root() / "migrations" / "init.sql")


async def apply_schema(db: DatabaseManager, schema_path: Path) -> None:
    """
    Выполняет SQL-скрипт схемы под advisory-локом.
    Сервисы стартуют параллельно на одной БД, лок сериализует CREATE ... IF NOT EXISTS.
    """
    if not schema_path.exists():
        raise FileNotFoundError(f"Файл схемы БД не найден: {schema_path}")

    schema_sql = schema_path.read_text(encoding="utf-8")

    async with db.transaction() as conn:
        await conn.execute(f"SELECT pg_advisory_xact_lock({SCHEMA_LOCK_ID})")
        await conn.execute(schema_sql)

    await log_info(f"Схема БД применена: {schema_path.name}", type_msg=TypeMsg.INFO)


async def close_db() -> None:
    await get_db().disconnect()
