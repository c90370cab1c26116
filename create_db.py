# create_db.py
"""
Создаёт базу settings.database.DB_NAME, если её ещё нет.
Таблицы создают сами сервисы при старте (migrations/init.sql).

    python create_db.py
"""

import asyncio
import sys

import asyncpg

from src.config import settings


async def ensure_database() -> bool:
    """True, если база была создана этим вызовом."""
    db = settings.database
    conn = await asyncpg.connect(
        host=db.DB_HOST,
        port=db.DB_PORT,
        user=db.DB_USER,
        password=db.DB_PASSWORD,
        database="postgres",
    )
    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db.DB_NAME):
            return False
        # CREATE DATABASE не принимает параметры, имя экранируем кавычками
        quoted = '"' + db.DB_NAME.replace('"', '""') + '"'
        await conn.execute(f"CREATE DATABASE {quoted}")
        return True
    finally:
        await conn.close()


def main() -> int:
    try:
        created = asyncio.run(ensure_database())
    except (OSError, asyncpg.PostgresError) as e:
        print(f"Не удалось подготовить базу {settings.database.DB_NAME}: {e}", file=sys.stderr)
        return 1

    print(f"База {settings.database.DB_NAME} {'создана' if created else 'уже существует'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
