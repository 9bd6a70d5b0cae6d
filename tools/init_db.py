from mentorlink.common.database import Database
from mentorlink.common.base import Base
import asyncio
import pkgutil
import importlib
import mentorlink.entity
from sqlalchemy import text
from mentorlink.common.logger import get_logger

logger = get_logger()


def load_all_entities():
    """
    Import every module under mentorlink.entity so that all mapped classes are
    registered on Base.metadata before create_all() runs.
    """
    package = mentorlink.entity
    prefix = package.__name__ + "."

    for _, name, _ in pkgutil.iter_modules(package.__path__, prefix):
        logger.info("Auto importing model: %s", name)
        importlib.import_module(name)


async def reset_database(database_url: str | None = None):
    """
    Drop and recreate every table defined in Base.metadata.

    On PostgreSQL the public schema is dropped and recreated instead, which also
    removes enum types and any leftover objects.
    """
    load_all_entities()

    db = Database(database_url, echo=False)
    engine = db.get_engine()

    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            logger.info("Dropping and recreating public schema...")
            await conn.execute(text("DROP SCHEMA public CASCADE;"))
            await conn.execute(text("CREATE SCHEMA public;"))
        else:
            await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating all tables from Base.metadata...")
        await conn.run_sync(Base.metadata.create_all)

    await db.close()
    logger.info("Database reset complete.")


def main():
    logger.info("Resetting database tables...")
    asyncio.run(reset_database())


if __name__ == "__main__":
    main()
