import argparse
import asyncio
import logging
import sys

from backend.app.core.logging import setup_logging
from backend.app.db.base import Base, engine
# Import models so Base.metadata knows every table
from backend.app import models  # noqa: F401

logger = logging.getLogger(__name__)


async def init_models(reset: bool = False):
    try:
        async with engine.begin() as conn:
            if reset:
                # DEV MODE ONLY: wipes every vote and account
                logger.warning("Dropping all tables")
                await conn.run_sync(Base.metadata.drop_all)

            logger.info("Creating tables: %s", ", ".join(Base.metadata.tables))
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Tables created")
    except Exception:
        logger.exception("Database initialisation failed")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the database tables.")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()

    setup_logging()
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(init_models(reset=args.reset))
