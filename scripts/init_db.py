import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import create_engine, create_session_maker
from ingestion.extractors.template_extractor import TemplateExtractor
from ingestion.loaders.sql_loader import InsertSpec, SQLLoader
from ingestion.transformers.normalizer import RecordNormalizer
from models import Base, ProductCategory, ProjectCategory

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def init_database(database_url: str = None):
    logger.info("Connecting to database...")
    engine = create_engine(database_url or settings.DATABASE_URL)

    try:
        async with engine.begin() as conn:
            logger.info("Creating tables...")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Tables created successfully.")

        normalizer = RecordNormalizer()
        templates = TemplateExtractor()
        async with create_session_maker(engine)() as session:
            loader = SQLLoader(session)
            product_categories, _ = normalizer.normalize_many(
                templates.product_categories(), normalizer.product_category
            )
            project_categories, _ = normalizer.normalize_many(
                templates.project_categories(), normalizer.project_category
            )
            await loader.load_batch(product_categories, InsertSpec(ProductCategory, ["id"]))
            await loader.load_batch(project_categories, InsertSpec(ProjectCategory, ["id"]))
        logger.info("Default categories seeded.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_database())
