"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
import pandas as pd
from pathlib import Path
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import Settings
from core.database import create_engine, create_session_maker
from ingestion.extractors.directory_extractor import (
    APPROVAL_LOGOS_DIR,
    CLIENT_LOGOS_DIR,
    PROJECTS_DIR,
)
from models.base import Base

PRODUCT_ROWS = [
    {
        "Category": "Admixtures",
        "Product Name": "Polyflex SP 430",
        "Description": "High range water reducing admixture",
        "Uses": "Ready mix concrete\nPrecast elements",
        "Advantages": "Improves workability\nReduces water demand",
        "Technical Details": "Brown liquid, SG 1.18",
    },
    {
        "Category": "Grouts",
        "Product Name": "Yahska Grout GP",
        "Description": "Non-shrink cementitious grout",
        "Uses": "Machine foundations",
        "Advantages": "Free flowing",
        "Technical Details": "Grey powder",
    },
    {
        "Category": "Curing Compound",
        "Product Name": "Curemax WB",
        "Description": "Wax based curing compound",
        "Uses": "",
        "Advantages": "",
        "Technical Details": "",
    },
    # Layout debris exported with the catalogue
    {
        "Category": "For Letterhead & Business Cards::",
        "Product Name": "Yahska Polymers",
        "Description": "Ahmedabad",
        "Uses": "",
        "Advantages": "",
        "Technical Details": "",
    },
]

SOURCE_FILES = {
    f"{PROJECTS_DIR}/Metro Rail/1. Ahmedabad Station.jpg": b"metro-photo",
    f"{PROJECTS_DIR}/Metro Rail/2. Surat Depot.jpg": b"metro-photo-2",
    f"{PROJECTS_DIR}/Road Projects/1. Ring Road - Surat.png": b"road-photo",
    f"{PROJECTS_DIR}/Bullet/1. Sabarmati Terminal.jpg": b"bullet-photo",
    f"{CLIENT_LOGOS_DIR}/Tata Projects.png": b"tata-logo",
    f"{CLIENT_LOGOS_DIR}/L&T Construction.jpg": b"lt-logo",
    f"{CLIENT_LOGOS_DIR}/Notes.txt": b"not a logo",
    f"{APPROVAL_LOGOS_DIR}/GMRC.svg": b"<svg/>",
    f"{APPROVAL_LOGOS_DIR}/BMC.png": b"bmc-logo",
}


def build_source_docs(root: Path) -> Path:
    """Lay out a small legacy documents folder under root"""
    root.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(PRODUCT_ROWS).to_csv(root / "products.csv", index=False)

    for relative, content in SOURCE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    return root


@pytest.fixture
def source_docs(tmp_path) -> Path:
    """Legacy documents folder with products, photos and logos"""
    return build_source_docs(tmp_path / "client_documentation")


@pytest.fixture
def test_settings(tmp_path, source_docs) -> Settings:
    """Settings pointing every location at the test's temp dir"""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}",
        SOURCE_DOCS_PATH=str(source_docs),
        PUBLIC_PATH=str(tmp_path / "public"),
        BACKUP_PATH=str(tmp_path / "backups"),
        REPORT_PATH=str(tmp_path / "migration-reports"),
        LOG_PATH=str(tmp_path / "migration-logs"),
        PRODUCT_WORKBOOKS=["products.csv"],
    )


@pytest_asyncio.fixture(scope="function")
async def test_engine(test_settings):
    """Create test database engine"""
    engine = create_engine(test_settings.DATABASE_URL)

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with create_session_maker(test_engine)() as session:
        yield session
        await session.rollback()


@pytest.fixture
def product_rows():
    """Catalogue rows as they appear in the workbooks, layout debris included"""
    return [dict(row) for row in PRODUCT_ROWS]
