"""
Unit tests for the post-load validator
"""

import pytest
from ingestion.validator import DataValidator, REQUIRED_PAGES
from models import MediaFile, Product, ProductCategory, SeoSettings, SiteContent
from schemas.report import Severity


async def seed_pages(session):
    """Content and SEO rows for every required page"""
    for page in REQUIRED_PAGES:
        session.add(SiteContent(page=page, section="intro", content_key="content", content_value=f"{page} intro"))
        session.add(SeoSettings(
            page=page,
            title="A page title that is comfortably long enough",
            description="d" * 140,
            keywords="one, two, three",
        ))
    await session.commit()


def add_product(session, name, category_id="construction", applications="[]"):
    product = Product(
        name=name,
        description=f"{name} description",
        category_id=category_id,
        applications=applications,
        features="[]",
        is_active=True,
    )
    session.add(product)
    return product


class TestDataValidator:
    """Test validation checks"""

    @pytest.mark.asyncio
    async def test_clean_database_passes(self, db_session, test_settings):
        await seed_pages(db_session)

        report = await DataValidator(test_settings).validate(db_session)

        assert report.passed
        assert report.error_count == 0
        assert all(report.checks.values())
        assert report.record_counts["site_content"] == len(REQUIRED_PAGES)

    @pytest.mark.asyncio
    async def test_missing_pages_are_errors(self, db_session, test_settings):
        report = await DataValidator(test_settings).validate(db_session)

        assert not report.passed
        content_issues = report.issues_for("content")
        assert len(content_issues) == len(REQUIRED_PAGES)
        assert not report.checks["content"]
        assert not report.checks["seo"]

    @pytest.mark.asyncio
    async def test_orphan_product_yields_one_issue_naming_it(self, db_session, test_settings):
        await seed_pages(db_session)
        db_session.add(ProductCategory(id="construction", name="Construction Chemicals", sort_order=1))
        add_product(db_session, "Grout GP")
        orphan = add_product(db_session, "Mystery Mix", category_id="nonexistent")
        await db_session.commit()

        report = await DataValidator(test_settings).validate(db_session)

        fk_issues = report.issues_for("foreign_keys")
        assert len(fk_issues) == 1
        assert fk_issues[0].entity == "products"
        assert fk_issues[0].entity_id == str(orphan.id)
        assert "nonexistent" in fk_issues[0].message
        assert not report.passed

    @pytest.mark.asyncio
    async def test_invalid_json_column(self, db_session, test_settings):
        await seed_pages(db_session)
        db_session.add(ProductCategory(id="construction", name="Construction Chemicals", sort_order=1))
        add_product(db_session, "Broken", applications="not json")
        await db_session.commit()

        report = await DataValidator(test_settings).validate(db_session)

        assert [i.message for i in report.issues_for("json")] == ["Invalid JSON in applications"]

    @pytest.mark.asyncio
    async def test_media_checks(self, db_session, test_settings):
        await seed_pages(db_session)
        logos = test_settings.media_dir / "client-logos"
        logos.mkdir(parents=True)
        (logos / "present.png").write_bytes(b"png")
        (logos / "orphan.png").write_bytes(b"png")

        db_session.add(MediaFile(
            filename="present.png", file_path="/media/client-logos/present.png",
            file_size=3, mime_type="image/png",
        ))
        db_session.add(MediaFile(
            filename="missing.png", file_path="/media/client-logos/missing.png",
            file_size=3, mime_type="image/png",
        ))
        await db_session.commit()

        report = await DataValidator(test_settings).validate(db_session)

        media = report.issues_for("media")
        errors = [i.message for i in media if i.severity == Severity.ERROR]
        warnings = [i.message for i in media if i.severity == Severity.WARNING]
        assert errors == ["File not found on disk: /media/client-logos/missing.png"]
        assert warnings == ["Orphaned file with no database row: /media/client-logos/orphan.png"]

    @pytest.mark.asyncio
    async def test_seo_heuristics_are_warnings(self, db_session, test_settings):
        await seed_pages(db_session)
        home = await db_session.get(SeoSettings, 1)
        home.title = "Short"
        await db_session.commit()

        report = await DataValidator(test_settings).validate(db_session)

        seo = report.issues_for("seo")
        assert seo
        assert all(i.severity == Severity.WARNING for i in seo)
        assert report.passed

    @pytest.mark.asyncio
    async def test_performance_timings_and_indexes(self, db_session, test_settings):
        await seed_pages(db_session)

        report = await DataValidator(test_settings).validate(db_session)

        names = {t.name for t in report.query_timings}
        assert names == {"products_list", "projects_by_category", "clients_featured", "media_files_count"}
        assert all(t.performance in ("good", "acceptable", "slow") for t in report.query_timings)
        assert "idx_products_category" in report.indexes
        assert report.recommendations == []
