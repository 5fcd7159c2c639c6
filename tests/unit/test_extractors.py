"""
Unit tests for source extractors
"""

import logging
import pandas as pd
import pytest
from core.exceptions import SpreadsheetExtractionError
from ingestion.extractors.directory_extractor import (
    MediaAssetExtractor,
    approval_logo_extractor,
    client_logo_extractor,
    project_photo_extractor,
)
from ingestion.extractors.spreadsheet_extractor import SpreadsheetExtractor, looks_like_product
from ingestion.extractors.template_extractor import TemplateExtractor
from ingestion.validator import REQUIRED_PAGES


class TestSpreadsheetExtractor:
    """Test catalogue workbook extraction"""

    @pytest.mark.asyncio
    async def test_extract_csv_filters_layout_rows(self, source_docs):
        extractor = SpreadsheetExtractor([source_docs / "products.csv"])

        rows = await extractor.extract()

        assert [r["Product Name"] for r in rows] == ["Polyflex SP 430", "Yahska Grout GP", "Curemax WB"]
        assert all(r["source_file"] == "products.csv" for r in rows)
        # Empty cells come back as empty strings, not NaN
        assert rows[2]["Uses"] == ""

    @pytest.mark.asyncio
    async def test_extract_xlsx_workbooks_in_order(self, tmp_path, product_rows):
        first = tmp_path / "Products Catalogue.xlsx"
        second = tmp_path / "Products Catalogue (1).xlsx"
        pd.DataFrame(product_rows[:1]).to_excel(first, sheet_name="Sheet1", index=False)
        pd.DataFrame(product_rows[1:2]).to_excel(second, sheet_name="Products", index=False)

        rows = await SpreadsheetExtractor([first, second]).extract()

        assert [r["Product Name"] for r in rows] == ["Polyflex SP 430", "Yahska Grout GP"]
        assert [r["source_file"] for r in rows] == [first.name, second.name]

    @pytest.mark.asyncio
    async def test_missing_workbook_yields_nothing(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            rows = await SpreadsheetExtractor([tmp_path / "absent.xlsx"]).extract()

        assert rows == []
        assert "Source not found" in caplog.text

    @pytest.mark.asyncio
    async def test_unreadable_workbook_raises(self, tmp_path):
        broken = tmp_path / "broken.xlsx"
        broken.write_bytes(b"not a workbook")

        with pytest.raises(SpreadsheetExtractionError) as exc_info:
            await SpreadsheetExtractor([broken]).extract()

        assert exc_info.value.context["file_path"] == str(broken)

    def test_looks_like_product(self, product_rows):
        assert looks_like_product(product_rows[0])
        assert not looks_like_product(product_rows[3])
        assert not looks_like_product({"Category": "Grouts", "Product Name": "X", "Description": ""})
        assert not looks_like_product({
            "Category": "• Admixtures • Curing Compound • Grouts",
            "Product Name": "X",
            "Description": "Y",
        })


class TestDirectoryExtractors:
    """Test photo and logo folder extraction"""

    @pytest.mark.asyncio
    async def test_project_photos(self, source_docs):
        records = await project_photo_extractor(source_docs).extract()

        assert [r["name"] for r in records] == [
            "Sabarmati Terminal",
            "Ahmedabad Station",
            "Surat Depot",
            "Ring Road Surat",
        ]
        metro = records[1]
        assert metro["category"] == "metro_rail"
        assert metro["image_url"] == "/media/project-photos/metro-rail/1. Ahmedabad Station.jpg"
        assert records[3]["location"] == "Surat"

    @pytest.mark.asyncio
    async def test_client_logos_skip_non_images(self, source_docs):
        records = await client_logo_extractor(source_docs).extract()

        assert [r["filename"] for r in records] == ["L&T Construction.jpg", "Tata Projects.png"]

    @pytest.mark.asyncio
    async def test_approval_logos_include_svg(self, source_docs):
        records = await approval_logo_extractor(source_docs).extract()

        assert [r["filename"] for r in records] == ["BMC.png", "GMRC.svg"]

    @pytest.mark.asyncio
    async def test_media_assets_are_tagged_with_targets(self, source_docs):
        assets = await MediaAssetExtractor(source_docs).extract()

        targets = {a["filename"]: a["target"] for a in assets}
        assert len(assets) == 8
        assert targets["GMRC.svg"] == "approval-logos"
        assert targets["Tata Projects.png"] == "client-logos"
        assert targets["1. Ring Road - Surat.png"] == "project-photos/roads"
        assert all(a["file_size"] > 0 for a in assets)

    @pytest.mark.asyncio
    async def test_missing_directories_yield_nothing(self, tmp_path):
        assert await project_photo_extractor(tmp_path / "nowhere").extract() == []
        assert await client_logo_extractor(tmp_path / "nowhere").extract() == []
        assert await MediaAssetExtractor(tmp_path / "nowhere").extract() == []


class TestTemplateExtractor:
    """Test static content templates"""

    @pytest.mark.asyncio
    async def test_content_covers_every_page(self):
        items = await TemplateExtractor().extract()

        assert {item["page"] for item in items} >= set(REQUIRED_PAGES)
        assert all(item["content_key"] == "content" for item in items)

    @pytest.mark.asyncio
    async def test_seo_covers_every_page(self):
        pages = [item["page"] for item in await TemplateExtractor().extract_seo()]

        assert sorted(pages) == sorted(REQUIRED_PAGES)

    @pytest.mark.asyncio
    async def test_custom_templates(self):
        items = await TemplateExtractor({"home": {"hero": "Welcome"}}).extract()

        assert items == [{"page": "home", "section": "hero", "content_key": "content", "content_value": "Welcome"}]
