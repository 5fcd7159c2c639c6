"""
Unit tests for mapping rules and record normalization
"""

import json
import pytest
from ingestion.transformers import mappers
from ingestion.transformers.normalizer import RecordNormalizer


class TestMappers:
    """Test pure mapping functions"""

    def test_map_known_category(self):
        assert mappers.map_category("Admixtures") == "concrete"
        assert mappers.map_category("  Grouts  ") == "construction"

    def test_map_unknown_category_falls_back(self):
        assert mappers.map_category("Something New") == mappers.FALLBACK_CATEGORY
        assert mappers.map_category(None) == mappers.FALLBACK_CATEGORY

    def test_every_mapped_category_is_seeded(self):
        assert set(mappers.CATEGORY_MAP.values()) <= mappers.CATEGORY_IDS

    def test_derive_product_code(self):
        assert mappers.derive_product_code("Polyflex SP 430") == "YP-POLYFLEXSP"
        assert mappers.derive_product_code("ab-12") == "YP-AB12"
        assert mappers.derive_product_code("") == "YP-"

    def test_product_code_is_deterministic(self):
        assert mappers.derive_product_code("Curemax WB") == mappers.derive_product_code("Curemax WB")

    def test_split_multi_value(self):
        assert mappers.split_multi_value("a\n\n  b \r\nc") == ["a", "b", "c"]
        assert mappers.split_multi_value("") == []
        assert mappers.split_multi_value(None) == []

    def test_classify_industry_first_match_wins(self):
        assert mappers.classify_industry("Tata Projects") == "Industrial Conglomerate"
        assert mappers.classify_industry("Ambuja Cement") == "Cement Manufacturing"
        assert mappers.classify_industry("Acme Ltd") == mappers.DEFAULT_INDUSTRY

    def test_project_category_for_folder(self):
        assert mappers.project_category_for("Metro Rail") == "metro_rail"
        assert mappers.project_category_for("metro rail ") == "metro_rail"
        assert mappers.project_category_for("Unknown Folder") == mappers.DEFAULT_PROJECT_CATEGORY
        assert mappers.project_media_subdir("buildings_infra") == "buildings-factories"

    def test_display_name_from_filename(self):
        assert mappers.display_name_from_filename("1. Ahmedabad Station.jpg") == "Ahmedabad Station"
        assert mappers.display_name_from_filename("Tata_Projects-Ltd.png") == "Tata Projects Ltd"

    def test_location_from_name(self):
        assert mappers.location_from_name("Ring Road - Surat") == "Surat"
        assert mappers.location_from_name("Depot, Vadodara") == "Vadodara"
        assert mappers.location_from_name("Sabarmati Terminal") == "India"

    def test_location_from_filename(self):
        assert mappers.location_from_filename("1. Ring Road - Surat.png") == "Surat"
        assert mappers.location_from_filename("2. Depot, Vadodara.jpg") == "Vadodara"
        assert mappers.location_from_filename("3. Sabarmati Terminal.jpg") == "India"

    def test_approval_type_and_description(self):
        assert mappers.classify_approval_type("GMRC Metro") == "Transportation Authority"
        assert mappers.classify_approval_type("BMC") == "Municipal Authority"
        assert mappers.classify_approval_type("NHAI") == mappers.DEFAULT_APPROVAL_TYPE
        assert mappers.describe_authority("gmrc").startswith("Gujarat Metro Rail Corporation")
        assert "Government approval authority" in mappers.describe_authority("XYZ")

    def test_company_field_category(self):
        assert mappers.classify_company_field("head_office_address") == "contact"
        assert mappers.classify_company_field("iso_certification") == "quality"
        assert mappers.classify_company_field("company_name") == "general"

    def test_mime_type_and_alt_text(self):
        assert mappers.mime_type_for("logo.SVG") == "image/svg+xml"
        assert mappers.mime_type_for("file.unknown") == "image/jpeg"
        assert mappers.alt_text_for("Client logo", "Tata Projects.png") == "Client logo: Tata Projects"


class TestRecordNormalizer:
    """Test record normalization into create-schemas"""

    def test_normalize_product_row(self):
        normalizer = RecordNormalizer()
        row = {
            "Category": "Admixtures",
            "Product Name": " Polyflex SP 430 ",
            "Description": "High range water reducer",
            "Uses": "Ready mix\nPrecast",
            "Advantages": "Workability",
            "Technical Details": "",
        }

        product = normalizer.product(row)

        assert product.name == "Polyflex SP 430"
        assert product.category_id == "concrete"
        assert product.applications == ["Ready mix", "Precast"]
        assert product.technical_specifications is None
        assert product.product_code == "YP-POLYFLEXSP"

        stored = product.to_row()
        assert json.loads(stored["applications"]) == ["Ready mix", "Precast"]
        assert json.loads(stored["features"]) == ["Workability"]

    def test_normalize_project_candidate(self):
        normalizer = RecordNormalizer()
        candidate = {
            "name": "Ring Road Surat",
            "category": "roads",
            "folder": "Road Projects",
            "location": "Surat",
            "image_url": "/media/project-photos/roads/1. Ring Road - Surat.png",
        }

        project = normalizer.project(candidate, sort_order=3)

        assert project.category == "roads"
        assert project.gallery_images == [candidate["image_url"]]
        assert project.sort_order == 3
        assert "Road Projects project" in project.description

    def test_normalize_client_and_approval(self):
        normalizer = RecordNormalizer()

        client = normalizer.client({"filename": "Tata Projects.png"})
        assert client.company_name == "Tata Projects"
        assert client.logo_url == "/media/client-logos/Tata Projects.png"

        approval = normalizer.approval({"filename": "GMRC.svg"})
        assert approval.authority_name == "GMRC"
        assert approval.logo_url == "/media/approval-logos/GMRC.svg"

    def test_normalize_many_collects_rejections(self):
        normalizer = RecordNormalizer()
        rows = [
            {"Category": "Grouts", "Product Name": "Grout GP", "Description": "Grout"},
            {"Category": "Grouts", "Product Name": "", "Description": "No name"},
        ]

        records, errors = normalizer.normalize_many(rows, normalizer.product)

        assert [r.name for r in records] == ["Grout GP"]
        assert len(errors) == 1
        assert errors[0].startswith("Record 1 rejected")

    def test_sort_order_counts_only_accepted_records(self):
        normalizer = RecordNormalizer()
        candidates = [{"filename": "A.png"}, {"filename": "B.png"}]

        records, _ = normalizer.normalize_many(candidates, normalizer.client, with_sort_order=True)

        assert [r.sort_order for r in records] == [0, 1]

    @pytest.mark.parametrize("filename", ["4..png", " .png"])
    def test_placeholder_client_names_are_ignored(self, filename):
        assert RecordNormalizer.is_ignored_client({"filename": filename})
