"""
Transform extracted records into validated create-schemas
"""

from typing import Any, Callable, Dict, Iterable, List, Tuple
from pydantic import ValidationError as PydanticValidationError
from schemas.records import (
    ApprovalCreate,
    ClientCreate,
    CompanyInfoCreate,
    ProductCategoryCreate,
    ProductCreate,
    ProjectCategoryCreate,
    ProjectCreate,
    RecordBase,
    SeoSettingsCreate,
    SiteContentCreate,
)
from ingestion.transformers import mappers
import logging

logger = logging.getLogger(__name__)

CLIENT_PROJECT_TYPE = "Infrastructure & Construction"
CLIENT_PARTNERSHIP_SINCE = "2015"

# Placeholder company names produced by stray files in the logo folder
IGNORED_CLIENT_NAMES = {"", "4."}


class RecordNormalizer:
    """
    Normalize extracted records into the catalogue schemas.

    Handles:
    - Category and industry mapping
    - Multi-value splitting and JSON encoding (via the schemas)
    - Public URL construction for logos and photos
    - Sort order assignment
    """

    def product(self, row: Dict[str, Any]) -> ProductCreate:
        """Normalize one catalogue spreadsheet row"""
        name = _text(row.get("Product Name"))
        return ProductCreate(
            name=name,
            description=_text(row.get("Description")),
            category_id=mappers.map_category(row.get("Category")),
            applications=mappers.split_multi_value(row.get("Uses")),
            features=mappers.split_multi_value(row.get("Advantages")),
            usage=_text(row.get("Uses")) or None,
            advantages=_text(row.get("Advantages")) or None,
            technical_specifications=_text(row.get("Technical Details")) or None,
            product_code=mappers.derive_product_code(name),
            is_active=True,
        )

    def project(self, candidate: Dict[str, Any], sort_order: int = 0) -> ProjectCreate:
        """Normalize a project candidate discovered in the photo folders"""
        image_url = candidate["image_url"]
        return ProjectCreate(
            name=candidate["name"],
            description=mappers.describe_project(candidate.get("folder", "Others")),
            category=candidate["category"],
            location=candidate.get("location") or mappers.location_from_name(candidate["name"]),
            client_name="",
            image_url=image_url,
            gallery_images=[image_url],
            is_active=True,
            sort_order=sort_order,
        )

    def client(self, candidate: Dict[str, Any], sort_order: int = 0) -> ClientCreate:
        """Normalize a client logo"""
        name = mappers.display_name_from_filename(candidate["filename"])
        return ClientCreate(
            company_name=name,
            industry=mappers.classify_industry(name),
            project_type=CLIENT_PROJECT_TYPE,
            logo_url=f"/media/client-logos/{candidate['filename']}",
            partnership_since=CLIENT_PARTNERSHIP_SINCE,
            is_active=True,
            sort_order=sort_order,
        )

    def approval(self, candidate: Dict[str, Any], sort_order: int = 0) -> ApprovalCreate:
        """Normalize an approval authority logo"""
        name = mappers.authority_name_from_filename(candidate["filename"])
        return ApprovalCreate(
            authority_name=name,
            approval_type=mappers.classify_approval_type(name),
            description=mappers.describe_authority(name),
            logo_url=f"/media/approval-logos/{candidate['filename']}",
            is_active=True,
            sort_order=sort_order,
        )

    def content(self, item: Dict[str, Any]) -> SiteContentCreate:
        return SiteContentCreate(
            page=item["page"],
            section=item["section"],
            content_key=item.get("content_key", "content"),
            content_value=item["content_value"],
        )

    def seo(self, page: str, values: Dict[str, Any]) -> SeoSettingsCreate:
        return SeoSettingsCreate(page=page, **values)

    def company_field(self, field_name: str, value: str) -> CompanyInfoCreate:
        return CompanyInfoCreate(
            field_name=field_name,
            field_value=value,
            field_type="text",
            category=mappers.classify_company_field(field_name),
        )

    def product_category(self, values: Dict[str, Any]) -> ProductCategoryCreate:
        return ProductCategoryCreate(**values)

    def project_category(self, values: Dict[str, Any]) -> ProjectCategoryCreate:
        return ProjectCategoryCreate(**values)

    # ------------------------------------------------------------------
    # Batch helpers
    # ------------------------------------------------------------------

    def normalize_many(
        self,
        items: Iterable[Any],
        normalize: Callable[..., RecordBase],
        with_sort_order: bool = False,
    ) -> Tuple[List[RecordBase], List[str]]:
        """
        Normalize a sequence, collecting failures instead of raising.

        Returns:
            (records, errors) where errors are human-readable strings
        """
        records: List[RecordBase] = []
        errors: List[str] = []

        for index, item in enumerate(items):
            try:
                if with_sort_order:
                    record = normalize(item, len(records))
                else:
                    record = normalize(item)
            except PydanticValidationError as e:
                message = f"Record {index} rejected: {e.errors()[0].get('msg')}"
                logger.warning(message)
                errors.append(message)
                continue

            records.append(record)

        return records, errors

    @staticmethod
    def is_ignored_client(candidate: Dict[str, Any]) -> bool:
        return mappers.display_name_from_filename(candidate["filename"]) in IGNORED_CLIENT_NAMES


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
