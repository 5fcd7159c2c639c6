"""
Static content extractor.

Returns the hand-authored page content, SEO settings, company profile and
category seeds. Stands in for document parsing, which the legacy Word files
never got.
"""

from typing import List, Dict, Any
from ingestion.base import SourceExtractor
from ingestion.extractors import content_templates
import logging

logger = logging.getLogger(__name__)


class TemplateExtractor(SourceExtractor):
    """Page content items keyed by (page, section)"""

    source_name = "content"

    def __init__(self, templates: Dict[str, Dict[str, str]] = None):
        self.templates = templates if templates is not None else content_templates.CONTENT_TEMPLATES

    async def extract(self) -> List[Dict[str, Any]]:
        items = [
            {"page": page, "section": section, "content_key": "content", "content_value": text}
            for page, sections in self.templates.items()
            for section, text in sections.items()
        ]
        logger.debug(f"Prepared {len(items)} content items for {len(self.templates)} pages")
        return items

    async def extract_seo(self) -> List[Dict[str, Any]]:
        return [
            {"page": page, "values": values}
            for page, values in content_templates.SEO_SETTINGS.items()
        ]

    async def extract_company_info(self) -> List[Dict[str, Any]]:
        return [
            {"field_name": name, "field_value": value}
            for name, value in content_templates.COMPANY_INFO.items()
        ]

    @staticmethod
    def product_categories() -> List[Dict[str, Any]]:
        return list(content_templates.PRODUCT_CATEGORIES)

    @staticmethod
    def project_categories() -> List[Dict[str, Any]]:
        return list(content_templates.PROJECT_CATEGORIES)
