"""
Pure mapping functions from legacy source values to catalogue values.

Every function here is total: unknown or dirty input falls back to a
default bucket instead of raising, so a bad spreadsheet cell or oddly named
file never stops a migration.

Classification uses ordered ``(predicate, label)`` rule lists evaluated top
to bottom, first match wins. Order is part of the behaviour: a name that
matches several keywords ("Tata Metro Projects") gets the label of the
earliest rule. This is a known limitation of keyword matching and is kept
deliberately; more specific keywords must be listed before generic ones.
"""

import json
import re
from pathlib import PurePath
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

Predicate = Callable[[str], bool]
Rule = Tuple[Predicate, str]


def contains(keyword: str) -> Predicate:
    """Case-insensitive substring predicate"""
    needle = keyword.upper()
    return lambda value: needle in value.upper()


def contains_any(*keywords: str) -> Predicate:
    predicates = [contains(k) for k in keywords]
    return lambda value: any(p(value) for p in predicates)


def first_match(rules: Sequence[Rule], value: Optional[str], default: str) -> str:
    """Return the label of the first rule whose predicate accepts value"""
    if not value:
        return default
    for predicate, label in rules:
        if predicate(value):
            return label
    return default


# ============================================================================
# Product categories
# ============================================================================

FALLBACK_CATEGORY = "construction"

CATEGORY_MAP = {
    "Admixtures": "concrete",
    "Accelerators": "concrete",
    "Misc Admixtures": "concrete",
    "Curing Compound": "construction",
    "Floor Hardeners": "construction",
    "Grouts": "construction",
    "Structural Bonding": "construction",
    "Integral Waterproofing": "construction",
    "Corrosion Inhibitor": "construction",
    "Micro Silica": "construction",
    "Mould Release Agent": "construction",
    "Other": "construction",
}

CATEGORY_IDS = frozenset(["construction", "concrete", "dispersing", "textile", "dyestuff"])


def map_category(raw_category: Optional[str]) -> str:
    """Map a spreadsheet category label to a product category id"""
    if raw_category is None:
        return FALLBACK_CATEGORY
    return CATEGORY_MAP.get(str(raw_category).strip(), FALLBACK_CATEGORY)


# ============================================================================
# Product fields
# ============================================================================

PRODUCT_CODE_PREFIX = "YP-"
PRODUCT_CODE_LENGTH = 10


def derive_product_code(name: Optional[str]) -> str:
    """Deterministic product code: prefix + first alphanumerics of the upper-cased name"""
    cleaned = re.sub(r"[^A-Z0-9]", "", (name or "").upper())
    return f"{PRODUCT_CODE_PREFIX}{cleaned[:PRODUCT_CODE_LENGTH]}"


def split_multi_value(text: Optional[str]) -> List[str]:
    """Split a multi-line cell into trimmed, non-empty entries"""
    if not text:
        return []
    return [line.strip() for line in str(text).splitlines() if line.strip()]


def encode_list(values: Iterable[str]) -> str:
    return json.dumps(list(values))


# ============================================================================
# Clients
# ============================================================================

DEFAULT_INDUSTRY = "Construction & Engineering"

# Named groups first, then sector keywords, generic words last.
INDUSTRY_RULES: List[Rule] = [
    (contains("L&T"), "Construction & Engineering"),
    (contains("Tata"), "Industrial Conglomerate"),
    (contains("Adani"), "Infrastructure & Energy"),
    (contains("Reliance"), "Industrial Conglomerate"),
    (contains("Shapoorji"), "Construction & Engineering"),
    (contains("Cement"), "Cement Manufacturing"),
    (contains("Metro"), "Transportation Infrastructure"),
    (contains("Railway"), "Transportation Infrastructure"),
    (contains("Infra"), "Infrastructure Development"),
    (contains("Construction"), "Construction & Engineering"),
    (contains("Projects"), "Project Development"),
]


def classify_industry(company_name: Optional[str]) -> str:
    return first_match(INDUSTRY_RULES, company_name, DEFAULT_INDUSTRY)


# ============================================================================
# Projects
# ============================================================================

DEFAULT_PROJECT_CATEGORY = "others"

# (source folder, category id, media subdirectory, display label)
PROJECT_FOLDERS = [
    ("Bullet", "bullet_train", "bullet", "Bullet train project"),
    ("Metro Rail", "metro_rail", "metro-rail", "Metro rail project"),
    ("Road Projects", "roads", "roads", "Road infrastructure project"),
    ("Buildings Factories", "buildings_infra", "buildings-factories", "Buildings & infrastructure project"),
    ("Others", "others", "others", "Construction project"),
]

PROJECT_CATEGORY_RULES: List[Rule] = [
    (lambda folder, name=name: folder.strip().lower() == name.lower(), category)
    for name, category, _, _ in PROJECT_FOLDERS
]


def project_category_for(folder_name: Optional[str]) -> str:
    return first_match(PROJECT_CATEGORY_RULES, folder_name, DEFAULT_PROJECT_CATEGORY)


def project_media_subdir(category: str) -> str:
    for _, category_id, subdir, _ in PROJECT_FOLDERS:
        if category_id == category:
            return subdir
    return "others"


def describe_project(folder_name: str) -> str:
    label = folder_name.replace("Buildings Factories", "Buildings & Infrastructure")
    return f"{label} project featuring advanced construction chemical solutions by Yahska Polymers."


def display_name_from_filename(filename: str) -> str:
    """
    Human-readable name from an image filename.

    "1. Ahmedabad Station.jpg" -> "Ahmedabad Station"
    """
    stem = PurePath(filename).stem
    name = re.sub(r"^\d+\.\s*", "", stem)
    name = re.sub(r"[_-]", " ", name)
    return re.sub(r"\s+", " ", name).strip()


def location_from_name(project_name: str, default: str = "India") -> str:
    """Trailing ", City" or " - City" part of a project name"""
    parts = re.split(r",|\s-\s", project_name)
    if len(parts) > 1 and parts[-1].strip():
        return parts[-1].strip()
    return default


def location_from_filename(filename: str, default: str = "India") -> str:
    """
    Location from an image filename, read before separators are flattened.

    "1. Ring Road - Surat.png" -> "Surat"
    """
    stem = re.sub(r"^\d+\.\s*", "", PurePath(filename).stem)
    return location_from_name(stem, default)


# ============================================================================
# Approvals
# ============================================================================

AUTHORITY_DESCRIPTIONS = {
    "BMC": "Brihanmumbai Municipal Corporation - Municipal approval authority for Mumbai",
    "DMRC": "Delhi Metro Rail Corporation - Metro rail development authority",
    "ENGINEERS INDIA LTD": "Engineers India Limited - Engineering consultancy and project management",
    "GMRC": "Gujarat Metro Rail Corporation - Gujarat metro rail authority",
    "JMRC": "Jaipur Metro Rail Corporation - Jaipur metro rail authority",
    "LEA ASSOCIATE": "LEA Associates - Engineering and project consultancy",
    "MMRDA": "Mumbai Metropolitan Region Development Authority - Regional development authority",
    "NCRTC": "National Capital Region Transport Corporation - Regional rapid transit authority",
    "NHSRCL": "National High Speed Rail Corporation Limited - High speed rail development authority",
    "NORTH-WESTERN RAILWAY": "North Western Railway - Indian Railways zonal authority",
    "NORTH WESTERN RAILWAY": "North Western Railway - Indian Railways zonal authority",
    "RVNL": "Rail Vikas Nigam Limited - Railway infrastructure development company",
}

DEFAULT_APPROVAL_TYPE = "Government Authority"

APPROVAL_TYPE_RULES: List[Rule] = [
    (contains_any("METRO", "RAIL"), "Transportation Authority"),
    (contains_any("MUNICIPAL", "BMC"), "Municipal Authority"),
]


def classify_approval_type(authority_name: Optional[str]) -> str:
    return first_match(APPROVAL_TYPE_RULES, authority_name, DEFAULT_APPROVAL_TYPE)


def describe_authority(authority_name: str) -> str:
    return AUTHORITY_DESCRIPTIONS.get(
        authority_name.upper(),
        f"{authority_name} - Government approval authority for construction and infrastructure projects",
    )


def authority_name_from_filename(filename: str) -> str:
    return re.sub(r"[_-]", " ", PurePath(filename).stem).strip()


# ============================================================================
# Company info
# ============================================================================

COMPANY_FIELD_RULES: List[Rule] = [
    (contains_any("address", "phone", "email", "website"), "contact"),
    (contains_any("certification", "iso", "policy"), "quality"),
    (contains_any("business", "manufacturing", "market", "service"), "business"),
]


def classify_company_field(field_name: Optional[str]) -> str:
    return first_match(COMPANY_FIELD_RULES, field_name, "general")


# ============================================================================
# Media
# ============================================================================

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}


def mime_type_for(filename: str) -> str:
    return MIME_TYPES.get(PurePath(filename).suffix.lower(), "image/jpeg")


def alt_text_for(prefix: str, filename: str) -> str:
    return f"{prefix}: {PurePath(filename).stem}"
