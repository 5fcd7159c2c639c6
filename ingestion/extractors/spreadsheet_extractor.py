"""
Product catalogue spreadsheet extractor
"""

import pandas as pd
from typing import List, Dict, Any, Iterable, Optional
from pathlib import Path
from ingestion.base import SourceExtractor
from core.exceptions import SpreadsheetExtractionError
import logging

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = [
    "Category",
    "Product Name",
    "Description",
    "Uses",
    "Advantages",
    "Technical Details",
]

PREFERRED_SHEET = "Sheet1"

# Header rows and print-layout blocks that made it into the catalogue exports
JUNK_CATEGORY_MARKERS = [
    lambda category: category == "For Letterhead & Business Cards::",
    lambda category: "• Admixtures • Curing Compound" in category,
]


def looks_like_product(row: Dict[str, Any]) -> bool:
    """True for rows carrying a real product rather than layout debris"""
    category = str(row.get("Category") or "").strip()
    name = str(row.get("Product Name") or "").strip()
    description = str(row.get("Description") or "").strip()

    if not (category and name and description):
        return False
    return not any(is_junk(category) for is_junk in JUNK_CATEGORY_MARKERS)


class SpreadsheetExtractor(SourceExtractor):
    """
    Extract product rows from catalogue workbooks.
    
    Supports:
    - .xlsx/.xls workbooks (first matching sheet) and .csv exports
    - Several workbooks read in order and concatenated
    - Header whitespace normalization
    """
    
    source_name = "products"
    
    def __init__(self, file_paths: Iterable[Path], sheet_name: Optional[str] = PREFERRED_SHEET):
        self.file_paths = [Path(p) for p in file_paths]
        self.sheet_name = sheet_name
    
    async def extract(self) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        
        for file_path in self.file_paths:
            if not file_path.exists():
                self._missing(file_path)
                continue
            
            logger.info(f"Reading products from {file_path.name}")
            df = self._read(file_path)
            
            rows = df.to_dict(orient="records")
            kept = [row for row in rows if looks_like_product(row)]
            for row in kept:
                row["source_file"] = file_path.name
            
            logger.info(
                f"Read {len(rows)} rows from {file_path.name}, "
                f"{len(kept)} look like products"
            )
            records.extend(kept)
        
        return records
    
    def _read(self, file_path: Path) -> pd.DataFrame:
        """Read a workbook or CSV export with every cell as text"""
        try:
            if file_path.suffix.lower() == ".csv":
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
            else:
                df = pd.read_excel(
                    file_path,
                    sheet_name=self._pick_sheet(file_path),
                    dtype=str,
                    keep_default_na=False,
                )
        except (ValueError, OSError) as e:
            raise SpreadsheetExtractionError(
                f"Could not read workbook {file_path.name}",
                context={"file_path": str(file_path), "sheet_name": self.sheet_name},
                original_exception=e
            )
        
        df.columns = [str(c).strip() for c in df.columns]
        missing = [c for c in PRODUCT_COLUMNS if c not in df.columns]
        if missing:
            logger.warning(f"{file_path.name} is missing columns: {', '.join(missing)}")
            for column in missing:
                df[column] = ""
        
        return df[PRODUCT_COLUMNS]
    
    def _pick_sheet(self, file_path: Path):
        with pd.ExcelFile(file_path) as workbook:
            if self.sheet_name in workbook.sheet_names:
                return self.sheet_name
            return workbook.sheet_names[0]
