"""
Copy media assets into the public media tree
"""

import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import ValidationError as PydanticValidationError

from ingestion.transformers import mappers
from schemas.records import MediaFileCreate
import logging

logger = logging.getLogger(__name__)


class MediaOrganizer:
    """
    Copy extracted assets to ``<media_root>/<target>/<file>``.

    Files already present with the same size are not copied again, so a
    re-run leaves the media tree unchanged.
    """

    def __init__(self, media_root: Path):
        self.media_root = Path(media_root)

    def organize(self, assets: Iterable[Dict[str, Any]]) -> Tuple[List[MediaFileCreate], List[str]]:
        """
        Copy assets and build their media_files records.

        Returns:
            (records, errors) where errors name the files that could not be copied
        """
        records: List[MediaFileCreate] = []
        errors: List[str] = []

        for asset in assets:
            source = Path(asset["source_path"])
            target_dir = self.media_root / asset["target"]
            target = target_dir / asset["filename"]

            try:
                target_dir.mkdir(parents=True, exist_ok=True)
                if not (target.exists() and target.stat().st_size == source.stat().st_size):
                    shutil.copy2(source, target)
                    logger.debug(f"Copied {source.name} -> {target}")

                records.append(MediaFileCreate(
                    filename=asset["filename"],
                    original_name=asset["filename"],
                    file_path=f"/media/{asset['target']}/{asset['filename']}",
                    file_size=source.stat().st_size,
                    mime_type=mappers.mime_type_for(asset["filename"]),
                    alt_text=mappers.alt_text_for(asset["alt_prefix"], asset["filename"]),
                ))

            except (OSError, PydanticValidationError) as e:
                message = f"Error processing {asset['filename']}: {e}"
                logger.error(message)
                errors.append(message)

        logger.info(f"Organized {len(records)} media files into {self.media_root}")
        return records, errors
