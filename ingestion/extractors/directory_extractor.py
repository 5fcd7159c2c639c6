"""
Directory listing extractors for project photos, logos and media assets
"""

import re
from typing import List, Dict, Any, Optional, Pattern
from pathlib import Path
from ingestion.base import SourceExtractor
from ingestion.transformers import mappers
import logging

logger = logging.getLogger(__name__)

PHOTOS_ROOT = "approvals clients projects photos"
PROJECTS_DIR = f"{PHOTOS_ROOT}/Projects photos"
CLIENT_LOGOS_DIR = f"{PHOTOS_ROOT}/Client Logos"
APPROVAL_LOGOS_DIR = f"{PHOTOS_ROOT}/Approvals logos"

IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|webp|gif)$", re.IGNORECASE)
LOGO_PATTERN = re.compile(r"\.(jpg|jpeg|png|webp|gif|svg)$", re.IGNORECASE)

# (source directory under the documents root, media target, alt-text prefix)
MEDIA_SOURCES = [
    (CLIENT_LOGOS_DIR, "client-logos", "Client logo"),
    (APPROVAL_LOGOS_DIR, "approval-logos", "Approval authority logo"),
] + [
    (f"{PROJECTS_DIR}/{folder}", f"project-photos/{subdir}", alt_prefix)
    for folder, _, subdir, alt_prefix in mappers.PROJECT_FOLDERS
]


def list_files(directory: Path, pattern: Pattern) -> List[Path]:
    """Files directly under directory whose name matches pattern, sorted by name"""
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and pattern.search(p.name)),
        key=lambda p: p.name,
    )


class DirectoryExtractor(SourceExtractor):
    """
    Base for extractors that list image files in a directory.

    Subclasses decide which directories to walk and what a record looks like.
    """

    pattern: Pattern = IMAGE_PATTERN

    def __init__(self, root: Path):
        self.root = Path(root)

    def _files(self, directory: Path) -> Optional[List[Path]]:
        if not directory.is_dir():
            self._missing(directory)
            return None
        return list_files(directory, self.pattern)


class ProjectPhotoExtractor(DirectoryExtractor):
    """
    One project candidate per photo in the category folders.

    Folder name encodes the project category; the filename encodes the
    project name (leading "12. " numbering stripped).
    """

    source_name = "projects"

    async def extract(self) -> List[Dict[str, Any]]:
        if not self.root.is_dir():
            return self._missing(self.root)

        records = []
        for folder, category, subdir, _ in mappers.PROJECT_FOLDERS:
            files = self._files(self.root / folder)
            if not files:
                continue

            logger.info(f"Processing {folder}: {len(files)} images")
            for path in files:
                name = mappers.display_name_from_filename(path.name)
                if not name:
                    logger.debug(f"Skipping unnamed photo {path.name}")
                    continue

                records.append({
                    "name": name,
                    "category": category,
                    "folder": folder,
                    "filename": path.name,
                    "location": mappers.location_from_filename(path.name),
                    "image_url": f"/media/project-photos/{subdir}/{path.name}",
                    "source_path": str(path),
                })

        return records


class LogoExtractor(DirectoryExtractor):
    """One candidate per logo file in a single directory"""

    def __init__(self, root: Path, source_name: str, pattern: Pattern = LOGO_PATTERN):
        super().__init__(root)
        self.source_name = source_name
        self.pattern = pattern

    async def extract(self) -> List[Dict[str, Any]]:
        files = self._files(self.root)
        if files is None:
            return []

        logger.info(f"Found {len(files)} {self.source_name} logos")
        return [
            {
                "filename": path.name,
                "name": mappers.display_name_from_filename(path.name),
                "source_path": str(path),
            }
            for path in files
        ]


class MediaAssetExtractor(DirectoryExtractor):
    """Every media file under the documents root, tagged with its media target"""

    source_name = "media"
    pattern = LOGO_PATTERN

    async def extract(self) -> List[Dict[str, Any]]:
        assets = []
        for source, target, alt_prefix in MEDIA_SOURCES:
            files = self._files(self.root / source)
            if not files:
                continue

            logger.info(f"Processing {target}: {len(files)} files")
            for path in files:
                assets.append({
                    "filename": path.name,
                    "source_path": str(path),
                    "target": target,
                    "alt_prefix": alt_prefix,
                    "file_size": path.stat().st_size,
                })

        return assets


def client_logo_extractor(docs_root: Path) -> LogoExtractor:
    return LogoExtractor(Path(docs_root) / CLIENT_LOGOS_DIR, "clients", IMAGE_PATTERN)


def approval_logo_extractor(docs_root: Path) -> LogoExtractor:
    return LogoExtractor(Path(docs_root) / APPROVAL_LOGOS_DIR, "approvals", LOGO_PATTERN)


def project_photo_extractor(docs_root: Path) -> ProjectPhotoExtractor:
    return ProjectPhotoExtractor(Path(docs_root) / PROJECTS_DIR)
