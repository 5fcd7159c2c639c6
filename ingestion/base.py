"""
Abstract base class for migration sources
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class SourceExtractor(ABC):
    """
    Abstract base class for all source extractors.
    
    Contract:
    - extract() returns an ordered list of plain records
    - a missing source yields a warning and an empty list, never an error
    - extractors only read; they never touch the database or shared state
    """
    
    source_name: str = "source"
    
    @abstractmethod
    async def extract(self) -> List[Dict[str, Any]]:
        """
        Read the source.
        
        Returns:
            List of candidate record dictionaries
        """
        pass
    
    def _missing(self, path) -> List[Dict[str, Any]]:
        logger.warning(f"[{self.source_name}] Source not found: {path}")
        return []
