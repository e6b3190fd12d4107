import logging
from typing import Dict, List

from parkit.schemas.parking import ParkingSpot

logger = logging.getLogger(__name__)


class BookmarkService:
    """In-memory saved parking spots, keyed by spot id"""
    
    def __init__(self):
        self._bookmarks: Dict[str, ParkingSpot] = {}
    
    def is_bookmarked(self, spot_id: str) -> bool:
        return spot_id in self._bookmarks
    
    def toggle(self, spot: ParkingSpot) -> bool:
        """Add or remove a bookmark; returns whether the spot is now bookmarked"""
        if spot.id in self._bookmarks:
            del self._bookmarks[spot.id]
            logger.debug("Bookmark removed", extra={"spot_id": spot.id})
            return False
        
        self._bookmarks[spot.id] = spot
        logger.debug("Bookmark added", extra={"spot_id": spot.id})
        return True
    
    def list(self) -> List[ParkingSpot]:
        return list(self._bookmarks.values())
