"""
Client-side parking search.
Linear case-insensitive substring scan over name, address and keywords.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from parkit.schemas.parking import ParkingSpot


class SearchResult(BaseModel):
    """Filtered spots plus the promoted first hit"""
    query: str = ""
    spots: List[ParkingSpot] = Field(default_factory=list)
    best_match: Optional[ParkingSpot] = None
    no_results: bool = False


def matches(spot: ParkingSpot, query: str) -> bool:
    needle = query.lower()
    return (
        needle in spot.name.lower()
        or needle in spot.address.lower()
        or any(needle in keyword.lower() for keyword in spot.keywords)
    )


def filter_spots(spots: List[ParkingSpot], query: str) -> List[ParkingSpot]:
    """Blank query returns the list unchanged"""
    if not query.strip():
        return spots
    return [spot for spot in spots if matches(spot, query)]


def search(spots: List[ParkingSpot], query: str) -> SearchResult:
    filtered = filter_spots(spots, query)
    return SearchResult(
        query=query,
        spots=filtered,
        best_match=filtered[0] if filtered else None,
        no_results=bool(query.strip()) and not filtered,
    )
