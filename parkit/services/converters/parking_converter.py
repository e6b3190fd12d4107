"""
Remote `parking` records to ParkingSpot.
"""
import logging
from typing import Any, Dict, Iterable, List

from parkit.core.config import get_settings
from parkit.schemas.money import Money
from parkit.schemas.parking import ParkingSpot
from parkit.services.converters.field_policy import REQUIRED, FieldPolicy, resolve_fields

logger = logging.getLogger(__name__)
settings = get_settings()

# Bare numeric prices are hourly rates
PRICE_UNIT = "hr"

PARKING_FIELD_POLICY: FieldPolicy = {
    "id": (("id",), REQUIRED),
    "name": (("name",), REQUIRED),
    "address": (("address",), ""),
    "distance": (("distance",), ""),
    "price": (("price", "Price"), 0),
    "available": (("availableSpaces", "available", "availabeSpaces"), 0),
    "image": (("image", "parkingImage"), lambda fields: settings.PLACEHOLDER_IMAGE_URL),
    "rating": (("rating",), 4.0),
    "features": (("features",), lambda fields: ["Security"]),
    "open_24_hours": (("open24Hours",), False),
    "keywords": (
        ("keywords",),
        lambda fields: [str(fields["name"]).lower(), str(fields["address"]).lower()]
    ),
}


class ParkingConverter:
    """
    Converter for raw parking records.
    Applies PARKING_FIELD_POLICY so every screen sees the same shape.
    """
    
    @staticmethod
    def to_spot(raw: Dict[str, Any]) -> ParkingSpot:
        """
        Convert one raw record.
        
        Raises:
            ValueError: If the record lacks an id or name, or has an unreadable price
        """
        fields = resolve_fields(raw, PARKING_FIELD_POLICY)
        
        return ParkingSpot(
            id=str(fields["id"]),
            name=str(fields["name"]),
            address=str(fields["address"]),
            distance=str(fields["distance"]),
            price=Money.parse(fields["price"], default_unit=PRICE_UNIT),
            available=int(fields["available"]),
            image=fields["image"],
            rating=float(fields["rating"]),
            features=list(fields["features"]),
            open_24_hours=bool(fields["open_24_hours"]),
            keywords=[str(keyword) for keyword in fields["keywords"]],
        )
    
    @classmethod
    def to_spots(cls, raw_records: Iterable[Dict[str, Any]]) -> List[ParkingSpot]:
        """Convert a collection, skipping records that cannot be normalized"""
        spots = []
        for raw in raw_records:
            try:
                spots.append(cls.to_spot(raw))
            except (ValueError, TypeError) as e:
                logger.warning(
                    "Skipping unreadable parking record",
                    extra={"record_id": raw.get("id"), "error": str(e)}
                )
        return spots
