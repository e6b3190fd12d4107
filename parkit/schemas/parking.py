"""
Parking schemas.
"""
from pydantic import BaseModel, Field
from typing import List

from parkit.schemas.money import Money


class ParkingSpot(BaseModel):
    """Normalized parking location shared by the home and explore screens"""
    id: str
    name: str
    address: str = ""
    distance: str = ""
    price: Money
    available: int = 0
    image: str
    rating: float = 4.0
    features: List[str] = Field(default_factory=list)
    open_24_hours: bool = Field(False, alias="open24Hours")
    keywords: List[str] = Field(default_factory=list)
    
    class Config:
        populate_by_name = True
    
    @property
    def display_price(self) -> str:
        return self.price.format()
