"""
Canonical price representation.

Producers write prices as raw numbers ("Price": 2.5), pre-formatted
strings ("$2.50/hr", "$6.00") or structured objects. Everything is parsed
into a Money value on the way in; display strings are produced only when
rendering.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel

from parkit.core.config import get_settings
from parkit.utils.formatting import SYMBOL_CURRENCIES, format_amount

settings = get_settings()

PRICE_PATTERN = re.compile(
    r"^\s*(?P<symbol>[$€£])?\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<code>[A-Z]{3})?\s*(?:/\s*(?P<unit>[A-Za-z]+))?\s*$"
)


class Money(BaseModel):
    """Amount + ISO currency code, optionally per unit (e.g. per hour)"""
    amount: Decimal
    currency: str = settings.DEFAULT_CURRENCY
    unit: Optional[str] = None
    
    @classmethod
    def parse(cls, value: Any, default_unit: Optional[str] = None) -> "Money":
        """
        Parse any known price shape into Money.
        
        Args:
            value: Money, mapping, number or price string
            default_unit: Unit applied to bare numbers (e.g. "hr")
        
        Raises:
            ValueError: If the value is not a recognizable price
        """
        if isinstance(value, Money):
            return value
        
        if isinstance(value, dict):
            return cls.model_validate(value)
        
        if isinstance(value, bool):
            raise ValueError(f"Invalid price: {value!r}")
        
        if isinstance(value, (int, float, Decimal)):
            return cls(amount=Decimal(str(value)), unit=default_unit)
        
        if isinstance(value, str):
            match = PRICE_PATTERN.match(value)
            if not match:
                raise ValueError(f"Invalid price: {value!r}")
            try:
                amount = Decimal(match.group("amount"))
            except InvalidOperation:
                raise ValueError(f"Invalid price: {value!r}")
            currency = (
                match.group("code")
                or SYMBOL_CURRENCIES.get(match.group("symbol") or "")
                or settings.DEFAULT_CURRENCY
            )
            return cls(amount=amount, currency=currency, unit=match.group("unit"))
        
        raise ValueError(f"Invalid price: {value!r}")
    
    def format(self) -> str:
        """Display string, e.g. "$5.00" or "$2.50/hr" """
        return format_amount(self.amount, self.currency, self.unit)
    
    def __str__(self) -> str:
        return self.format()
