"""
Row validation for decoded price bars.

This module enforces the invariants a raw bar must satisfy before it becomes
part of a time series: tick alignment (under an explicit policy), OHLC
price ordering, non-negative volume and strictly increasing dates.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..errors import InvalidBarError, OutOfOrderError
from ..utils.numeric import DEFAULT_SCALE, is_tick_multiple, round_to_tick
from .models import OHLCEntry, RawBar, ohlc_violation

PRICE_FIELDS = ("open", "high", "low", "close")


class TickPolicy(Enum):
    """What to do with prices that are not a multiple of the tick size."""
    ROUND = "round"      # Round to the nearest tick (half-even)
    REJECT = "reject"    # Fail the row with InvalidBarError
    IGNORE = "ignore"    # Accept prices as read


class BarValidator:
    """Validates raw bars and converts them to OHLC entries."""

    def __init__(self, tick: Optional[Decimal] = None,
                 tick_policy: TickPolicy = TickPolicy.ROUND,
                 scale: int = DEFAULT_SCALE):
        """
        Initialize validator.

        Args:
            tick: Instrument tick size, or None to skip tick alignment
            tick_policy: Handling of off-tick prices when a tick is given
            scale: Fractional digits of rounded prices
        """
        if tick is not None and tick <= 0:
            raise ValueError(f"Tick size must be positive, got {tick}")
        self.tick = tick
        self.tick_policy = tick_policy
        self.scale = scale

    def validate_bar(self, raw: RawBar, previous_date: Optional[date] = None) -> OHLCEntry:
        """
        Validate a raw bar against tick, OHLC and chronology rules.

        Args:
            raw: Decoded bar
            previous_date: Date of the last accepted bar, if any

        Returns:
            Validated OHLCEntry

        Raises:
            InvalidBarError: If a price is off-tick (REJECT policy) or an OHLC relation breaks
            OutOfOrderError: If the bar date is not after previous_date
        """
        self._validate_chronology(raw, previous_date)
        aligned = self._align_to_tick(raw)
        self._validate_ohlc(aligned)
        return OHLCEntry.from_raw(aligned)

    def _validate_chronology(self, raw: RawBar, previous_date: Optional[date]) -> None:
        if previous_date is None or raw.date > previous_date:
            return

        relation = "duplicates" if raw.date == previous_date else "precedes"
        raise OutOfOrderError(
            f"Line {raw.line}: date {raw.date.isoformat()} {relation} previous date {previous_date.isoformat()}",
            date=raw.date,
            previous_date=previous_date,
            line=raw.line
        )

    def _align_to_tick(self, raw: RawBar) -> RawBar:
        if self.tick is None or self.tick_policy is TickPolicy.IGNORE:
            return raw

        prices = {}
        for field in PRICE_FIELDS:
            price = getattr(raw, field)
            if is_tick_multiple(price, self.tick):
                prices[field] = price
            elif self.tick_policy is TickPolicy.REJECT:
                raise InvalidBarError(
                    f"Line {raw.line}: {field} {price} on {raw.date.isoformat()} is not a multiple of tick {self.tick}",
                    date=raw.date,
                    reason=f"{field} not a multiple of tick {self.tick}",
                    line=raw.line
                )
            else:
                prices[field] = round_to_tick(price, self.tick, self.scale)

        return RawBar(
            date=raw.date,
            open=prices["open"],
            high=prices["high"],
            low=prices["low"],
            close=prices["close"],
            volume=raw.volume,
            line=raw.line
        )

    def _validate_ohlc(self, raw: RawBar) -> None:
        reason = ohlc_violation(raw.open, raw.high, raw.low, raw.close, raw.volume)
        if reason is not None:
            raise InvalidBarError(
                f"Line {raw.line}: invalid bar on {raw.date.isoformat()}: {reason} "
                f"(O={raw.open}, H={raw.high}, L={raw.low}, C={raw.close}, V={raw.volume})",
                date=raw.date,
                reason=reason,
                line=raw.line
            )
