"""
Qn robust scale estimator (Rousseeuw & Croux, 1993).

Qn is the k-th order statistic of the pairwise distances |x_i - x_j|, i < j,
with h = floor(n/2) + 1 and k = h(h-1)/2, multiplied by the consistency
constant 2.2219 and a finite-sample correction d_n. It has a 50% breakdown
point, so a few extreme price changes cannot inflate it.

The k-th distance is selected exactly without materializing all n(n-1)/2
distances: values are mapped to integers on the fixed-point grid and a
binary search over the distance finds the smallest d with at least k pairs
no further apart than d. Each probe counts pairs in O(n) with two pointers.
"""

from decimal import Decimal, localcontext
from typing import Optional

from ..errors import InsufficientDataError
from ..utils.numeric import (
    DECIMAL_CONTEXT,
    DEFAULT_SCALE,
    from_scaled_int,
    quantize,
    to_scaled_int,
)
from .statistics import Values, as_values

QN_CONSISTENCY = Decimal("2.2219")

# Croux & Rousseeuw (1992) small-sample correction factors for n <= 9
SMALL_SAMPLE_CORRECTION = {
    2: Decimal("0.399"),
    3: Decimal("0.994"),
    4: Decimal("0.512"),
    5: Decimal("0.844"),
    6: Decimal("0.611"),
    7: Decimal("0.857"),
    8: Decimal("0.669"),
    9: Decimal("0.872"),
}


def qn_order_index(n: int) -> int:
    """The k of the k-th smallest pairwise distance for sample size n."""
    h = n // 2 + 1
    return h * (h - 1) // 2


def correction_factor(n: int) -> Decimal:
    """Finite-sample correction d_n."""
    if n < 2:
        raise InsufficientDataError(
            f"Qn needs at least 2 values, got {n}",
            required_count=2,
            available_count=n
        )
    if n in SMALL_SAMPLE_CORRECTION:
        return SMALL_SAMPLE_CORRECTION[n]

    with localcontext(DECIMAL_CONTEXT):
        if n % 2 == 1:
            return Decimal(n) / (Decimal(n) + Decimal("1.4"))
        return Decimal(n) / (Decimal(n) + Decimal("3.8"))


def count_pairs_within(sorted_values: list[int], distance: int) -> int:
    """Number of pairs i < j with sorted_values[j] - sorted_values[i] <= distance."""
    count = 0
    left = 0
    for right, value in enumerate(sorted_values):
        while value - sorted_values[left] > distance:
            left += 1
        count += right - left
    return count


def kth_pairwise_distance(sorted_values: list[int], k: int) -> int:
    """
    The k-th smallest (1-based) pairwise distance of ascending integers.

    Raises:
        ValueError: If k is outside 1..n(n-1)/2
    """
    n = len(sorted_values)
    pairs = n * (n - 1) // 2
    if not 1 <= k <= pairs:
        raise ValueError(f"Order index {k} outside 1..{pairs}")

    low, high = 0, sorted_values[-1] - sorted_values[0]
    while low < high:
        middle = (low + high) // 2
        if count_pairs_within(sorted_values, middle) >= k:
            high = middle
        else:
            low = middle + 1
    return low


class RobustQn:
    """
    Qn scale estimate of a sample.

    The estimate is computed on first access and cached; the sample is
    copied at construction.
    """

    def __init__(self, data: Values, scale: int = DEFAULT_SCALE):
        self.scale = scale
        self._values = as_values(data)
        if len(self._values) < 2:
            raise InsufficientDataError(
                f"Qn needs at least 2 values, got {len(self._values)}",
                required_count=2,
                available_count=len(self._values)
            )
        self._order_statistic: Optional[Decimal] = None

    @property
    def sample_size(self) -> int:
        return len(self._values)

    @property
    def order_index(self) -> int:
        return qn_order_index(self.sample_size)

    @property
    def order_statistic(self) -> Decimal:
        """The uncorrected k-th smallest pairwise distance."""
        if self._order_statistic is None:
            grid = sorted(to_scaled_int(value, self.scale) for value in self._values)
            distance = kth_pairwise_distance(grid, self.order_index)
            self._order_statistic = from_scaled_int(distance, self.scale)
        return self._order_statistic

    @property
    def correction_factor(self) -> Decimal:
        return correction_factor(self.sample_size)

    def get_robust_qn(self) -> Decimal:
        """Qn = d_n * 2.2219 * k-th pairwise distance, at the configured scale."""
        with localcontext(DECIMAL_CONTEXT):
            value = self.correction_factor * QN_CONSISTENCY * self.order_statistic
        return quantize(value, self.scale)


def qn(data: Values, scale: int = DEFAULT_SCALE) -> Decimal:
    """
    Calculate the Qn robust scale estimate.

    Raises:
        InsufficientDataError: If there are fewer than two values
    """
    return RobustQn(data, scale).get_robust_qn()
