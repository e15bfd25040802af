from bisect import bisect_left, bisect_right
from collections import namedtuple
from heapq import merge as _merge_sorted
from itertools import accumulate
from math import isnan, sqrt
from numbers import Integral, Number

# relative size of the quadratic term below which quantile() solves linearly
_LINEAR_EPSILON = 1e-12


class Centroid(namedtuple('Centroid', 'value count')):
    """(value, count) pair summarizing `count` observations with mean `value`"""

    __slots__ = ()

    def combine(self, other):
        """Return the centroid of the union of self and other"""
        count = self.count + other.count
        value = self.value + (other.value - self.value) * other.count / count
        return Centroid(value, count)


class HistoSketch:
    """
    Streaming, approximate histogram with a fixed number of centroids

    Based on http://jmlr.org/papers/volume11/ben-haim10a/ben-haim10a.pdf

    Each point is inserted as a centroid of count 1.  Once there are more
    than max_bins centroids, the closest adjacent pair (leftmost on ties) is
    merged into its weighted mean.  sum() and quantile() model the density
    between neighboring centroids as a trapezoid.

    Not thread safe.  Concurrent mutation must be serialized by the caller.
    """

    def __init__(self, max_bins):
        if not isinstance(max_bins, Integral) or max_bins < 1:
            raise ValueError('max_bins must be a positive integer')
        self._max_bins = max_bins
        self._bins = []  # Centroid
        self._costs = []  # item i is _bins[i+1].value - _bins[i].value
        self._count = 0

    @classmethod
    def from_sample(cls, sample, max_bins):
        """Return sketch holding the optimal decomposition of sample.

        O(n^2 * max_bins) complexity, so not meant for large samples.
        """
        from ._optimal import optimal_centroids  # pylint: disable=import-outside-toplevel
        return cls.from_centroids(optimal_centroids(sample, max_bins), max_bins)

    @classmethod
    def from_centroids(cls, centroids, max_bins):
        """Return sketch restored from exported (value, count) pairs"""
        sketch = cls(max_bins)
        bins = [Centroid(*c) for c in centroids]
        if len(bins) > max_bins:
            raise ValueError(f'{len(bins)} centroids exceed max_bins {max_bins}')
        if any(c.count < 1 for c in bins):
            raise ValueError('centroid count must be at least 1')
        if any(a.value > b.value for a, b in zip(bins, bins[1:])):
            raise ValueError('centroids must be ordered by value')
        sketch._bins = bins
        sketch._costs = [b.value - a.value for a, b in zip(bins, bins[1:])]
        sketch._count = sum(c.count for c in bins)
        return sketch

    def _insert(self, centroid):
        bins = self._bins
        costs = self._costs
        i = bisect_right(bins, centroid)
        bins.insert(i, centroid)
        if i > 0:
            costs.insert(i - 1, centroid.value - bins[i - 1].value)
            if i + 1 < len(bins):
                costs[i] = bins[i + 1].value - centroid.value
        elif len(bins) > 1:
            costs.insert(0, bins[1].value - centroid.value)

    def _merge_closest(self):
        """replace the closest adjacent pair with its combination"""
        bins = self._bins
        costs = self._costs
        i = costs.index(min(costs))
        merged = bins[i].combine(bins[i + 1])
        bins[i:i + 2] = (merged, )
        new_costs = []
        if i > 0:
            new_costs.append(merged.value - bins[i - 1].value)
        if i + 1 < len(bins):
            new_costs.append(bins[i + 1].value - merged.value)
        costs[max(i - 1, 0):i + 2] = new_costs

    def add(self, point):
        """Add point to histogram;  O(max_bins) complexity."""
        self.add_many(point, 1)

    def add_many(self, point, count):
        """Add `count` copies of point to histogram;  O(max_bins) complexity."""
        if not isinstance(count, Integral) or count < 1:
            raise ValueError('count must be a positive integer')
        self._count += count
        self._insert(Centroid(point, count))
        if len(self._bins) > self._max_bins:
            self._merge_closest()

    def merge(self, other):
        """Merge other histogram into this one, keeping this max_bins.

        other is not modified.
        """
        self._bins = bins = list(_merge_sorted(self._bins, other._bins))
        self._costs = [b.value - a.value for a, b in zip(bins, bins[1:])]
        self._count += other._count
        while len(bins) > self._max_bins:
            self._merge_closest()

    def _check_not_empty(self):
        if not self._bins:
            raise ValueError('histogram is empty')

    @property
    def max_bins(self):
        """Return maximum number of centroids held by this histogram"""
        return self._max_bins

    @property
    def count(self):
        """Return number of points represented by this histogram."""
        return self._count

    @property
    def min(self):
        """Return value of the lowest centroid"""
        self._check_not_empty()
        return self._bins[0].value

    @property
    def max(self):
        """Return value of the highest centroid"""
        self._check_not_empty()
        return self._bins[-1].value

    def centroids(self):
        """Return list of (value, count) centroids, ordered by value"""
        return list(self._bins)

    def __iter__(self):
        return iter(self._bins)

    def __len__(self):
        return len(self._bins)

    def __repr__(self):
        bins = ', '.join(f'({value:g}, {count:g})' for value, count in self._bins)
        return f'{self.__class__.__name__}(max_bins={self._max_bins}, [{bins}])'

    def mean(self):
        """Return mean;  O(max_bins) complexity."""
        self._check_not_empty()
        return sum(p * count for p, count in self._bins) / self._count

    def std(self):
        """Return standard deviation;  O(max_bins) complexity."""
        mean = self.mean()
        sum_squares = sum((p - mean) ** 2 * count for p, count in self._bins)
        return sqrt(sum_squares / self._count)

    def sum(self, b):
        """Return estimated number of points <= b;  O(max_bins) complexity."""
        if isnan(b):
            raise ValueError('b must not be NaN')
        bins = self._bins
        if not bins or b < bins[0].value:
            return 0.
        if b >= bins[-1].value:
            return float(self._count)
        values = [value for value, _ in bins]
        i = bisect_right(values, b) - 1
        if values[i] == b:
            # b on a stored value: count from its first occurrence
            i = bisect_left(values, b)
        (v0, c0), (v1, c1) = bins[i:i+2]
        preceding = sum(count for _, count in bins[:i])
        if v1 == v0:
            return preceding + c0 / 2
        ratio = (b - v0) / (v1 - v0)
        mb = c0 + (c1 - c0) * ratio
        return preceding + c0 / 2 + (c0 + mb) / 2 * ratio

    def _quantile(self, sums, q):
        if not 0 <= q <= 1:
            raise ValueError('quantile values must be in the range [0, 1]')
        bins = self._bins
        target_sum = q * self._count
        if q == 0 or target_sum < sums[0]:
            return bins[0].value
        i = bisect_right(sums, target_sum) - 1
        if q == 1 or i >= len(bins) - 1:
            return bins[-1].value
        (v0, c0), (v1, c1) = bins[i:i+2]
        width = v1 - v0
        if width == 0:
            return v0
        # partial trapezoid area from v0 is a*d**2 + b*d with d = point - v0
        s = target_sum - sums[i]
        a = (c1 - c0) / (2 * width ** 2)
        b = c0 / width
        if abs(c1 - c0) <= _LINEAR_EPSILON * (c0 + c1):
            d = s / b
        else:
            # root (-b + sqrt(b**2 + 4*a*s)) / (2*a) without the cancellation;
            # the other root lies outside [0, width]
            d = 2 * s / (b + sqrt(max(b * b + 4 * a * s, 0.)))
        return v0 + min(max(d, 0.), width)

    def quantile(self, q):
        """Return value at quantile fraction q, or list of values given a
        sequence of fractions;  O(max_bins) complexity.

        Inverse of sum():  sum(quantile(q)) approximates q * count.
        """
        self._check_not_empty()
        bins = self._bins
        # cumulative count up to the middle of each centroid
        sums = [x - count / 2 for x, (_, count) in
                zip(accumulate(count for _, count in bins), bins)]
        if isinstance(q, Number):
            return self._quantile(sums, q)
        return list(self._quantile(sums, q_item) for q_item in q)
