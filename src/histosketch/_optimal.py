from itertools import accumulate
from math import inf
from numbers import Integral

from ._sketch import Centroid


def optimal_centroids(sample, k):
    """Return the k centroids minimizing squared error over sample

    The sorted sample is split into min(k, len(sample)) contiguous groups
    so that the total squared distance of each point to the mean of its
    group is minimal.  Dynamic program over prefix sums, O(n^2 * k) time
    and O(n * k) space.

    >>> optimal_centroids([1, 2, 3, 100, 101, 102], 2)
    [Centroid(value=2.0, count=3), Centroid(value=101.0, count=3)]
    """
    if not isinstance(k, Integral) or k < 1:
        raise ValueError('k must be a positive integer')
    points = sorted(sample)
    n = len(points)
    k = min(k, n)
    if not n:
        return []

    # prefix sums relative to the minimum; squared deviations are unchanged
    shift = points[0]
    sums = [0] + list(accumulate(x - shift for x in points))
    squares = [0] + list(accumulate((x - shift) ** 2 for x in points))

    def cost(a, b):
        """squared deviation of points[a:b] from their mean"""
        total = sums[b] - sums[a]
        return max(squares[b] - squares[a] - total * total / (b - a), 0.)

    # dp[j][i]: least cost of the first i points in j groups
    # choice[j][i]: start of the last group in that solution
    dp = [[inf] * (n + 1) for _ in range(k + 1)]
    choice = [[0] * (n + 1) for _ in range(k + 1)]
    dp[0][0] = 0.
    for j in range(1, k + 1):
        prev = dp[j - 1]
        row = dp[j]
        for i in range(j, n - (k - j) + 1):
            best, best_a = inf, j - 1
            for a in range(j - 1, i):
                c = prev[a] + cost(a, i)
                if c < best:
                    best, best_a = c, a
            row[i] = best
            choice[j][i] = best_a

    centroids = []
    b = n
    for j in range(k, 0, -1):
        a = choice[j][b]
        centroids.append(Centroid(shift + (sums[b] - sums[a]) / (b - a), b - a))
        b = a
    centroids.reverse()
    return centroids
