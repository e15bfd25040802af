"""Measure and report cost of the HistoSketch operations.

The typical duration of one call is reported for each case.

Synopsis:
    $ python overhead.py
    compare operations (max_bins=64):
        add():                                       <duration>
        add_many(count=1000):                        <duration>
        sum():                                       <duration>
        quantile():                                  <duration>
        merge():                                     <duration>

    compare max_bins:
        add() max_bins=16:                           <duration>
        ...
"""

import random
import timeit

from histosketch import HistoSketch


def _format_duration(duration, precision=2):
    units = (('s', 1), ('ms', 1e3), ('µs', 1e6), ('ns', 1e9))
    for symbol, scale in units:
        if duration * scale >= 1:
            break
    return f'{duration * scale:#.{precision}g}'.rstrip('.') + f' {symbol}'


def measure(stmt, sketch):
    """Return the average duration of one execution of stmt, in seconds"""
    rng = random.Random(0)
    other = HistoSketch(sketch.max_bins)
    for _ in range(1000):
        other.add(rng.random())
    timeit_timer = timeit.Timer(
        globals={'h': sketch, 'other': other, 'random': rng.random},
        stmt=stmt
    )
    n, duration = timeit_timer.autorange()
    min_duration = min([duration] + timeit_timer.repeat(number=n))
    return min_duration / n


def _filled_sketch(max_bins):
    rng = random.Random(1)
    h = HistoSketch(max_bins)
    for _ in range(10 * max_bins):
        h.add(rng.random())
    return h


def main():
    max_bins = 64
    print(f'compare operations (max_bins={max_bins}):')
    for label, stmt in (('add():', 'h.add(random())'),
                        ('add_many(count=1000):', 'h.add_many(random(), 1000)'),
                        ('sum():', 'h.sum(random())'),
                        ('quantile():', 'h.quantile(random())'),
                        ('merge():', 'h.merge(other)')):
        duration = measure(stmt, _filled_sketch(max_bins))
        print(f'    {label:45s}{_format_duration(duration)}')

    print()
    print('compare max_bins:')
    for max_bins in (16, 64, 256, 1024):
        duration = measure('h.add(random())', _filled_sketch(max_bins))
        item = f'add() max_bins={max_bins}:'
        print(f'    {item:45s}{_format_duration(duration)}')


if __name__ == '__main__':
    main()
