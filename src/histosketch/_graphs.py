"""Plot HistoSketch sums and quantiles against an exact histogram.

The gnuplot script is written to stdout, so pipe it to gnuplot to get a PNG
at /tmp/plot.png:

    $ histosketch-graphs --dist=normal --centroids=8 | gnuplot

Adjust the number of samples or the distribution:

    $ histosketch-graphs --dist=uniform --centroids=8 --samples=50000 | gnuplot

Or read a text file with one value per line instead of a distribution:

    $ histosketch-graphs --datafile=/tmp/my_data.txt --centroids=8 | gnuplot

To start the sketch from the optimal decomposition of the first 1000 values:

    $ histosketch-graphs --dist=exponential --centroids=8 --samples=50000 \\
          --bootstrap=1000 | gnuplot
"""

import argparse
import functools
import os
import random
import sys
import tempfile
import time
from itertools import islice

from ._sketch import HistoSketch

DISTRIBUTIONS = {
    'uniform': lambda rng: rng.random(),
    'normal': lambda rng: rng.gauss(0., 1.),
    'exponential': lambda rng: rng.expovariate(1.),
}


def dist_reader(rng, dist, n):
    """Yield n variates of the named distribution drawn from rng"""
    try:
        variate = DISTRIBUTIONS[dist]
    except KeyError:
        raise ValueError(f'unknown distribution: {dist!r}') from None
    for _ in range(n):
        yield variate(rng)


def file_reader(path):
    """Yield the values of a file with one float per line"""
    with open(path) as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield float(line)
            except ValueError:
                raise ValueError(f'{path}:{line_no}: cannot parse float '
                                 f'{line!r}') from None


def line_count(path):
    """Return the number of values in a file read by file_reader()"""
    with open(path) as f:
        return sum(1 for line in f if line.strip())


def plot_comparison(s1, s2, begin, end, step, f):
    """Write `x s1(x) s2(x)` rows from begin to end, the last one at end"""
    i = 0
    x = begin
    while x <= end:
        f.write(f'{x!r} {s1(x)!r} {s2(x)!r}\n')
        i += 1
        x = begin + i * step
    if not i or begin + (i - 1) * step < end:
        f.write(f'{end!r} {s1(end)!r} {s2(end)!r}\n')


def format_size(n_bytes, precision=1, delimiter=' '):
    """Returns human readable size.

    >>> format_size(2240)
    '2.2 KB'
    """
    units = (('KB', 1024), ('MB', 1024 ** 2))
    symbol, scale = units[1] if n_bytes > units[1][1] else units[0]
    return f'{n_bytes / scale:.{precision}f}{delimiter}{symbol}'


def sketch_size(centroids):
    """Return approximate in-memory size of a sketch, in bytes"""
    return centroids * 256 + 192


def gnuplot_script(*, plot, centroids, data_path, png_path, title):
    """Return gnuplot script plotting sketch error against the exact values"""
    lines = [
        'set term png',
        f"set output '{png_path}'",
        f'set title "{title}\\n'
        f'sketch with {centroids} centroids '
        f'(~{format_size(sketch_size(centroids))})"',
        'set xlabel "x"',
        f'set ylabel "{plot}(x)"',
        # axes and grid style from www.gnuplotting.org/code/xyborder.cfg
        # and www.gnuplotting.org/code/grid.cfg
        "set style line 101 lc rgb '#808080' lt 1 lw 1",
        'set border 3 front ls 101',
        'set tics nomirror out scale 0.75',
        "set format '%g'",
        "set style line 102 lc rgb '#d6d7d9' lt 0 lw 1",
        'set grid back ls 102',
        'set key top left' if plot == 'quantile' else 'set key bottom right',
        f"plot '{data_path}' using 1:2:3 title \"Sketch error\" "
        f'with filledcurves lc rgb "#E7298A", '
        f"'{data_path}' using 1:3 title \"Actual\" with lines lc rgb \"blue\"",
    ]
    return '\n'.join(lines) + '\n'


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog='histosketch-graphs',
        description=__doc__.splitlines()[0])
    parser.add_argument('--dist', choices=sorted(DISTRIBUTIONS),
                        default='uniform', help='distribution to sample')
    parser.add_argument('--plot', choices=('quantile', 'sum'),
                        default='quantile', help='type of plot')
    parser.add_argument('--samples', type=int, default=10000,
                        help='number of samples to add to the histograms')
    parser.add_argument('--centroids', type=int, default=10,
                        help='number of centroids in the sketch')
    parser.add_argument('--step', type=float, default=.01,
                        help='step size of the resulting plot')
    parser.add_argument('--seed', type=int, default=0,
                        help='seed for the random generator (0 to use current time)')
    parser.add_argument('--datafile',
                        help='file with one value per line (overrides --dist)')
    parser.add_argument('--bootstrap', type=int, default=0,
                        help='start the sketch with the optimal decomposition '
                             'of this many of the samples')
    parser.add_argument('--data-out',
                        default=os.path.join(tempfile.gettempdir(), 'plot.dat'),
                        help='path of the data file read by the script')
    parser.add_argument('--png-out', default='/tmp/plot.png',
                        help='path of the image written by the script')
    args = parser.parse_args(argv)
    if args.centroids < 1:
        parser.error('--centroids must be at least 1')
    if args.step <= 0:
        parser.error('--step must be positive')
    if args.samples < 0 or args.bootstrap < 0:
        parser.error('--samples and --bootstrap must not be negative')
    return parser, args


def main(argv=None, *, out=None, log_fn=None):
    """Entry point of histosketch-graphs

    :param argv: command line arguments (default: sys.argv[1:])
    :param out: file receiving the gnuplot script (default: sys.stdout)
    :param log_fn: function which records diagnostic lines
        (default: print to sys.stderr)
    """
    out = out or sys.stdout
    log_fn = log_fn or functools.partial(print, file=sys.stderr)
    parser, args = _parse_args(argv)

    if args.datafile:
        reader = file_reader(args.datafile)
        samples = line_count(args.datafile)
    else:
        seed = args.seed
        if not seed:
            seed = time.time_ns()
            log_fn(f'# Seed: {seed}')
        reader = dist_reader(random.Random(seed), args.dist, args.samples)
        samples = args.samples
    if not samples:
        parser.error('no samples to plot')
    bootstrap = min(args.bootstrap, samples)

    exact = HistoSketch(samples)
    sample = list(islice(reader, bootstrap))
    for x in sample:
        exact.add(x)
    if sample:
        sketch = HistoSketch.from_sample(sample, args.centroids)
        log_fn(f'# H: {sketch!r}')
    else:
        sketch = HistoSketch(args.centroids)

    for x in reader:
        sketch.add(x)
        exact.add(x)

    if args.plot == 'quantile':
        s1, s2 = sketch.quantile, exact.quantile
        begin, end = 0., 1.
    else:
        s1, s2 = sketch.sum, exact.sum
        begin, end = sketch.min, sketch.max

    with open(args.data_out, 'w') as f:
        plot_comparison(s1, s2, begin, end, args.step, f)

    if args.datafile:
        title = args.datafile
    else:
        title = f'{args.dist} distribution, {samples} samples'
    out.write(gnuplot_script(plot=args.plot, centroids=args.centroids,
                             data_path=args.data_out, png_path=args.png_out,
                             title=title))
    return 0
