import io
import random
from unittest.mock import Mock

import pytest

from histosketch import _graphs


@pytest.mark.parametrize('in_, expected', [
    ((     2240, ), '2.2 KB'),
    ((      448, ), '0.4 KB'),
    ((  1048576, ), '1024.0 KB'),
    ((  3145728, ), '3.0 MB'),
    ((2240, 2, ''), '2.19KB'),
])
def test_format_size(in_, expected):
    assert _graphs.format_size(*in_) == expected


def test_dist_reader_seeded():
    for dist in ('uniform', 'normal', 'exponential'):
        a = list(_graphs.dist_reader(random.Random(7), dist, 20))
        b = list(_graphs.dist_reader(random.Random(7), dist, 20))
        assert len(a) == 20
        assert a == b
    assert all(0 <= x < 1 for x in _graphs.dist_reader(random.Random(1), 'uniform', 50))
    assert all(x >= 0 for x in _graphs.dist_reader(random.Random(1), 'exponential', 50))


def test_dist_reader_unknown():
    with pytest.raises(ValueError):
        list(_graphs.dist_reader(random.Random(0), 'cauchy', 3))


def test_file_reader(tmp_path):
    path = tmp_path / 'data.txt'
    path.write_text('1.5\n\n-2\n3e2\n')
    assert list(_graphs.file_reader(path)) == [1.5, -2, 300]
    assert _graphs.line_count(path) == 3


def test_file_reader_bad_value(tmp_path):
    path = tmp_path / 'data.txt'
    path.write_text('1.5\nfoo\n')
    reader = _graphs.file_reader(path)
    assert next(reader) == 1.5
    with pytest.raises(ValueError, match=':2:'):
        next(reader)


def test_plot_comparison():
    f = io.StringIO()
    _graphs.plot_comparison(lambda x: 2 * x, lambda x: 3 * x, 0., 1., .4, f)
    rows = [[float(v) for v in line.split()] for line in f.getvalue().splitlines()]
    assert rows == [[0, 0, 0], [.4, .8, pytest.approx(1.2)],
                    [.8, 1.6, pytest.approx(2.4)], [1, 2, 3]]

    # no duplicate row when the steps land on the end
    f = io.StringIO()
    _graphs.plot_comparison(abs, abs, 0., 1., .5, f)
    assert f.getvalue().splitlines() == ['0.0 0.0 0.0', '0.5 0.5 0.5', '1.0 1.0 1.0']


@pytest.mark.parametrize('plot', ('quantile', 'sum'))
def test_main(tmp_path, plot):
    data_path = tmp_path / 'plot.dat'
    out = io.StringIO()
    log_fn = Mock()
    assert _graphs.main(['--dist=normal', f'--plot={plot}', '--samples=500',
                         '--centroids=8', '--step=.05', '--seed=3',
                         f'--data-out={data_path}'],
                        out=out, log_fn=log_fn) == 0
    log_fn.assert_not_called()

    script = out.getvalue()
    assert 'set term png' in script
    assert 'normal distribution, 500 samples' in script
    assert 'sketch with 8 centroids (~2.2 KB)' in script
    assert f"plot '{data_path}' using 1:2:3" in script
    assert f'set ylabel "{plot}(x)"' in script

    rows = [[float(v) for v in line.split()]
            for line in data_path.read_text().splitlines()]
    assert len(rows) > 2
    xs = [row[0] for row in rows]
    assert xs == sorted(xs)
    if plot == 'quantile':
        assert xs[0] == 0 and xs[-1] == 1
    else:
        assert rows[-1][1] == 500
        assert rows[-1][2] <= 500


def test_main_deterministic(tmp_path):
    outputs = []
    for name in ('a.dat', 'b.dat'):
        data_path = tmp_path / name
        _graphs.main(['--seed=11', '--samples=200', f'--data-out={data_path}'],
                     out=io.StringIO())
        outputs.append(data_path.read_text())
    assert outputs[0] == outputs[1]


def test_main_random_seed_logged(tmp_path):
    log_fn = Mock()
    _graphs.main(['--samples=50', f'--data-out={tmp_path / "plot.dat"}'],
                 out=io.StringIO(), log_fn=log_fn)
    log_fn.assert_called_once()
    assert log_fn.call_args[0][0].startswith('# Seed: ')


def test_main_datafile_bootstrap(tmp_path):
    datafile = tmp_path / 'values.txt'
    rng = random.Random(5)
    datafile.write_text(''.join(f'{rng.expovariate(1)}\n' for _ in range(300)))
    data_path = tmp_path / 'plot.dat'
    out = io.StringIO()
    log_fn = Mock()
    _graphs.main([f'--datafile={datafile}', '--centroids=6', '--bootstrap=50',
                  f'--data-out={data_path}'], out=out, log_fn=log_fn)

    log_fn.assert_called_once()
    assert log_fn.call_args[0][0].startswith('# H: HistoSketch(max_bins=6, ')
    assert f'set title "{datafile}\\n' in out.getvalue()
    assert data_path.read_text()


@pytest.mark.parametrize('argv', [
    ['--centroids=0'],
    ['--step=0'],
    ['--samples=0'],
    ['--dist=cauchy'],
    ['--plot=mean'],
])
def test_main_bad_args(tmp_path, argv):
    with pytest.raises(SystemExit):
        _graphs.main(argv + [f'--data-out={tmp_path / "plot.dat"}'],
                     out=io.StringIO(), log_fn=Mock())
