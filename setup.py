import pathlib

from setuptools import setup

pkg_name = 'histosketch'
base_dir = pathlib.Path(__file__).parent
with open(base_dir / 'src' / pkg_name / '_version.py') as f:
    version_globals = {}
    exec(f.read(), version_globals)
    version = version_globals['__version__']

setup(
    name=pkg_name,
    description='Fixed-memory approximate histogram for streams of values',
    long_description='''
HistoSketch summarizes a stream of real values with a fixed number of
centroids, answering approximate cumulative count and quantile queries
without retaining the original data.

Features:
  * O(max_bins) insertion, including weighted insertion of repeated values
  * trapezoidal interpolation for sum() and its inverse, quantile()
  * merging of sketches built on separate streams
  * optimal initial decomposition of a known sample (dynamic programming)
  * `histosketch-graphs`, a gnuplot script generator comparing a sketch
  against the exact histogram
''',
    long_description_content_type='text/markdown',
    version=version,
    license='MIT',
    packages=[pkg_name],
    package_dir={'': 'src'},
    install_requires=[],
    extras_require={
        'test': ['pytest', 'numpy'],
    },
    entry_points={
        'console_scripts': [
            'histosketch-graphs=histosketch._graphs:main',
        ],
    },
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.7',
        'Topic :: Scientific/Engineering :: Mathematics',
    ],
)
