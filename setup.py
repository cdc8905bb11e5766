#!/usr/bin/env python

from setuptools import setup, find_packages


kwargs = {
    'name': 'vectfit',
    'version': '0.1.0',
    'packages': find_packages(exclude=['tests*']),
    'python_requires': '>=3.10',

    # Metadata
    'author': 'The vectfit Development Team',
    'description': 'Fast Relaxed Vector Fitting of sampled responses',
    'classifiers': [
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
    ],

    # Dependencies
    'install_requires': ['numpy', 'scipy'],
    'extras_require': {
        'test': ['pytest'],
    },
}

setup(**kwargs)
