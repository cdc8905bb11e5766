"""Dispatch of independent per-channel work

Each response channel is processed on its own and returns its own result
block, so the caller can write every block into a disjoint slice of the
shared accumulation arrays.
"""
from itertools import starmap
from multiprocessing.pool import ThreadPool

from .config import config


def map_channels(func, args):
    """Apply a function to the argument tuple of every channel.

    Parameters
    ----------
    func : callable
        Function called as ``func(*item)`` for each item of `args`
    args : Iterable of tuple
        Argument tuples, one per channel

    Returns
    -------
    list
        Results in the same order as `args`

    """
    args = list(args)
    num_workers = min(config['num_workers'], len(args))
    if num_workers > 1:
        with ThreadPool(num_workers) as pool:
            return pool.starmap(func, args)
    return list(starmap(func, args))
