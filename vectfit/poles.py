"""Classification of pole sets into real poles and complex-conjugate pairs."""

from collections.abc import Sequence
from enum import IntEnum

import numpy as np

from .exceptions import ConjugatePairError


class PoleRole(IntEnum):
    """
    IntEnum class representing the role of a pole within a pole set. Values
    mirror the integer codes used for the conjugate index array.
    """
    REAL = 0
    CONJUGATE_FIRST = 1
    CONJUGATE_SECOND = 2


class PoleIndex(Sequence):
    """Role of every pole in a pole set.

    Instances are created with :func:`classify_poles`, which guarantees that
    every complex pole is immediately followed by its exact conjugate.

    Parameters
    ----------
    roles : Iterable of PoleRole
        Role of each pole

    Attributes
    ----------
    pairs : numpy.ndarray
        Positions of the first pole of each conjugate pair

    """

    def __init__(self, roles):
        self._roles = tuple(PoleRole(r) for r in roles)
        self._codes = np.array([int(r) for r in self._roles], dtype=int)

    def __getitem__(self, index):
        return self._roles[index]

    def __len__(self):
        return len(self._roles)

    def __repr__(self):
        return f'PoleIndex({[r.name for r in self._roles]})'

    def __eq__(self, other):
        if isinstance(other, PoleIndex):
            return self._roles == other._roles
        return NotImplemented

    @property
    def pairs(self):
        return np.flatnonzero(self._codes == PoleRole.CONJUGATE_FIRST)

    def partner(self, m):
        """Return the position of the conjugate partner of pole `m`.

        Parameters
        ----------
        m : int
            Position of the pole

        Returns
        -------
        int or None
            Position of the conjugate partner, or None for a real pole

        """
        role = self._roles[m]
        if role == PoleRole.CONJUGATE_FIRST:
            return m + 1
        elif role == PoleRole.CONJUGATE_SECOND:
            return m - 1
        return None


def classify_poles(poles):
    """Tag each pole as real, first of a conjugate pair or second of a pair.

    Parameters
    ----------
    poles : Iterable of complex
        Pole set. A pole with nonzero imaginary part must be immediately
        followed by its exact complex conjugate.

    Returns
    -------
    PoleIndex
        Role of every pole

    Raises
    ------
    ConjugatePairError
        If a complex pole is not immediately followed by its conjugate

    """
    poles = np.asarray(poles, dtype=np.complex128)
    n_poles = poles.size
    roles = []
    m = 0
    while m < n_poles:
        p = poles[m]
        if p.imag == 0.0:
            roles.append(PoleRole.REAL)
            m += 1
            continue

        if m + 1 >= n_poles or np.conj(p) != poles[m + 1]:
            following = 'nothing' if m + 1 >= n_poles else str(poles[m + 1])
            raise ConjugatePairError(
                f'Complex poles are not conjugate pairs: pole {m} ({p}) is '
                f'followed by {following}')
        roles += [PoleRole.CONJUGATE_FIRST, PoleRole.CONJUGATE_SECOND]
        m += 2

    return PoleIndex(roles)
