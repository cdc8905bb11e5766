import numpy as np

from .poles import PoleRole

# Replacement for infinite basis values (sample point coinciding with a pole)
INF_SENTINEL = 1e18


def build_basis(s, poles, pole_index, n_cols):
    """Build the partial-fraction basis matrix for a pole set.

    Each pole contributes one column. Real poles give ``1/(s - p)``; a
    conjugate pair contributes the real-combination column
    ``1/(s - p) + 1/(s - p*)`` followed by the imaginary-combination column
    ``i/(s - p*) - i/(s - p)``. The trailing columns hold powers of the sample
    points, starting with the constant term.

    Parameters
    ----------
    s : numpy.ndarray
        Real sample points, shape (Ns,)
    poles : numpy.ndarray
        Complex poles, shape (N,)
    pole_index : vectfit.poles.PoleIndex
        Role of each pole
    n_cols : int
        Number of polynomial columns appended after the pole columns

    Returns
    -------
    numpy.ndarray
        Complex basis matrix, shape (Ns, N + n_cols)

    """
    s = np.asarray(s, dtype=np.float64)
    poles = np.asarray(poles, dtype=np.complex128)
    n_poles = poles.size

    dk = np.zeros((s.size, n_poles + n_cols), dtype=np.complex128)
    s_c = s.astype(np.complex128)

    with np.errstate(divide='ignore', invalid='ignore'):
        for m, role in enumerate(pole_index):
            p = poles[m]
            if role == PoleRole.REAL:
                dk[:, m] = 1. / (s_c - p)
            elif role == PoleRole.CONJUGATE_FIRST:
                dk[:, m] = 1. / (s_c - p) + 1. / (s_c - np.conj(p))
            elif role == PoleRole.CONJUGATE_SECOND:
                dk[:, m] = 1j / (s_c - np.conj(p)) - 1j / (s_c - p)
            else:
                raise RuntimeError(f'Unknown pole role {role!r} at position {m}')

    dk[np.isinf(dk)] = INF_SENTINEL + 0j

    # Polynomial terms: constant followed by ascending powers
    if n_cols > 0:
        powers = np.arange(n_cols)
        dk[:, n_poles:] = s[:, np.newaxis] ** powers
    return dk
