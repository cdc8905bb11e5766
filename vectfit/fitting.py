"""
Fast Relaxed Vector Fitting function

Approximate f(s) with a rational function:
        f(s)=R*(s*I-A)^(-1) + Polynomials*s
where f(s) is a vector of elements.

When f(s) is a vector, all elements become fitted with a common pole set. The
identification is done using the pole relocating method known as Vector Fitting
[1] with relaxed non-triviality constraint for faster convergence and smaller
fitting errors [2], and utilization of matrix structure for fast solution of the
pole identifion step [3].

[1] B. Gustavsen and A. Semlyen, "Rational approximation of frequency
    domain responses by Vector Fitting", IEEE Trans. Power Delivery, vol. 14,
    no. 3, pp. 1052-1061, July 1999.
[2] B. Gustavsen, "Improving the pole relocating properties of vector
    fitting", IEEE Trans. Power Delivery, vol. 21, no. 3, pp. 1587-1592, July
    2006.
[3] D. Deschrijver, M. Mrozowski, T. Dhaene, and D. De Zutter,
    "Macromodeling of Multiport Systems Using a Fast Implementation of the
    Vector Fitting Method", IEEE Microwave and Wireless Components Letters, vol.
    18, no. 6, pp. 383-385, June 2008.

All credit goes to Bjorn Gustavsen for his MATLAB implementation.
(http://www.sintef.no/Projectweb/VECTFIT/)

"""

from numbers import Integral

import numpy as np
from scipy.linalg import norm

from . import checkvalue as cv
from .config import config
from .relocation import DETAILED_LOGGING, identify_poles
from .residues import identify_residues

# Largest number of polynomial terms
MAX_POLYS = 11


def _check_arguments(f, s, poles, weight, n_polys):
    """Validate input arrays and the number of polynomial terms."""
    cv.check_real('f', f)
    cv.check_real('s', s)
    cv.check_real('weight', weight)
    cv.check_ndim('f', f, 2)
    cv.check_ndim('s', s, 1)
    cv.check_shape('s', s, (f.shape[1],), 'the 2nd dimension of f')
    cv.check_ndim('poles', poles, 1)
    cv.check_shape('weight', weight, f.shape, 'the shape of f')
    if isinstance(n_polys, (bool, np.bool_)):
        raise TypeError(f'Unable to set "n_polys" to "{n_polys}" which is not '
                        f'of type "int"')
    cv.check_type('n_polys', n_polys, Integral)
    cv.check_greater_than('n_polys', n_polys, 0, equality=True)
    cv.check_less_than('n_polys', n_polys, MAX_POLYS, equality=True)


def vectfit(f, s, poles, weight, n_polys=0, skip_pole=False, skip_res=False,
            log=None):
    """Fast Relaxed Vector Fitting function

    A robust numerical method for rational approximation. It updates the
    poles and calculates residues based on guessed poles.

    Parameters
    ----------
    f : numpy.ndarray
        A 2D array of the sample signals to be fitted, (Nv, Ns)
    s : numpy.ndarray
        A 1D array of the sample points, (Ns)
    poles : numpy.ndarray [complex]
        Initial poles, real or complex conjugate pairs, (N). Every complex
        pole must be immediately followed by its exact conjugate.
    weight : numpy.ndarray
        2D array for weighting f, to control the accuracy of the
        approximation, (Nv, Ns)
    n_polys : int, optional
        Number of polynomial coefficients to be fitted, [0, 11]
    skip_pole : bool, optional
        whether or not to skip the calculation of poles
    skip_res : bool, optional
        whether or not to skip the calculation of residues (including the
        polynomials)
    log : bool or int, optional
        Whether to print running logs (use int for verbosity control).
        Defaults to ``vectfit.config['log']``.

    Returns
    -------
    Tuple : (numpy.ndarray [complex], numpy.ndarray, numpy.ndarray [complex], float, numpy.ndarray)
        the updated residues, polynomial coefficients, poles, RMS error,
        fitted signals on the sample points

    Raises
    ------
    vectfit.exceptions.InvalidArgumentError
        If an input array is complex or misshaped, or if `n_polys` is out of
        range
    vectfit.exceptions.ConjugatePairError
        If complex poles are not arranged in conjugate pairs

    """
    f = np.asarray(f)
    s = np.asarray(s)
    poles = np.array(poles, dtype=np.complex128, ndmin=1)
    weight = np.asarray(weight)
    _check_arguments(f, s, poles, weight, n_polys)
    f = f.astype(np.float64, copy=False)
    s = s.astype(np.float64, copy=False)
    weight = weight.astype(np.float64, copy=False)
    cv.check_type('skip_pole', skip_pole, (bool, np.bool_))
    cv.check_type('skip_res', skip_res, (bool, np.bool_))
    if log is None:
        log = config['log']

    n_vectors, n_samples = f.shape
    n_poles = poles.size
    n_polys = int(n_polys)

    residues = np.zeros((n_vectors, n_poles), dtype=np.complex128)
    polys = np.zeros((n_vectors, n_polys))
    fit = np.zeros((n_vectors, n_samples))
    rmserr = 0.0

    if log:
        print(f"Vector fitting {n_vectors} signal(s) on {n_samples} points "
              f"with {n_poles} poles and {n_polys} polynomial terms")

    # No model requested
    if n_poles == 0 and n_polys == 0:
        rmserr = float(norm(f) / np.sqrt(n_vectors * n_samples))
        return residues, polys, poles, rmserr, fit

    if not skip_pole and n_poles > 0:
        poles = identify_poles(f, s, poles, weight, n_polys, log)
        if log >= DETAILED_LOGGING:
            print(f"  relocated poles: {poles}")

    if not skip_res:
        residues, polys, rmserr, fit = identify_residues(
            f, s, poles, weight, n_polys)
        rmserr = float(rmserr)
        if log:
            print(f"  RMS error: {rmserr:.6e}")

    return residues, polys, poles, rmserr, fit
