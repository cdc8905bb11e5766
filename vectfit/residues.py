"""
Residue identification step of vector fitting and model evaluation.

With the poles fixed, every response channel is an independent linear
least-squares problem for its residues and polynomial coefficients.

"""

import numpy as np
from scipy.linalg import norm

from . import checkvalue as cv
from ._linalg import scaled_lstsq, stack_complex
from .basis import build_basis
from .poles import classify_poles
from .pool import map_channels


def evaluate(s, poles, residues, polys=None):
    """Evaluate the rational function approximation:
        f(s) = sum(residues / (s - poles)) + sum(polys * s^k)

    Parameters
    ----------
    s : numpy.ndarray
        Real sample points, shape (Ns,)
    poles : numpy.ndarray
        Complex poles, shape (N,)
    residues : numpy.ndarray
        Complex residues, shape (Nv, N) or (N,) for a single response
    polys : numpy.ndarray, optional
        Real polynomial coefficients in ascending order of power, shape
        (Nv, Nc) or (Nc,) for a single response

    Returns
    -------
    numpy.ndarray
        Real values of the model, shape (Nv, Ns)

    """
    s = np.asarray(s)
    cv.check_real('s', s)
    s = s.astype(np.float64, copy=False)
    poles = np.asarray(poles, dtype=np.complex128)
    residues = np.asarray(residues, dtype=np.complex128)
    cv.check_ndim('s', s, 1)
    cv.check_ndim('poles', poles, 1)

    if residues.ndim == 1:
        residues = residues.reshape((1, -1))
    cv.check_ndim('residues', residues, 2)
    n_vectors = residues.shape[0]
    cv.check_shape('residues', residues, (n_vectors, poles.size),
                   'the number of poles')

    if polys is None:
        polys = np.zeros((n_vectors, 0))
    else:
        polys = np.asarray(polys, dtype=np.float64)
        if polys.ndim == 1:
            polys = polys.reshape((1, -1))
        cv.check_ndim('polys', polys, 2)
        if polys.size > 0:
            cv.check_shape('polys', polys, (n_vectors, polys.shape[1]),
                           'the number of residue rows')

    with np.errstate(divide='ignore', invalid='ignore'):
        terms = 1.0 / (s[np.newaxis, :] - poles[:, np.newaxis])
    fit = np.real(residues @ terms)

    n_coeffs = polys.shape[1]
    if n_coeffs > 0:
        powers = s[np.newaxis, :] ** np.arange(n_coeffs)[:, np.newaxis]
        fit = fit + polys @ powers
    return fit


def solve_channel(dk, weight, f, n_poles):
    """Solve the weighted least-squares problem of one channel.

    Parameters
    ----------
    dk : numpy.ndarray
        Basis matrix over the fixed poles, shape (Ns, N + Nc)
    weight : numpy.ndarray
        Weights of the channel, shape (Ns,)
    f : numpy.ndarray
        Response of the channel, shape (Ns,)
    n_poles : int
        Number of poles

    Returns
    -------
    half_residues : numpy.ndarray
        Coefficients of the pole columns, shape (N,)
    poly_coeffs : numpy.ndarray
        Polynomial coefficients, shape (Nc,)

    """
    a = stack_complex(weight[:, np.newaxis] * dk)
    b = stack_complex((weight * f).astype(np.complex128))
    x = scaled_lstsq(a, b)
    return x[:n_poles], x[n_poles:]


def assemble_residues(half_residues, pole_index):
    """Combine basis coefficients into complex residues.

    For a conjugate pair at positions (m, m+1) the residues are
    ``c[m] + i c[m+1]`` and ``c[m] - i c[m+1]``, which are exact conjugates.

    Parameters
    ----------
    half_residues : numpy.ndarray
        Real coefficients of the pole columns, shape (Nv, N)
    pole_index : vectfit.poles.PoleIndex
        Role of each pole

    Returns
    -------
    numpy.ndarray
        Complex residues, shape (Nv, N)

    """
    residues = half_residues.astype(np.complex128)
    first = pole_index.pairs
    second = np.array([pole_index.partner(m) for m in first], dtype=int)
    re = half_residues[:, first]
    im = half_residues[:, second]
    residues[:, first] = re + 1j*im
    residues[:, second] = re - 1j*im
    return residues


def identify_residues(f, s, poles, weight, n_polys=0):
    """Fit residues and polynomial coefficients for fixed poles.

    Parameters
    ----------
    f : numpy.ndarray
        Responses, shape (Nv, Ns)
    s : numpy.ndarray
        Real sample points, shape (Ns,)
    poles : numpy.ndarray
        Fixed poles, shape (N,)
    weight : numpy.ndarray
        Weights, shape (Nv, Ns)
    n_polys : int, optional
        Number of polynomial terms

    Returns
    -------
    residues : numpy.ndarray
        Complex residues, shape (Nv, N)
    polys : numpy.ndarray
        Polynomial coefficients, shape (Nv, Nc)
    rmserr : float
        Root-mean-square error of the fit
    fit : numpy.ndarray
        Fitted responses, shape (Nv, Ns)

    Raises
    ------
    vectfit.exceptions.ConjugatePairError
        If `poles` does not consist of real poles and conjugate pairs

    """
    poles = np.asarray(poles, dtype=np.complex128)
    n_vectors, n_samples = f.shape
    n_poles = poles.size

    pole_index = classify_poles(poles)
    dk = build_basis(s, poles, pole_index, n_polys)

    solutions = map_channels(solve_channel, (
        (dk, weight[n], f[n], n_poles) for n in range(n_vectors)))

    half_residues = np.zeros((n_vectors, n_poles))
    polys = np.zeros((n_vectors, n_polys))
    for n, (cr, cp) in enumerate(solutions):
        half_residues[n] = cr
        polys[n] = cp

    residues = assemble_residues(half_residues, pole_index)
    fit = evaluate(s, poles, residues, polys)
    rmserr = norm(fit - f) / np.sqrt(n_vectors * n_samples)
    return residues, polys, rmserr, fit
