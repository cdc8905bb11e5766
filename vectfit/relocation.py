"""
Pole identification step of Fast Relaxed Vector Fitting.

An auxiliary function sigma(s), sharing the current poles, is fitted jointly
with sigma(s)*f(s) for every response channel. The relaxed non-triviality
constraint [2] fixes the scale of sigma through an integral criterion instead
of forcing its constant term to one. Every channel's least-squares system is
compressed by QR to the rows acting on the sigma unknowns [3] before the
channels are combined. The zeros of sigma become the relocated poles.

[2] B. Gustavsen, "Improving the pole relocating properties of vector
    fitting", IEEE Trans. Power Delivery, vol. 21, no. 3, pp. 1587-1592, July
    2006.
[3] D. Deschrijver, M. Mrozowski, T. Dhaene, and D. De Zutter,
    "Macromodeling of Multiport Systems Using a Fast Implementation of the
    Vector Fitting Method", IEEE Microwave and Wireless Components Letters, vol.
    18, no. 6, pp. 383-385, June 2008.

"""

import numpy as np
from scipy.linalg import eigvals, norm, qr

from ._linalg import padded, scaled_lstsq, stack_complex, trailing_block
from .basis import build_basis
from .poles import PoleRole, classify_poles
from .pool import map_channels

# Bounds on the constant term of sigma outside of which the relaxed solution
# is discarded
TOL_LOW = 1e-18
TOL_HIGH = 1e18

# Logging control
DETAILED_LOGGING = 2


def _channel_matrix(dk, weight, f, n_poles, n_polys, n_sigma):
    """Weighted complex system of a channel, [w*Dk | -w*Dk*f]."""
    n_num = n_poles + n_polys
    a = np.zeros((dk.shape[0], n_num + n_sigma), dtype=np.complex128)
    a[:, :n_num] = weight[:, np.newaxis] * dk[:, :n_num]
    a[:, n_num:] = -(weight * f)[:, np.newaxis] * dk[:, :n_sigma]
    return a


def compress_channel(dk, weight, f, n_poles, n_polys, scale=None):
    """Compress the relaxed system of one channel to its sigma block.

    Parameters
    ----------
    dk : numpy.ndarray
        Basis matrix over the current poles, shape (Ns, N + max(Nc, 1))
    weight : numpy.ndarray
        Weights of the channel, shape (Ns,)
    f : numpy.ndarray
        Response of the channel, shape (Ns,)
    n_poles : int
        Number of poles
    n_polys : int
        Number of polynomial terms
    scale : float, optional
        If given, the integral criterion row scaled by this value is appended
        to the system. It is carried by exactly one channel.

    Returns
    -------
    lhs_block : numpy.ndarray
        Trailing triangular block of R, shape (N + 1, N + 1)
    rhs_block : numpy.ndarray
        Projection of the right-hand side onto the block, shape (N + 1,)

    """
    n_num = n_poles + n_polys
    n_sigma = n_poles + 1
    ns = dk.shape[0]

    a1 = _channel_matrix(dk, weight, f, n_poles, n_polys, n_sigma)
    a = np.zeros((2*ns + 1, n_num + n_sigma))
    a[:2*ns] = stack_complex(a1)
    if scale is not None:
        a[2*ns, n_num:] = np.real(scale * dk[:, :n_sigma].sum(axis=0))

    q, r = qr(a, mode='economic')
    lhs_block = trailing_block(r, n_num, n_sigma)
    if scale is not None:
        rhs_block = ns * scale * padded(q[-1, n_num:], n_sigma)
    else:
        rhs_block = np.zeros(n_sigma)
    return lhs_block, rhs_block


def compress_channel_fixed(dk, weight, f, n_poles, n_polys, denom):
    """Compress the system of one channel with the sigma constant held fixed.

    Parameters
    ----------
    dk : numpy.ndarray
        Basis matrix over the current poles, shape (Ns, N + max(Nc, 1))
    weight : numpy.ndarray
        Weights of the channel, shape (Ns,)
    f : numpy.ndarray
        Response of the channel, shape (Ns,)
    n_poles : int
        Number of poles
    n_polys : int
        Number of polynomial terms
    denom : float
        Fixed constant term of sigma, moved to the right-hand side

    Returns
    -------
    lhs_block : numpy.ndarray
        Trailing triangular block of R, shape (N, N)
    rhs_block : numpy.ndarray
        Projection of the right-hand side onto the block, shape (N,)

    """
    n_num = n_poles + n_polys
    a = stack_complex(_channel_matrix(dk, weight, f, n_poles, n_polys, n_poles))
    b = stack_complex((denom * weight * f).astype(np.complex128))

    q, r = qr(a, mode='economic')
    lhs_block = trailing_block(r, n_num, n_poles)
    rhs_block = padded(q[:, n_num:n_num + n_poles].T @ b, n_poles)
    return lhs_block, rhs_block


def snap_denominator(denom):
    """Clamp a degenerate sigma constant to a fixed reference value.

    Parameters
    ----------
    denom : float
        Constant term of sigma from the relaxed solution

    Returns
    -------
    float
        1 if `denom` is zero, otherwise `denom` clamped to the magnitude range
        [TOL_LOW, TOL_HIGH] with its sign kept

    """
    if denom == 0.0:
        return 1.0
    elif abs(denom) < TOL_LOW:
        return TOL_LOW if denom > 0 else -TOL_LOW
    elif abs(denom) > TOL_HIGH:
        return TOL_HIGH if denom > 0 else -TOL_HIGH
    return denom


def sigma_zeros(poles, pole_index, coeffs, denom):
    """Compute the zeros of sigma, which become the relocated poles.

    Parameters
    ----------
    poles : numpy.ndarray
        Current poles, shape (N,)
    pole_index : vectfit.poles.PoleIndex
        Role of each pole
    coeffs : numpy.ndarray
        Coefficients of the pole terms of sigma, shape (N,)
    denom : float
        Constant term of sigma

    Returns
    -------
    numpy.ndarray
        Eigenvalues of ``Lambda - b c^T / d``, shape (N,)

    """
    n_poles = len(poles)
    lambd = np.zeros((n_poles, n_poles))
    b = np.ones(n_poles)
    for m, role in enumerate(pole_index):
        if role == PoleRole.REAL:
            lambd[m, m] = poles[m].real
        elif role == PoleRole.CONJUGATE_FIRST:
            k = pole_index.partner(m)
            x, y = poles[m].real, poles[m].imag
            lambd[m, m] = lambd[k, k] = x
            lambd[m, k] = y
            lambd[k, m] = -y
            b[m] = 2.0
            b[k] = 0.0

    return eigvals(lambd - np.outer(b, coeffs) / denom)


def identify_poles(f, s, poles, weight, n_polys=0, log=False):
    """Relocate poles by one step of relaxed vector fitting.

    Parameters
    ----------
    f : numpy.ndarray
        Responses, shape (Nv, Ns)
    s : numpy.ndarray
        Real sample points, shape (Ns,)
    poles : numpy.ndarray
        Current poles, shape (N,), N > 0
    weight : numpy.ndarray
        Weights, shape (Nv, Ns)
    n_polys : int, optional
        Number of polynomial terms
    log : bool or int, optional
        Whether to print running logs (use int for verbosity control)

    Returns
    -------
    numpy.ndarray
        Relocated poles, shape (N,)

    Raises
    ------
    vectfit.exceptions.ConjugatePairError
        If `poles` does not consist of real poles and conjugate pairs

    """
    poles = np.asarray(poles, dtype=np.complex128)
    n_vectors, n_samples = f.shape
    n_poles = poles.size
    n_sigma = n_poles + 1

    pole_index = classify_poles(poles)
    dk = build_basis(s, poles, pole_index, max(n_polys, 1))

    # Scaling for the integral criterion row
    scale = norm(weight * f) / n_samples

    last = n_vectors - 1
    blocks = map_channels(compress_channel, (
        (dk, weight[n], f[n], n_poles, n_polys, scale if n == last else None)
        for n in range(n_vectors)))

    lhs = np.zeros((n_vectors * n_sigma, n_sigma))
    rhs = np.zeros(n_vectors * n_sigma)
    for n, (lhs_block, rhs_block) in enumerate(blocks):
        lhs[n*n_sigma:(n + 1)*n_sigma] = lhs_block
        rhs[n*n_sigma:(n + 1)*n_sigma] = rhs_block

    x = scaled_lstsq(lhs, rhs)
    coeffs = x[:-1]
    denom = x[-1]

    if log >= DETAILED_LOGGING:
        print(f"  sigma constant: {denom:.6e}")

    # Relaxation degenerated, solve again with the constant term held fixed
    if abs(denom) < TOL_LOW or abs(denom) > TOL_HIGH:
        denom = snap_denominator(denom)
        if log:
            print(f"  relaxed solution degenerate, fixing sigma constant "
                  f"to {denom:.1e}")

        blocks = map_channels(compress_channel_fixed, (
            (dk, weight[n], f[n], n_poles, n_polys, denom)
            for n in range(n_vectors)))

        lhs = np.zeros((n_vectors * n_poles, n_poles))
        rhs = np.zeros(n_vectors * n_poles)
        for n, (lhs_block, rhs_block) in enumerate(blocks):
            lhs[n*n_poles:(n + 1)*n_poles] = lhs_block
            rhs[n*n_poles:(n + 1)*n_poles] = rhs_block

        coeffs = scaled_lstsq(lhs, rhs)

    return sigma_zeros(poles, pole_index, coeffs, denom)
