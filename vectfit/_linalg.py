import numpy as np
from scipy.linalg import lstsq, norm


def stack_complex(a):
    """Stack the real part of an array on top of its imaginary part."""
    return np.concatenate((a.real, a.imag))


def scaled_lstsq(lhs, rhs):
    """Solve a least-squares problem after normalizing the columns of `lhs`.

    Every column is divided by its Euclidean norm before solving and the
    solution is scaled back afterwards. All-zero columns are left untouched.

    Parameters
    ----------
    lhs : numpy.ndarray
        Real coefficient matrix, shape (M, K)
    rhs : numpy.ndarray
        Real right-hand side, shape (M,)

    Returns
    -------
    numpy.ndarray
        Least-squares solution, shape (K,)

    """
    col_norm = norm(lhs, axis=0)
    col_norm[col_norm == 0.0] = 1.0
    escale = 1.0 / col_norm
    x, *_ = lstsq(lhs * escale, rhs)
    return x * escale


def trailing_block(r, start, size):
    """Return the square block ``r[start:start+size, start:start+size]``.

    An economic QR factorization of a wide matrix yields fewer rows of R than
    columns; missing rows of the block are filled with zeros.

    """
    block = np.zeros((size, size))
    part = r[start:start + size, start:start + size]
    block[:part.shape[0], :part.shape[1]] = part
    return block


def padded(v, size):
    """Return `v` zero-padded to length `size`."""
    out = np.zeros(size)
    out[:v.size] = v
    return out
