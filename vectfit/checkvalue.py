from collections.abc import Iterable

import numpy as np

from .exceptions import InvalidArgumentError


def check_type(name, value, expected_type):
    """Ensure that an object is of an expected type.

    Parameters
    ----------
    name : str
        Description of value being checked
    value : object
        Object to check type of
    expected_type : type or Iterable of type
        type to check object against

    """
    if not isinstance(value, expected_type):
        if isinstance(expected_type, Iterable):
            msg = 'Unable to set "{}" to "{}" which is not one of the ' \
                  'following types: "{}"'.format(name, value, ', '.join(
                      [t.__name__ for t in expected_type]))
        else:
            msg = (f'Unable to set "{name}" to "{value}" which is not of type "'
                   f'{expected_type.__name__}"')
        raise TypeError(msg)


def check_less_than(name, value, maximum, equality=False):
    """Ensure that an object's value is less than a given value.

    Parameters
    ----------
    name : str
        Description of the value being checked
    value : object
        Object to check
    maximum : object
        Maximum value to check against
    equality : bool, optional
        Whether equality is allowed. Defaults to False.

    """
    if equality:
        if value > maximum:
            msg = (f'Unable to set "{name}" to "{value}" since it is greater '
                   f'than "{maximum}"')
            raise InvalidArgumentError(msg)
    else:
        if value >= maximum:
            msg = (f'Unable to set "{name}" to "{value}" since it is greater '
                   f'than or equal to "{maximum}"')
            raise InvalidArgumentError(msg)


def check_greater_than(name, value, minimum, equality=False):
    """Ensure that an object's value is greater than a given value.

    Parameters
    ----------
    name : str
        Description of the value being checked
    value : object
        Object to check
    minimum : object
        Minimum value to check against
    equality : bool, optional
        Whether equality is allowed. Defaults to False.

    """
    if equality:
        if value < minimum:
            msg = (f'Unable to set "{name}" to "{value}" since it is less than '
                   f'"{minimum}"')
            raise InvalidArgumentError(msg)
    else:
        if value <= minimum:
            msg = (f'Unable to set "{name}" to "{value}" since it is less than '
                   f'or equal to "{minimum}"')
            raise InvalidArgumentError(msg)


def check_ndim(name, value, ndim):
    """Ensure that an array has an expected number of dimensions.

    Parameters
    ----------
    name : str
        Description of the array being checked
    value : numpy.ndarray
        Array to check
    ndim : int
        Required number of dimensions

    """
    if np.ndim(value) != ndim:
        msg = (f'Unable to use "{name}" with {np.ndim(value)} dimension(s) '
               f'since it must be {ndim}-dimensional')
        raise InvalidArgumentError(msg)


def check_shape(name, value, shape, reference=None):
    """Ensure that an array has an expected shape.

    Parameters
    ----------
    name : str
        Description of the array being checked
    value : numpy.ndarray
        Array to check
    shape : tuple of int
        Required shape
    reference : str, optional
        Description of where the required shape comes from, used in the error
        message

    """
    if np.shape(value) != tuple(shape):
        msg = (f'Unable to use "{name}" with shape {np.shape(value)} since it '
               f'must have shape {tuple(shape)}')
        if reference is not None:
            msg += f' to match {reference}'
        raise InvalidArgumentError(msg)


def check_real(name, value):
    """Ensure that an array does not hold complex values.

    Parameters
    ----------
    name : str
        Description of the array being checked
    value : numpy.ndarray
        Array to check

    """
    if np.iscomplexobj(value):
        msg = (f'Unable to use "{name}" with complex values since it must be '
               f'real')
        raise InvalidArgumentError(msg)
