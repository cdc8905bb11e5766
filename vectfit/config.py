"""Module for handling global configuration in vectfit.

This module exports a single object, `config`, that controls how fits are
carried out. It acts like a dictionary but only accepts known keys and
validates their values.

Examples
--------
>>> import vectfit
>>> vectfit.config['num_workers'] = 4
>>> print(vectfit.config)
{'num_workers': 4, 'log': False}

"""
from collections.abc import MutableMapping
from contextlib import contextmanager
import os
from typing import Any, Dict, Iterator

__all__ = ["config"]


class _Config(MutableMapping):
    """A configuration dictionary for vectfit with validated values.

    Every key always has a value; deleting a key restores its default.

    Attributes
    ----------
    num_workers : int
        Number of worker threads used to process response channels. A value
        of 1 (default) processes channels serially. Initialized from the
        VECTFIT_NUM_WORKERS environment variable when set.
    log : bool or int
        Default verbosity of :func:`vectfit.vectfit` when its ``log`` argument
        is not given. Initialized from the VECTFIT_LOG environment variable
        when set.

    """
    _DEFAULTS: Dict[str, Any] = {
        'num_workers': 1,
        'log': False
    }
    _ENV_KEYS: Dict[str, str] = {
        'num_workers': 'VECTFIT_NUM_WORKERS',
        'log': 'VECTFIT_LOG'
    }

    def __init__(self, data: dict = ()):
        self._mapping: Dict[str, Any] = dict(self._DEFAULTS)
        self.update(data)

    def __getitem__(self, key: str) -> Any:
        return self._mapping[key]

    def __delitem__(self, key: str):
        """Reset a configuration key to its default value."""
        if key not in self._DEFAULTS:
            raise KeyError(key)
        self._mapping[key] = self._DEFAULTS[key]

    def __setitem__(self, key: str, value: Any):
        if key == 'num_workers':
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("'num_workers' must be an integer.")
            if value < 1:
                raise ValueError("'num_workers' must be at least 1.")
            self._mapping[key] = value
        elif key == 'log':
            if not isinstance(value, int):
                raise TypeError("'log' must be a boolean or an integer.")
            if value < 0:
                raise ValueError("'log' must be non-negative.")
            self._mapping[key] = value
        else:
            valid_keys = list(self._DEFAULTS.keys())
            raise KeyError(
                f"Unrecognized config key: {key}. Acceptable keys are: "
                f"{', '.join(repr(k) for k in valid_keys)}."
            )

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return repr(self._mapping)

    @contextmanager
    def patch(self, key: str, value: Any):
        """Context manager to temporarily change a configuration value.

        After the `with` block, the configuration is restored to its original
        state.

        Parameters
        ----------
        key : str
            The key of the configuration value to change.
        value
            The new temporary value.

        Examples
        --------
        >>> with vectfit.config.patch('num_workers', 8):
        ...     result = vectfit.vectfit(f, s, poles, weight)

        """
        previous_value = self[key]
        self[key] = value
        try:
            yield
        finally:
            self[key] = previous_value


def _default_config(**kwargs) -> _Config:
    """Create a configuration initialized from environment variables.

    Returns
    -------
    _Config
        A new configuration object.

    """
    config = _Config(kwargs)
    for key, var in _Config._ENV_KEYS.items():
        if var in os.environ:
            try:
                value = int(os.environ[var])
            except ValueError:
                raise ValueError(f"Environment variable {var} must be an "
                                 f"integer, got '{os.environ[var]}'.") from None
            config[key] = value
    return config


# Global configuration dictionary for vectfit settings.
config = _default_config()
