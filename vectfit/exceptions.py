class VectFitError(Exception):
    """Root exception class for vectfit."""


class InvalidArgumentError(VectFitError, ValueError):
    """Argument passed was invalid."""


class ConjugatePairError(InvalidArgumentError):
    """Complex poles are not arranged in conjugate pairs."""
