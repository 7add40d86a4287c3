"""various math utilities, notably `Mh` (`MathHelperFunctions`)"""
import numpy as np

class MathHelperFunctions(object):
    """static convenience math helper functions"""
    @staticmethod
    def equals_approximately(a, b, eps=1e-12):
        if a < 0:
            a, b = -1 * a, -1 * b
        return (a - eps < b < a + eps) or ((1 - eps) * a < b < (1 + eps) * a)
    @staticmethod
    def vequals_approximately(a, b, eps=1e-12):
        a, b = np.array(a, dtype=float), np.array(b, dtype=float)
        idx = np.nonzero(a < 0)
        if len(idx[0]):
            a[idx], b[idx] = -1 * a[idx], -1 * b[idx]
        return bool((np.all(a - eps < b) and np.all(b < a + eps))  # avoid np.bool_
                    or (np.all((1 - eps) * a < b) and np.all(b < (1 + eps) * a)))
    @staticmethod
    def is_symmetric(A, eps=1e-12):
        """return `True` if ``A`` equals its transpose up to relative
        tolerance `eps` w.r.t. the largest absolute entry.

        >>> from cmacore.utilities.math import Mh
        >>> Mh.is_symmetric([[2, 1], [1, 3]])
        True
        >>> Mh.is_symmetric([[2, 1], [1.1, 3]])
        False

        """
        A = np.asarray(A, dtype=float)
        scale = np.max(np.abs(A)) if A.size else 0
        return bool(np.all(np.abs(A - A.T) <= eps * scale))
    @staticmethod
    def chiN(dimension):
        """approximation of the expectation of ``norm(randn(dimension))``,
        namely ``N**0.5 * (1 - 1 / (4 * N) + 1 / (21 * N**2))``.

        The exact value can be computed by::

            from scipy.special import gamma
            return 2**0.5 * gamma((dimension + 1) / 2) / gamma(dimension / 2)

        >>> from cmacore.utilities.math import Mh
        >>> assert abs(Mh.chiN(1) - 0.7978845608) < 0.05
        >>> assert abs(Mh.chiN(100) - 9.975) < 1e-2

        """
        N = dimension
        return N**0.5 * (1 - 1. / (4 * N) + 1. / (21 * N**2))
    @staticmethod
    def round_half_up(x):
        """round to the nearest integer, ties away from zero for positive
        `x`, unlike the builtin `round` which rounds ties to even.

        >>> from cmacore.utilities.math import Mh
        >>> Mh.round_half_up(4.5), round(4.5), Mh.round_half_up(3.49)
        (5, 4, 3)

        """
        return int(np.floor(x + 0.5))

Mh = MathHelperFunctions
