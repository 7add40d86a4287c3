# -*- coding: utf-8 -*-
"""`RecombinationWeights` is a list of recombination weights for the CMA-ES.

The dependency chain is

lambda, recombination fraction -> mu -> weights -> mueff -> c1, cmu

"""
import math
from .utilities.math import Mh

class RecombinationWeights(list):
    """a list of strictly positive and decreasing recombination weight
    values which sum to one.

    The weights are used in the mean update as ``m <- sum w_i x_i:lambda``
    and in the rank-mu update of the covariance matrix as ``cmu sum w_i
    y_i y_i^T``, where ``x_i:lambda`` is the i-th best of ``lambda``
    solutions.

    Class attributes/properties:

    - ``lambda_``: population size the weights were derived from
    - ``mu``: number of weights, alias for ``len(self)``
    - ``mueff``: variance effective number of weights, i.e.
      ``sum(self)**2 / sum([w**2 for w in self])``, which equals
      ``1 / sum([w**2 for w in self])``

    Usage:

    >>> from cmacore.recombination_weights import RecombinationWeights
    >>> weights = RecombinationWeights(6)
    >>> print('weights = [%s]' % ', '.join("%.2f" % w for w in weights))
    weights = [0.64, 0.28, 0.08]
    >>> print("mu=%d, sum=%.2f, mueff=%.2f" % (weights.mu, sum(weights),
    ...                                        weights.mueff))
    mu=3, sum=1.00, mueff=2.03
    >>> RecombinationWeights(7).mu, RecombinationWeights(9).mu  # rounding .5 up
    (4, 5)
    >>> weights = RecombinationWeights(10, recombination_frac=1)
    >>> weights.mu == 10 and weights.do_asserts()
    True

    A single weight is possible, which means the best solution becomes
    the new mean:

    >>> list(RecombinationWeights(1))
    [1.0]

    Reference: Hansen 2016, arXiv:1604.00772.
    """
    def __init__(self, lambda_, recombination_frac=0.5):
        """return recombination weights `list`, post condition is
        ``sum(self) == 1`` (up to numerical precision).

        The number of weights, ``self.mu``, is ``max(1,
        round(recombination_frac * lambda_))``, rounding half up. Weights
        are strictly decreasing.

        :param `lambda_`: population size, number of candidate solutions
            per iteration.
        :param `recombination_frac`: fraction of the population which
            contributes to the recombination, in ``(0, 1]``.
        """
        if lambda_ < 1:
            raise ValueError("population size must be >=1, was %s"
                             % str(lambda_))
        if not 0 < recombination_frac <= 1:
            raise ValueError("recombination fraction must be in (0, 1],"
                             " was %s" % str(recombination_frac))
        self.lambda_ = int(lambda_)
        self.recombination_frac = recombination_frac
        mu = max(1, Mh.round_half_up(recombination_frac * self.lambda_))
        weights = [math.log(mu + 0.5) - math.log(i)
                   for i in range(1, mu + 1)]  # raw shape
        w_sum = sum(weights)
        list.__init__(self, [w / w_sum for w in weights])
        self.set_attributes_from_weights()
        self.do_asserts()

    def set_attributes_from_weights(self):
        """set attributes ``mu`` and ``mueff`` from the current weight
        values and return ``self``"""
        self.mu = len(self)
        self.mueff = sum(self)**2 / sum(w**2 for w in self)
        return self

    def do_asserts(self):
        """assert consistency.

        Assert:

        - attributes are up to date
        - weights are strictly positive and decreasing
        - weights sum to one

        """
        assert self.mu == len(self)
        assert all(w > 0 for w in self), self
        assert all(self[i] > self[i + 1] for i in range(len(self) - 1)), self
        assert abs(sum(self) - 1) < 1e-9, sum(self)
        assert 1 - 1e-9 <= self.mueff <= self.mu + 1e-9, (self.mueff, self.mu)
        return True
