# -*- coding: utf-8 -*-
"""versatile container for test objective functions.

For the time being this is probably best used like::

    from cmacore.fitness_functions import ff

All functions accept a single solution vector, returning a `float`, or a
population of solutions as ``[popsize, N]`` array, returning one value
per row, such that ``ff.rosen(es.sample())`` works as expected.
"""
import numpy as np

def _vectorized(fun):
    """return a function which applies `fun` to the rows of a 2-D
    argument and otherwise to the argument as a single row
    """
    def wrapper(x, *args, **kwargs):
        x = np.asarray(x, dtype=float)
        if x.ndim > 1:
            return fun(x, *args, **kwargs)
        return float(fun(x[None, :], *args, **kwargs)[0])
    wrapper.__name__ = fun.__name__
    wrapper.__doc__ = fun.__doc__
    return wrapper

class FitnessFunctions(object):
    """collection of objective functions.

    >>> import numpy as np
    >>> from cmacore.fitness_functions import ff
    >>> ff.sphere([1, 2])
    5.0
    >>> ff.rosen([1, 1, 1]), ff.rosen(np.ones((4, 2))).tolist()
    (0.0, [0.0, 0.0, 0.0, 0.0])
    >>> ff.rosen([0, 0])
    1.0
    >>> ff.elli(np.array([[1, 0], [0, 1]])).tolist()
    [1.0, 1000000.0]

    """
    @staticmethod
    @_vectorized
    def sphere(X):
        """sphere, ``sum(x**2)``, test objective function"""
        return np.sum(X**2, axis=1)

    @staticmethod
    @_vectorized
    def elli(X, cond=1e6):
        """ellipsoid test objective function with condition number `cond`"""
        N = X.shape[1]
        if N == 1:
            return X[:, 0]**2
        return np.sum(cond**(np.arange(N) / (N - 1)) * X**2, axis=1)

    @staticmethod
    @_vectorized
    def tablet(X):
        """discus test objective function"""
        return np.sum(X**2, axis=1) + (1e6 - 1) * X[:, 0]**2

    @staticmethod
    @_vectorized
    def rosen(X, alpha=1e2):
        """Rosenbrock test objective function, minimum is ``f(1, ..., 1)
        == 0``"""
        if X.shape[1] < 2:
            raise ValueError('dimension must be greater one')
        return np.sum(alpha * (X[:, :-1]**2 - X[:, 1:])**2
                      + (1. - X[:, :-1])**2, axis=1)

ff = FitnessFunctions()
