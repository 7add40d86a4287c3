"""Very few interface defining base class definitions"""

class OOOptimizer(object):
    """abstract base class for an Object Oriented Optimizer interface.

    Relevant methods are `ask`, `tell`, `optimize` and `disp`, and
    property `result`. Only `optimize` is fully implemented in this base
    class.

    Examples
    --------
    All examples minimize the function `elli`, the output is not shown.

    First we need::

        # CMAEngine derives from the OOOptimizer class
        from cmacore import CMAEngine
        from cmacore.fitness_functions import ff

    The shortest example uses the inherited method
    `OOOptimizer.optimize`::

        es = CMAEngine(8 * [0.1], step_size=0.5).optimize(ff.elli, iterations=500)

    Virtually the same example can be written with an explicit loop
    instead of using `optimize`. This gives the necessary insight into
    the `OOOptimizer` class interface and entire control over the
    iteration loop::

        optim = CMAEngine(9 * [0.5], step_size=0.3)

        # this loop resembles optimize()
        for _ in range(500):
            X = optim.ask()      # get candidate solutions
            f = [ff.elli(x) for x in X]  # evaluate solutions
            optim.tell(X, f)     # do all the real "update" work
            optim.disp(20)       # display info every 20th iteration

        print('best f-value =', optim.result[1])
        print('mean =', optim.mean)

    Details
    -------
    Most of the work is done in the methods `tell` or `ask`. The property
    `result` provides more useful output. There is no termination
    criterion, the caller decides when to stop.

    """
    def ask(self, **optional_kwargs):
        """abstract method, AKA "get" or "sample_distribution", deliver
        new candidate solution(s), a list of "vectors"
        """
        raise NotImplementedError('method ask() must be implemented in derived class')
    def tell(self, solutions, function_values):
        """abstract method, AKA "update", pass f-values and prepare for
        next iteration
        """
        raise NotImplementedError('method tell() must be implemented in derived class')
    def disp(self, modulo=None):
        """abstract method, display some iteration info when
        ``self.countiter % modulo < 1``, using a reasonable
        default for `modulo` if ``modulo is None``.
        """
    @property
    def result(self):
        """abstract property, contain ``(x, f(x), ...)``, that is, the
        minimizer, its function value, ...
        """
        raise NotImplementedError('result property is not implemented')

    def optimize(self, objective_fct,
                 iterations=None, maxfun=None,
                 args=(),
                 verb_disp=None,
                 callback=None,
                 vectorized=False):
        """run ask-and-tell iterations on ``objective_fct`` and return
        ``self``, allowing for a call like::

            solver = CMAEngine(x0).optimize(f, iterations=100)

        and investigate the state of the solver thereafter.

        Arguments
        ---------

        ``objective_fct``: f(x: array_like) -> float
            function to be minimized. With ``vectorized=True``, ``f``
            receives the entire population as ``[popsize, N]`` array and
            returns one value per row.
        ``iterations``: number
            number of iterations to conduct
        ``maxfun``: number
            maximal number of function evaluations
        ``args``: sequence_like
            arguments passed to ``objective_fct``
        ``verb_disp``: number
            print to screen every ``verb_disp`` iteration, `None` or 0
            for never
        ``callback``: callable or list of callables
            called like ``callback(self)`` after each iteration

        At least one of ``iterations`` and ``maxfun`` must be given,
        because the optimizer has no termination criteria of its own.

        >>> import cmacore
        >>> es = cmacore.CMAEngine(3 * [1], step_size=0.5, seed=3)
        >>> es = es.optimize(cmacore.ff.sphere, iterations=5)
        >>> es.countiter, es.countevals
        (5, 35)
        >>> es = es.optimize(cmacore.ff.sphere, maxfun=20, vectorized=True)
        >>> es.countevals
        56

        """
        if iterations is None and maxfun is None:
            raise ValueError('`iterations` or `maxfun` must be given,'
                             ' there are no termination criteria otherwise')
        callback = self._prepare_callback_list(callback)

        citer, cevals = 0, 0
        while True:
            if (maxfun is not None and cevals >= maxfun) or (
                  iterations is not None and citer >= iterations):
                break
            citer += 1

            X = self.ask()  # deliver candidate solutions
            if vectorized:
                fitvals = objective_fct(X, *args)
            else:
                fitvals = [objective_fct(x, *args) for x in X]
            cevals += len(fitvals)
            self.tell(X, fitvals)  # all the work is done here
            for f in callback:
                f(self)
            self.disp(verb_disp)  # disp does nothing if not overwritten

        if verb_disp:  # do not print by default to allow silent verbosity
            self.disp(1)
            print('best f-value =', self.result[1])
            print('solution =', self.result[0])

        return self

    def _prepare_callback_list(self, callback):  # helper function
        """return a list of callbacks.

        ``callback`` can be a `callable` or a `list` (or iterable) of
        callables. Otherwise a `ValueError` exception is raised.
        """
        if callback is None:
            callback = []
        if callable(callback):
            callback = [callback]
        try:
            callback = list(callback)
            for c in callback:
                if not callable(c):
                    raise ValueError("""callback argument %s is not
                        callable""" % str(c))
        except TypeError:
            raise ValueError("""callback argument must be a `callable` or
                an iterable (e.g. a list) of callables, after some
                processing it was %s""" % str(callback))
        return callback

class LinearAlgebraBackendBase(object):
    """abstract base class for the dense linear algebra operations used
    by `cmacore.evolution_strategy.CMAEngine`.

    Elementwise arithmetic and comparisons are expected to work with the
    usual operators on the returned arrays. All methods are synchronous,
    their return value is fully materialized.

    Tensor (de)serialization via `to_state` and `from_state` is opaque to
    the caller, however `from_state` must raise a `ValueError` (ideally a
    `cmacore.backends.TensorStateError`) when the payload cannot be
    decoded.
    """
    def asarray(self, x):
        """return `x` as new backend float array, a copy"""
        raise NotImplementedError
    def zeros(self, shape):
        raise NotImplementedError
    def ones(self, shape):
        raise NotImplementedError
    def eye(self, dimension):
        raise NotImplementedError
    def diag(self, vector):
        """return square matrix with `vector` on the diagonal"""
        raise NotImplementedError
    def diagonal(self, A):
        """return the diagonal of square matrix `A` as new vector"""
        raise NotImplementedError
    def transpose(self, A):
        raise NotImplementedError
    def dot(self, A, B):
        raise NotImplementedError
    def outer(self, a, b):
        raise NotImplementedError
    def randn(self, number, dimension):
        """return ``[number, dimension]`` array of independent standard
        normal deviates"""
        raise NotImplementedError
    def argsort(self, values):
        """return indices sorting `values` ascending, ties resolved by
        position (stable sort)"""
        raise NotImplementedError
    def sum(self, x, axis=None):
        raise NotImplementedError
    def min(self, x):
        raise NotImplementedError
    def max(self, x):
        raise NotImplementedError
    def sqrt(self, x):
        raise NotImplementedError
    def exp(self, x):
        raise NotImplementedError
    def norm(self, x):
        """Euclidean norm"""
        raise NotImplementedError
    def svd_symmetric(self, C):
        """return ``U, s`` such that ``C ~= U diag(s) U^T``, columns of
        ``U`` are orthonormal, for symmetric `C`.

        The values ``s`` keep their sign, that is, ``s`` has negative
        entries if `C` is not positive semi-definite. Their order need
        not be sorted.
        """
        raise NotImplementedError
    def to_state(self, x):
        """return opaque serializable representation of array `x`"""
        raise NotImplementedError
    def from_state(self, state):
        """return array from representation generated by `to_state`"""
        raise NotImplementedError
