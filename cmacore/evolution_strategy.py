# -*- coding: utf-8 -*-
"""CMA-ES (Covariance Matrix Adaptation Evolution Strategy) for non-linear
numerical optimization in the ask-and-tell style.

The main class is `CMAEngine` (alias `CMA`). Its methods `sample` and
`update` (aliases `ask` and `tell`) are to be called in a loop, the
caller decides when to stop::

    import cmacore
    es = cmacore.CMAEngine(2 * [0], step_size=0.5)
    for _ in range(1000):
        X = es.sample()
        es.update(X, cmacore.ff.rosen(X))
    print(es.mean)

The distribution is ``mean + sigma * N(0, C)`` where ``C = B diag(D**2)
B^T`` is decomposed only every ``params.lazy_gap_evals`` evaluations.
Between two decompositions, sampling and step-size adaptation use the
factors of the last decomposition while ``C`` itself is updated in each
iteration.

Reference: N. Hansen (2016). The CMA Evolution Strategy: A Tutorial,
arXiv:1604.00772.
"""
import collections
import numpy as np
from . import interfaces
from .backends import NumpyBackend, TensorStateError
from .options_parameters import Config, CMAParameters, InvalidConfigError
from .utilities import utils

class ShapeMismatchError(ValueError):
    """samples or scores passed to `CMAEngine.update` have the wrong shape"""

CMAEngineState = collections.namedtuple('CMAEngineState', [
    'mean',
    'sigma',
    'pc',
    'ps',
    'B',
    'D',
    'C',
    'invsqrtC',
    'countevals',
    'countevals_eigen',
    ])
"""the evolving state of a `CMAEngine`, replaced as a whole in `update`"""

_tensor_fields = ('mean', 'pc', 'ps', 'B', 'D', 'C', 'invsqrtC')

class CMAEngineResult(collections.namedtuple('CMAEngineResult', [
        'xbest',
        'fbest',
        'evals_best',
        'evaluations',
        'iterations',
        'xfavorite',
        'stds',
    ])):
    """A results tuple from `CMAEngine` property ``result``.

    This tuple contains in the given position and as attribute

    - 0 ``xbest`` best solution evaluated
    - 1 ``fbest`` objective function value of best solution
    - 2 ``evals_best`` evaluation count when ``xbest`` was evaluated
    - 3 ``evaluations`` evaluations overall done
    - 4 ``iterations``
    - 5 ``xfavorite`` distribution mean, to be considered as current
      best estimate of the optimum
    - 6 ``stds`` effective standard deviations ``sigma * diag(C)**0.5``

    """

class BestSolution(object):
    """container to keep track of the best solution seen"""
    def __init__(self, x=None, f=None, evals=None):
        """take `x`, `f`, and `evals` to initialize the best solution
        """
        self.x, self.f, self.evals = x, f, evals

    def update(self, x, f, evals=None):
        """update the best solution if ``f < self.f``
        """
        if self.f is None or f < self.f:
            self.x = x
            self.f = f
            self.evals = evals
        return self

class CMAEngine(interfaces.OOOptimizer):
    """class for non-linear non-convex numerical minimization with CMA-ES.

    The class implements the interface defined in
    `interfaces.OOOptimizer`, namely the methods `ask` (`sample`), `tell`
    (`update`), `disp` and property `result`.

    Parameters
    ----------
        `initial_mean`: `list` or array
            of numbers (like ``[3, 2, 1.2]``), initial solution vector,
            its length defines the search space dimension ``N``
        `config`: `Config` or `dict`
            the user settings, default is ``Config()``, a `dict` is
            passed to `Config.from_dict`
        `backend`: `interfaces.LinearAlgebraBackendBase`
            dense linear algebra provider, by default
            ``backends.NumpyBackend(seed)``
        `seed`: `int`
            seed for the default backend, ignored if `backend` is given
        `**options`:
            overwrite single `Config` fields, like ``step_size=0.1``

    Example
    -------

    >>> import numpy as np
    >>> import cmacore
    >>> es = cmacore.CMAEngine([0.1, 0.2, -0.1], step_size=0.3, seed=1)
    >>> es.N, es.popsize, es.params.mu
    (3, 7, 4)
    >>> X = es.sample()
    >>> X.shape
    (7, 3)
    >>> es.update(X, cmacore.ff.elli(X))
    >>> es.countevals, es.countiter
    (7, 1)
    >>> bool(es.sigma != 0.3) and bool(np.all(es.mean != [0.1, 0.2, -0.1]))
    True

    Samples and scores must fit the population size and dimension:

    >>> es.update(X[1:], cmacore.ff.elli(X[1:]))  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    cmacore.evolution_strategy.ShapeMismatchError: samples must have shape (7, 3), had shape (6, 3)

    Invalid settings are rejected on construction:

    >>> cmacore.CMAEngine([], step_size=0.3)  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: dimension must be >= 1, was 0
    >>> cmacore.CMAEngine([1, 2], recombination_frac=1.5)  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: recombination_frac must be in (0, 1], was 1.5

    Details
    -------
    Most of the work is done in the method `update`. The evolving
    state is kept in a `CMAEngineState` tuple which is replaced as a
    whole, only after all computations of `update` (or `import_state`)
    have succeeded. Hence the arrays returned by the properties ``mean``,
    ``C``, ... are never changed afterwards.

    :See: `Config`, `CMAParameters`, `interfaces.OOOptimizer`

    """
    def __init__(self, initial_mean, config=None, backend=None, seed=None,
                 **options):
        """Instantiate `CMAEngine` object instance using `initial_mean`
        and settings from `config` and `options`.

        Details: this method initializes the dynamic state variables and
        creates a `CMAParameters` instance for static parameters.
        """
        if backend is None:
            backend = NumpyBackend(seed=seed)
        elif seed is not None:
            utils.print_warning('seed=%s is ignored because a backend was'
                                ' given' % str(seed), '__init__', 'CMAEngine')
        self.backend = backend
        try:
            xstart = backend.asarray(initial_mean)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError('initial mean is not a vector of numbers:'
                                     ' %s' % str(e))
        if len(xstart.shape) != 1:
            raise InvalidConfigError('initial mean must be one-dimensional,'
                                     ' had shape %s' % str(xstart.shape))
        N = xstart.shape[0]  # number of objective variables/problem dimension
        if N and not np.all(np.isfinite(xstart)):
            raise InvalidConfigError('initial mean must be finite, was %s'
                                     % str(xstart))

        # process input parameters and set static parameters
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config, N=N)
        if options:
            config = config.replace(**options)
        self.config = config
        self.params = CMAParameters(config, N)
        if N > 100 and self.params.lazy_gap_evals < self.params.lam:
            utils.print_warning('samples_per_eig=%s < popsize=%d invokes an'
                                ' O(N^3) eigendecomposition in each iteration'
                                ' in dimension %d'
                                % (str(self.params.lazy_gap_evals),
                                   self.params.lam, N),
                                '__init__', 'CMAEngine')
        self._weights = backend.asarray(self.params.weights)

        # initializing dynamic state variables
        B = backend.eye(N)  # eigenbasis
        D = backend.ones(N)  # axis lengths, roots of eigenvalues
        self._state = CMAEngineState(
            mean=xstart,  # a copy, see asarray
            sigma=float(config.step_size),
            pc=backend.zeros(N),  # evolution path for C
            ps=backend.zeros(N),  # and for sigma
            B=B,
            D=D,
            C=backend.dot(backend.dot(B, backend.diag(D**2)), backend.transpose(B)),
            invsqrtC=backend.dot(backend.dot(B, backend.diag(1 / D)), backend.transpose(B)),
            countevals=0,  # countiter == countevals // lam
            countevals_eigen=0,  # countevals at last eigendecomposition
        )
        self.fit_sorted = []  # for bookkeeping output only
        self.best = BestSolution()

    @property
    def N(self):
        """search space dimension"""
        return self.params.N
    @property
    def popsize(self):
        """number of samples per iteration, AKA lambda"""
        return self.params.lam
    @property
    def mean(self):
        """distribution mean, the current estimate of the optimum"""
        return self._state.mean
    @property
    def sigma(self):
        """global step-size"""
        return self._state.sigma
    @property
    def pc(self):
        """evolution path for the covariance matrix"""
        return self._state.pc
    @property
    def ps(self):
        """conjugate evolution path for the step-size"""
        return self._state.ps
    @property
    def B(self):
        """eigenbasis of ``C`` as of the last decomposition, columns
        are eigenvectors"""
        return self._state.B
    @property
    def D(self):
        """square roots of the eigenvalues of ``C`` as of the last
        decomposition"""
        return self._state.D
    @property
    def C(self):
        """covariance matrix"""
        return self._state.C
    @property
    def invsqrtC(self):
        """``C**-1/2`` as of the last decomposition"""
        return self._state.invsqrtC
    @property
    def countevals(self):
        return self._state.countevals
    @property
    def countevals_eigen(self):
        return self._state.countevals_eigen
    @property
    def countiter(self):
        return self._state.countevals // self.params.lam
    @property
    def covariance_condition(self):
        """condition number of ``C`` as of the last decomposition"""
        be = self.backend
        return float(be.max(self.D) / be.min(self.D))**2
    @property
    def stds(self):
        """coordinate-wise standard deviations ``sigma * diag(C)**0.5``"""
        s = self._state
        return s.sigma * self.backend.sqrt(self.backend.diagonal(s.C))

    def sample(self):
        """sample ``popsize`` candidate solutions and return them as
        ``[popsize, N]`` array, distributed according to::

            m + sigma * Normal(0,C) = m + sigma * B * D * Normal(0,I)

        using the (possibly outdated) decomposition ``B, D`` of ``C``.
        The state of ``self`` remains unchanged.
        """
        be, s = self.backend, self._state
        arz = be.randn(self.params.lam, self.params.N)
        # row-wise B * (D * z)
        return s.mean + s.sigma * be.dot(arz * s.D, be.transpose(s.B))

    def ask(self, **optional_kwargs):
        """sample candidate solutions, see `sample`"""
        if optional_kwargs:
            raise TypeError('ask() got unexpected keyword arguments %s'
                            % str(sorted(optional_kwargs)))
        return self.sample()

    def update(self, samples, scores):
        """update the evolution paths and the distribution parameters m,
        sigma, and C.

        Parameters
        ----------
            `samples`: ``[popsize, N]`` array_like
                candidate solutions, presumably from calling `sample`,
                ``samples[k][i]`` is the i-th element of solution k.
            `scores`: ``[popsize]`` array_like
                the corresponding objective function values, to be
                minimised

        Raises `ShapeMismatchError` before any change of the state. A
        failing eigendecomposition raises `numpy.linalg.LinAlgError`,
        leaving the state unchanged as well.
        """
        be, par, s = self.backend, self.params, self._state
        N, lam = par.N, par.lam
        try:
            arx = be.asarray(samples)
            fitvals = be.asarray(scores)
        except (TypeError, ValueError) as e:
            raise ShapeMismatchError('samples and scores must be arrays of'
                                     ' numbers: %s' % str(e))
        if tuple(arx.shape) != (lam, N):
            raise ShapeMismatchError('samples must have shape %s, had shape %s'
                                     % (str((lam, N)), str(tuple(arx.shape))))
        if tuple(fitvals.shape) != (lam,):
            raise ShapeMismatchError('scores must have shape %s, had shape %s'
                                     % (str((lam,)), str(tuple(fitvals.shape))))

        ### bookkeeping, all new values go into local variables
        countevals = s.countevals + lam
        xold = s.mean

        ### Sort by fitness and select the mu best
        idx = be.argsort(fitvals)
        arsel = arx[idx[:par.mu]]

        ### recombination, compute new weighted mean value
        xmean = be.dot(self._weights, arsel)

        ### Cumulation: update evolution paths
        y = (xmean - xold) / s.sigma
        z = be.dot(s.invsqrtC, y)  # == C**(-1/2) * (xnew - xold) / sigma
        ps = (1 - par.cs) * s.ps + (par.cs * (2 - par.cs) * par.mueff)**0.5 * z
        ps_norm = be.norm(ps)
        # turn off rank-one accumulation when sigma increases quickly
        hsig = float(ps_norm / (1 - (1 - par.cs)**(2 * countevals / lam))**0.5
                     < par.chiN * (1.4 + 2 / (N + 1)))
        pc = (1 - par.cc) * s.pc + hsig * (par.cc * (2 - par.cc) * par.mueff)**0.5 * y

        ### Adapt covariance matrix C
        artmp = (arsel - xold) / s.sigma
        C = ((1 - par.c1 - par.cmu) * s.C
             # so-called rank-one update, with a minor adjustment for the
             # variance loss from hsig
             + par.c1 * (be.outer(pc, pc)
                         + (1 - hsig) * par.cc * (2 - par.cc) * s.C)
             # so-called rank-mu update
             + par.cmu * be.dot(be.transpose(artmp) * self._weights, artmp))

        ### Adapt step-size sigma
        sigma = s.sigma * float(be.exp((par.cs / par.damps)
                                       * (ps_norm / par.chiN - 1)))

        ### lazy eigendecomposition
        B, D, invsqrtC = s.B, s.D, s.invsqrtC
        countevals_eigen = s.countevals_eigen
        if countevals - countevals_eigen > par.lazy_gap_evals:
            countevals_eigen = countevals
            C, B, D, invsqrtC = self._decompose(C)

        self._state = CMAEngineState(xmean, sigma, pc, ps, B, D, C, invsqrtC,
                                     countevals, countevals_eigen)
        self.fit_sorted = fitvals[idx]
        self.best.update(arx[idx[0]], float(fitvals[idx[0]]), countevals)

    def tell(self, solutions, function_values):
        """update the distribution, see `update`"""
        return self.update(solutions, function_values)

    def _decompose(self, C):
        """return ``C, B, D, invsqrtC`` from the eigendecomposition of the
        symmetric matrix `C`, where the returned ``C`` is the
        symmetrized recomposition.

        Raise `numpy.linalg.LinAlgError` if `C` is not positive definite.
        """
        be = self.backend
        U, s = be.svd_symmetric(C)
        if not be.min(s) > 0:
            raise np.linalg.LinAlgError(
                "covariance matrix was not positive definite"
                " with a minimal eigenvalue of %e." % float(be.min(s)))
        # does nothing in exact arithmetic but enforces symmetry
        C = be.dot(be.dot(U, be.diag(s)), be.transpose(U))
        D = be.sqrt(s)
        invsqrtC = be.dot(be.dot(U, be.diag(1 / D)), be.transpose(U))
        return C, U, D, invsqrtC

    def export_state(self):
        """return the evolving state as `dict`.

        Tensors are serialized with ``self.backend.to_state``, ``sigma``
        is a `float` and the evaluation counters are `int`. With the
        default backend, the `dict` survives ``ast.literal_eval(repr(.))``.

        >>> import ast, numpy as np
        >>> import cmacore
        >>> es = cmacore.CMAEngine(3 * [1], seed=4).optimize(
        ...     cmacore.ff.sphere, iterations=3)
        >>> state = es.export_state()
        >>> list(state)
        ['mean', 'sigma', 'pc', 'ps', 'B', 'D', 'C', 'invsqrtC', 'countevals', 'countevals_eigen']
        >>> es2 = cmacore.CMAEngine(3 * [0]).import_state(
        ...     ast.literal_eval(repr(state)))
        >>> bool(np.all(es2.mean == es.mean)) and es2.sigma == es.sigma
        True
        >>> bool(np.all(es2.C == es.C)) and es2.countevals == 21
        True

        """
        be, s = self.backend, self._state
        state = {}
        for key in CMAEngineState._fields:
            val = getattr(s, key)
            if key in _tensor_fields:
                state[key] = be.to_state(val)
            elif key == 'sigma':
                state[key] = float(val)
            else:
                state[key] = int(val)
        return state

    def import_state(self, state):
        """replace the entire evolving state with `state` from
        `export_state` and return ``self``.

        All fields are decoded and checked before any is replaced, on
        failure `backends.TensorStateError` is raised and ``self`` remains
        unchanged. On success, the record of the best solution and of the
        last scores is reset, because they belong to the replaced state.

        >>> import cmacore
        >>> es = cmacore.CMAEngine(2 * [1])
        >>> state = es.export_state()
        >>> state['C'] = {'shape': [2, 2], 'dtype': 'float64', 'data': [[1.0, 0.0]]}
        >>> es.import_state(state)  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        cmacore.backends.TensorStateError: field 'C': data of shape (1, 2) found where shape [2, 2] was declared
        >>> del state['C']
        >>> es.import_state(state)  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        cmacore.backends.TensorStateError: state misses field(s) ['C']

        """
        be, N = self.backend, self.params.N
        try:
            missing = [key for key in CMAEngineState._fields if key not in state]
        except TypeError:
            raise TensorStateError('state must be a dict, was %s' % type(state))
        if missing:
            raise TensorStateError('state misses field(s) %s' % str(missing))
        shapes = {'mean': (N,), 'pc': (N,), 'ps': (N,), 'D': (N,),
                  'B': (N, N), 'C': (N, N), 'invsqrtC': (N, N)}
        fields = {}
        for key in _tensor_fields:
            try:
                fields[key] = be.from_state(state[key])
            except ValueError as e:
                raise TensorStateError("field '%s': %s" % (key, str(e)))
            if tuple(fields[key].shape) != shapes[key]:
                raise TensorStateError("field '%s' has shape %s, expected %s"
                                       % (key, str(tuple(fields[key].shape)),
                                          str(shapes[key])))
        try:
            sigma = float(state['sigma'])
            countevals = int(state['countevals'])
            countevals_eigen = int(state['countevals_eigen'])
        except (TypeError, ValueError) as e:
            raise TensorStateError('invalid scalar field in state: %s' % str(e))
        if not 0 < sigma < np.inf:
            raise TensorStateError('sigma must be positive and finite, was %s'
                                   % str(sigma))
        if not 0 <= countevals_eigen <= countevals:
            raise TensorStateError('evaluation counters must satisfy 0 <='
                                   ' countevals_eigen=%d <= countevals=%d'
                                   % (countevals_eigen, countevals))
        if not be.min(fields['D']) > 0:
            raise TensorStateError("field 'D' must be strictly positive")
        self._state = CMAEngineState(sigma=sigma, countevals=countevals,
                                     countevals_eigen=countevals_eigen,
                                     **fields)
        self.fit_sorted = []
        self.best = BestSolution()
        return self

    @property
    def result(self):
        """a `CMAEngineResult` `namedtuple` ``(xbest, fbest, evals_best,
        evaluations, iterations, xfavorite, stds)``
        """
        return CMAEngineResult(self.best.x,
                               self.best.f,
                               self.best.evals,
                               self.countevals,
                               self.countiter,
                               self.mean,
                               self.stds)

    def disp(self, verb_modulo=1):
        """`print` some iteration info to `stdout` every `verb_modulo`
        iterations, never if `verb_modulo` is 0 or `None`
        """
        if not verb_modulo:
            return
        iteration = self.countiter
        if iteration < 1 or not len(self.fit_sorted):
            return
        if iteration == 1 or iteration % (10 * verb_modulo) < 1:
            print('Iterat #Fevals   function value  axis ratio  sigma  min&max std')
        if iteration <= 2 or iteration % verb_modulo < 1:
            stds = self.stds
            print('%5d %7d %16.9e %10.1e %8.1e %s' % (
                iteration, self.countevals, float(self.fit_sorted[0]),
                self.covariance_condition**0.5, self.sigma,
                utils.num2str(min(stds)) + '  ' + utils.num2str(max(stds))))

    def __repr__(self):
        return '<%s N=%d popsize=%d countevals=%d sigma=%s>' % (
            self.__class__.__name__, self.N, self.popsize, self.countevals,
            utils.num2str(self.sigma))

CMA = CMAEngine  # shortcut for typing without completion
