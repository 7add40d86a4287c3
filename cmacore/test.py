#!/usr/bin/env python
"""test module of `cmacore` package.

Usage::

    python -m cmacore.test -h    # print this docstring
    python -m cmacore.test       # doctest all (listed) files
    python -m cmacore.test list  # list files to be doctested
    python -m cmacore.test interfaces.py [file2 [file3 [...]]] # doctest only these

or equivalently by passing Python code::

    python -c "import cmacore.test; cmacore.test.main()"  # doctest all (listed) files
    python -c "import cmacore.test; cmacore.test.main('list')"  # show files in doctest list

File(name)s are interpreted within the package. Without a filename
argument, all files from attribute `files_for_doctest` are tested.

The same doctests are collected by ``pytest`` (see ``setup.cfg``).
"""
import os, sys
import doctest

files_for_doctest = ['backends.py',
                     'evolution_strategy.py',
                     'fitness_functions.py',
                     'interfaces.py',
                     'options_parameters.py',
                     'recombination_weights.py',
                     'test.py',
                     os.path.join('utilities', 'math.py'),
                     os.path.join('utilities', 'utils.py'),
    ]

def various_doctests():
    """various doc tests.

    This function describes test cases and might in future become
    helpful as an experimental tutorial as well. The main testing feature
    at the moment is by doctest with ``cmacore.test.main()`` in a Python
    shell or by ``python -m cmacore.test`` in a system shell.

    Convergence on the 2-D Rosenbrock function from the origin with the
    default configuration:

        >>> import numpy as np
        >>> import cmacore
        >>> es = cmacore.CMAEngine([0, 0], seed=1)
        >>> for _ in range(1000):
        ...     X = es.sample()
        ...     es.update(X, cmacore.ff.rosen(X))
        >>> assert np.max(np.abs(es.mean - [1, 1])) < 1e-4, es.mean
        >>> assert es.result.fbest < 1e-8 and es.result.iterations == 1000

    Recombination weights are positive, sum to one and are sorted:

        >>> from cmacore.utilities.math import Mh
        >>> for lam in [1, 2, 5, 6, 13, 100]:
        ...     for frac in [0.1, 0.5, 0.7, 1]:
        ...         w = cmacore.RecombinationWeights(lam, frac)
        ...         assert all(wi > 0 for wi in w), (lam, frac, w)
        ...         assert Mh.equals_approximately(sum(w), 1), (lam, frac, sum(w))
        ...         assert list(w) == sorted(w, reverse=True), (lam, frac, w)

    Updates with samples or scores of the wrong shape are rejected
    without changing the state:

        >>> es = cmacore.CMAEngine(3 * [1], seed=2)
        >>> X = es.sample()
        >>> es.update(X, cmacore.ff.sphere(X))
        >>> mean, sigma, C = es.mean, es.sigma, es.C
        >>> X = es.sample()
        >>> for samples, scores in [(X[:-1], cmacore.ff.sphere(X[:-1])),
        ...                         (X, cmacore.ff.sphere(X)[:-1]),
        ...                         (X[:, :-1], cmacore.ff.sphere(X)),
        ...                         ([[1, 2], [3]], [1, 2])]:
        ...     try:
        ...         es.update(samples, scores)
        ...     except cmacore.ShapeMismatchError:
        ...         pass
        ...     else:
        ...         raise AssertionError('ShapeMismatchError not raised')
        >>> assert es.mean is mean and es.sigma == sigma and es.C is C
        >>> es.countevals
        7

    The covariance matrix remains symmetric and positive definite:

        >>> es = cmacore.CMAEngine(5 * [1], seed=3)
        >>> for _ in range(300):
        ...     X = es.sample()
        ...     es.update(X, cmacore.ff.elli(X))
        ...     assert Mh.is_symmetric(es.C, 1e-10)
        ...     assert np.all(es.D > 0)
        >>> assert es.covariance_condition > 1e2  # C has learned the ellipsoid

    The eigendecomposition is only refreshed when more than
    ``samples_per_eig`` evaluations passed since the last refresh:

        >>> es = cmacore.CMAEngine(4 * [1], samples_per_eig=20, seed=5)
        >>> es.popsize
        8
        >>> refreshed = []
        >>> for i in range(1, 10):
        ...     B, D, invsqrtC, C = es.B, es.D, es.invsqrtC, es.C
        ...     gap = es.countevals + es.popsize - es.countevals_eigen
        ...     X = es.sample()
        ...     es.update(X, cmacore.ff.elli(X))
        ...     unchanged = es.B is B and es.D is D and es.invsqrtC is invsqrtC
        ...     assert unchanged == (gap <= 20) and es.C is not C
        ...     if not unchanged:
        ...         refreshed.append(i)
        >>> refreshed
        [3, 6, 9]

    The update does not depend on the order of the samples:

        >>> es1 = cmacore.CMAEngine(3 * [1], seed=6)
        >>> es2 = cmacore.CMAEngine(3 * [1], seed=7)
        >>> X = es1.sample()
        >>> f = cmacore.ff.elli(X)
        >>> perm = np.random.RandomState(8).permutation(len(f))
        >>> es1.update(X, f)
        >>> es2.update(X[perm], f[perm])
        >>> assert Mh.vequals_approximately(es1.mean, es2.mean)
        >>> assert Mh.vequals_approximately(es1.C, es2.C)
        >>> assert Mh.equals_approximately(es1.sigma, es2.sigma)

    Export and import of the state after some iterations:

        >>> import ast
        >>> es = cmacore.CMAEngine(4 * [0.5], step_size=0.2, seed=9)
        >>> es = es.optimize(cmacore.ff.tablet, iterations=20, vectorized=True)
        >>> saved = repr(es.export_state())  # a string of Python literals
        >>> es2 = cmacore.CMAEngine(4 * [0.5], step_size=0.2, seed=10)
        >>> es2 = es2.import_state(ast.literal_eval(saved))
        >>> assert np.all(es2.mean == es.mean) and es2.sigma == es.sigma
        >>> assert np.all(es2.C == es.C) and np.all(es2.B == es.B)
        >>> assert (es2.countevals, es2.countevals_eigen) == (es.countevals, es.countevals_eigen)

    Importing a state also resets the record of the best solution:

        >>> assert es.result.evals_best > 0
        >>> es = es.import_state(cmacore.CMAEngine(4 * [0.5]).export_state())
        >>> es.result.evaluations, es.result.evals_best, es.result.fbest
        (0, None, None)

    A failing import leaves the state untouched:

        >>> state = ast.literal_eval(saved)
        >>> state['invsqrtC']['data'] = 'garbage'
        >>> mean = es2.mean
        >>> try:
        ...     es2.import_state(state)
        ... except cmacore.TensorStateError as e:
        ...     print('import failed')
        import failed
        >>> assert es2.mean is mean
        >>> cmacore.CMAEngine(3 * [0.5]).import_state(ast.literal_eval(saved))  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        cmacore.backends.TensorStateError: field 'mean' has shape (4,), expected (3,)

    Numerical failure of the eigendecomposition is propagated and leaves
    the state untouched:

        >>> class SingularBackend(cmacore.NumpyBackend):
        ...     def svd_symmetric(self, C):
        ...         U, s = super(SingularBackend, self).svd_symmetric(C)
        ...         return U, 0 * s
        >>> es = cmacore.CMAEngine([0, 0], backend=SingularBackend(seed=1))
        >>> C, mean = es.C, es.mean
        >>> X = es.sample()
        >>> try:
        ...     es.update(X, cmacore.ff.sphere(X))
        ... except np.linalg.LinAlgError as e:
        ...     print(str(e).split(' with')[0])
        covariance matrix was not positive definite
        >>> assert es.C is C and es.mean is mean and es.countevals == 0

    A covariance matrix with a negative eigenvalue is not repaired, the
    next decomposition raises:

        >>> es = cmacore.CMAEngine([0, 0], seed=1)
        >>> state = es.export_state()
        >>> state['C'] = es.backend.to_state([[1, 0], [0, -5]])
        >>> es = es.import_state(state)
        >>> C, mean, D = es.C, es.mean, es.D
        >>> X = es.sample()
        >>> try:
        ...     es.update(X, cmacore.ff.sphere(X))
        ... except np.linalg.LinAlgError as e:
        ...     print(str(e).split(' with')[0])
        covariance matrix was not positive definite
        >>> assert es.C is C and es.mean is mean and es.D is D and es.countevals == 0

    An injected noise source makes sampling deterministic:

        >>> be = cmacore.NumpyBackend(randn=lambda lam, N: np.ones((lam, N)))
        >>> es = cmacore.CMAEngine([0, 1], backend=be, step_size=2)
        >>> X = es.sample()
        >>> X.shape, X[0].tolist()
        ((6, 2), [2.0, 3.0])
        >>> es.stds.tolist()
        [2.0, 2.0]

    Options can be given as `dict` with strings like in
    `cmacore.default_options`:

        >>> cmacore.CMAEngine(2 * [0], {'popsize': '2 * N  # twice the dimension'}).popsize
        4
        >>> try:
        ...     cmacore.CMAEngine([1., 2.], sigma0=1)
        ... except cmacore.InvalidConfigError as e:
        ...     print(str(e).split(',')[0])
        unknown option(s) ['sigma0']
        >>> import warnings
        >>> with warnings.catch_warnings(record=True) as warns:
        ...     warnings.simplefilter('always')
        ...     es = cmacore.CMAEngine(2 * [0], popsize=2, recombination_frac=0.2)
        >>> str(warns[0].message)  # doctest: +ELLIPSIS
        'only one parent (mu=1) from popsize=2 and recombination_frac=0.2 (class=CMAParameters ...'

    """

def doctest_files(file_list=files_for_doctest, **kwargs):
    """doctest all (listed) files of the `cmacore` package.

    Details: accepts ``verbose`` and all other keyword arguments that
    `doctest.testfile` would accept, while negative ``verbose`` values
    are passed as 0.
    """
    if not isinstance(file_list, (list, tuple)):
        file_list = [file_list]
    verbosity_here = kwargs.get('verbose', 0)
    if verbosity_here < 0:
        kwargs['verbose'] = 0
    failures = 0
    for file_ in file_list:
        file_ = file_.strip().strip(os.path.sep)
        if file_.startswith('cmacore' + os.path.sep):
            file_ = file_[len('cmacore' + os.path.sep):]
        if verbosity_here >= 0:
            print('doctesting %s ...' % file_,
                  ' ' * (max(len(_file) for _file in file_list) -
                         len(file_)),
                  end="")
            sys.stdout.flush()
        report = doctest.testfile(file_,
                                  package=__package__ or 'cmacore',
                                  **kwargs)
        failures += report[0]
        if verbosity_here >= 0:
            print(report)
    return failures

def get_version():
    from . import __version__
    return __version__

def main(*args, **kwargs):
    """test the `cmacore` package.

    The first argument can be '-h' or '--help' or 'list' to list all
    files to be tested. Otherwise, arguments can be file(name)s to be
    tested, where names are interpreted relative to the package root
    and a leading 'cmacore' + path separator is ignored.

    By default all files are tested.

    :See also: ``python -c "import cmacore.test; help(cmacore.test)"``
    """
    if len(args) > 0:
        if args[0].startswith(('-h', '--h')):
            print(__doc__)
            return 0
        elif args[0].startswith('list'):
            for file_ in files_for_doctest:
                print(file_)
            return 0
    else:
        print("doctesting `cmacore` package (v%s) by calling `doctest_files`:"
              % get_version())
    return doctest_files(list(args) if args else files_for_doctest, **kwargs)

if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]) > 0)  # 0 if failures == 0 else 1
