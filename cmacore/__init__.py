# -*- coding: utf-8 -*-
"""Package `cmacore` implements the CMA-ES (Covariance Matrix Adaptation
Evolution Strategy) as a compact ask-and-tell engine.

CMA-ES is a stochastic optimizer for robust non-linear non-convex
derivative- and function-value-free numerical optimization.

CMA-ES searches for a minimizer (a solution x in :math:`R^n`) of an
objective function f (cost function), such that f(x) is minimal. Regarding
f, only a passably reliable ranking of the candidate solutions in each
iteration is necessary. Neither the function values themselves, nor the
gradient of f need to be available or do matter.

The engine, `CMAEngine` (alias `CMA`), keeps the mean, the step-size and
the covariance matrix of a multivariate normal search distribution. The
user controls the iteration loop and termination:

- `CMAEngine.sample` (alias ``ask``) returns a population of candidate
  solutions,
- `CMAEngine.update` (alias ``tell``) adapts the distribution given the
  objective function values of these candidates,
- `CMAEngine.export_state` and `CMAEngine.import_state` save and restore
  the evolving state.

All dense linear algebra goes through an exchangeable backend, by default
`backends.NumpyBackend`.

Testing
=======
From the system shell::

    python -m cmacore.test
    python -m cmacore.test list  # list files to be doctested

or with ``pytest`` from the root folder, which runs the same doctests.

Example
=======
From a python shell::

    import cmacore
    help(cmacore.CMAEngine)
    cmacore.Config.info()  # display options
    es = cmacore.CMAEngine(2 * [0], step_size=0.5)
    for _ in range(1000):
        X = es.sample()
        es.update(X, cmacore.ff.rosen(X))
    es.mean  # close to [1, 1]
    es = cmacore.CMAEngine(8 * [1], seed=1).optimize(cmacore.ff.elli,
                                                     iterations=500,
                                                     verb_disp=100)

:License: BSD 3-Clause.

"""

___author__ = "cmacore authors"
__license__ = "BSD 3-clause"

from . import (backends, evolution_strategy, fitness_functions, interfaces,
               options_parameters, recombination_weights, utilities)
# from . import test  # gives a warning with python -m cmacore.test
test = 'type "import cmacore.test" to access the `test` module of `cmacore`'
from .fitness_functions import ff
from .backends import NumpyBackend, TensorStateError
from .evolution_strategy import CMAEngine, ShapeMismatchError
from .options_parameters import Config, InvalidConfigError, default_options
from .recombination_weights import RecombinationWeights
CMA = CMAEngine  # shortcut for typing without completion

__version__ = "1.0.0"
