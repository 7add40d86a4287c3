# -*- coding: utf-8 -*-
"""Options and derived (strategy) parameters for `cmacore.CMAEngine`.

`Config` holds the few user settings, `CMAParameters` the hyperparameters
derived from them and the dimension.
"""
import collections
import math
from .recombination_weights import RecombinationWeights
from .utilities import utils
from .utilities.math import Mh

class InvalidConfigError(ValueError):
    """configuration (or initial mean) does not permit an engine"""

def default_options(
    # string values are evaluated with `N` (dimension) as known word
    step_size='0.5  # initial step-size sigma0, standard deviation in any coordinate',
    popsize='None  # population size lambda, None means 4 + int(3 * log(N))',
    recombination_frac='0.5  # fraction of the population used for recombination, in (0, 1]',
    samples_per_eig='None  # number of evaluations between eigendecompositions,'
                    ' None means popsize / (c1 + cmu) / N / 10',
    ):
    """use this function to get keyword completion for `Config.from_dict`.

    ``cmacore.Config.info()`` displays the same options nicely.
    """
    return dict(locals())

class Config(collections.namedtuple('Config', [
        'step_size',
        'popsize',
        'recombination_frac',
        'samples_per_eig',
    ])):
    """immutable configuration of a `CMAEngine`.

    - 0 ``step_size`` initial global step-size, positive
    - 1 ``popsize`` population size lambda or `None` for the default
      ``4 + int(3 * log(N))``
    - 2 ``recombination_frac`` fraction of lambda used as parents, in
      ``(0, 1]``
    - 3 ``samples_per_eig`` evaluations between two eigendecompositions
      or `None` for the default

    >>> from cmacore import Config
    >>> Config()
    Config(step_size=0.5, popsize=None, recombination_frac=0.5, samples_per_eig=None)
    >>> Config(popsize=10).popsize
    10
    >>> Config(step_size=-1)
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: step_size must be a positive finite number, was -1

    Options are read from a `dict` which may contain strings like the
    ones from `default_options`, where the comment is ignored:

    >>> c = Config.from_dict({'popsize': '8  # more robust', 'step_size': '2e-1'})
    >>> c.popsize, c.step_size
    (8, 0.2)
    >>> Config.from_dict({'popsize': '4 + int(3 * log(N))'}, N=10).popsize
    10
    >>> Config.from_dict({'sigma0': 1})
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: unknown option(s) ['sigma0'], valid options are ['step_size', 'popsize', 'recombination_frac', 'samples_per_eig']

    The string defaults evaluate to the defaults of the constructor, and
    `replace` checks keys and values alike:

    >>> Config.defaults() == Config()
    True
    >>> Config().replace(popsize=12).popsize
    12
    >>> Config().replace(sigma0=1)
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: unknown option(s) ['sigma0'], valid options are ['step_size', 'popsize', 'recombination_frac', 'samples_per_eig']

    """
    __slots__ = ()

    def __new__(cls, step_size=0.5, popsize=None, recombination_frac=0.5,
                samples_per_eig=None):
        self = super(Config, cls).__new__(cls, step_size, popsize,
                                          recombination_frac, samples_per_eig)
        self.check()
        return self

    def check(self):
        """raise `InvalidConfigError` unless all values are admissible"""
        try:
            ok = 0 < self.step_size < math.inf
        except TypeError:
            ok = False
        if not ok:
            raise InvalidConfigError("step_size must be a positive finite"
                                     " number, was %s" % str(self.step_size))
        for key in ('popsize', 'samples_per_eig'):
            val = getattr(self, key)
            if val is None:
                continue
            try:
                ok = not isinstance(val, bool) and int(val) == val and val >= 1
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise InvalidConfigError("%s must be None or a positive"
                                         " integer, was %s" % (key, str(val)))
        try:
            ok = 0 < self.recombination_frac <= 1
        except TypeError:
            ok = False
        if not ok:
            raise InvalidConfigError("recombination_frac must be in (0, 1],"
                                     " was %s" % str(self.recombination_frac))
        return self

    @classmethod
    def _check_keys(cls, keys):
        unknown = [k for k in keys if k not in cls._fields]
        if unknown:
            raise InvalidConfigError('unknown option(s) %s, valid options'
                                     ' are %s' % (str(sorted(unknown)),
                                                  str(list(cls._fields))))

    @classmethod
    def from_dict(cls, dict_, N=None):
        """return `Config` from `dict_`, values given as `str` are
        evaluated after removing a trailing comment.

        Strings may use the known words ``N`` (if `N` is given), ``log``
        and ``int``, see `cmacore.utilities.utils.safe_str`. Missing keys
        take their default value.
        """
        cls._check_keys(dict_)
        known_words = {'int': 'int', 'log': 'log'}
        if N is not None:
            known_words['N'] = N
        kwargs = {}
        for key, val in dict_.items():
            if utils.is_str(val):
                val = utils.strip_comment(val)
                if val == 'None':
                    val = None
                else:
                    try:
                        val = eval(utils.safe_str(val, known_words),
                                   {'__builtins__': {}},
                                   {'int': int, 'log': math.log})
                    except (ValueError, SyntaxError, NameError,
                            TypeError) as e:
                        raise InvalidConfigError('could not evaluate option'
                                                 ' %s=%s: %s'
                                                 % (key, repr(dict_[key]), str(e)))
            kwargs[key] = val
        return cls(**kwargs)

    @classmethod
    def defaults(cls):
        """return the default configuration"""
        return cls.from_dict(default_options())

    @staticmethod
    def info():
        """print available options with their default and description"""
        for key, val in default_options().items():
            print('%20s: %s' % (key, val))

    def replace(self, **kwargs):
        """return a new `Config` with `kwargs` replaced and checked"""
        self._check_keys(kwargs)
        return self._replace(**kwargs).check()

class CMAParameters(object):
    """static "internal" parameter setting for `CMAEngine`, set once and
    for all from a `Config` and the dimension `N`.

    Attributes: ``N``, ``lam``, ``mu``, ``weights``, ``mueff``, ``cc``,
    ``cs``, ``c1``, ``cmu``, ``damps``, ``chiN``, ``lazy_gap_evals``.

    >>> from cmacore.options_parameters import CMAParameters, Config
    >>> par = CMAParameters(Config(), 2)
    >>> par.lam, par.mu
    (6, 3)
    >>> print(' '.join('%s=%.3f' % (k, getattr(par, k)) for k in
    ...                ['mueff', 'cc', 'cs', 'c1', 'cmu', 'damps', 'chiN']))
    mueff=2.029 cc=0.625 cs=0.446 c1=0.155 cmu=0.058 damps=1.446 chiN=1.254
    >>> CMAParameters(Config(), 0)
    Traceback (most recent call last):
    ...
    cmacore.options_parameters.InvalidConfigError: dimension must be >= 1, was 0

    """
    default_popsize = '4 + int(3 * log(N))'

    def __init__(self, config, N):
        if N < 1:
            raise InvalidConfigError("dimension must be >= 1, was %s" % str(N))
        self.N = N
        self.chiN = Mh.chiN(N)  # expected length of a N(0, I) vector

        # Strategy parameter setting: Selection
        self.lam = int(config.popsize) if config.popsize is not None else (
            eval(utils.safe_str(CMAParameters.default_popsize,
                                {'int': 'int', 'log': 'log', 'N': N}),
                 {'__builtins__': {}}, {'int': int, 'log': math.log}))
        if self.lam < 1:
            raise InvalidConfigError("population size must be >= 1, was %d"
                                     % self.lam)
        self.weights = RecombinationWeights(self.lam, config.recombination_frac)
        self.mu = self.weights.mu  # number of parents/points/solutions for recombination
        self.mueff = self.weights.mueff  # variance-effectiveness of sum w_i x_i
        if self.mu < 1:
            raise InvalidConfigError("number of parents must be >= 1, was %d"
                                     % self.mu)
        if self.mu == 1 and self.lam > 1:
            utils.print_warning("only one parent (mu=1) from popsize=%d and"
                                " recombination_frac=%s"
                                % (self.lam, str(config.recombination_frac)),
                                '__init__', 'CMAParameters')

        # Strategy parameter setting: Adaptation
        mueff = self.mueff
        self.cc = (4 + mueff / N) / (N + 4 + 2 * mueff / N)  # time constant for cumulation for C
        self.cs = (mueff + 2) / (N + mueff + 5)  # time constant for cumulation for sigma control
        self.c1 = 2 / ((N + 1.3)**2 + mueff)  # learning rate for rank-one update of C
        self.cmu = min([1 - self.c1,
                        2 * (mueff - 2 + 1 / mueff) / ((N + 2)**2 + mueff)])  # and for rank-mu update
        self.damps = 1 + 2 * max([0, ((mueff - 1) / (N + 1))**0.5 - 1]) + self.cs  # damping for sigma

        # gap to postpone eigendecomposition to achieve O(N**2) per eval
        if config.samples_per_eig is not None:
            self.lazy_gap_evals = int(config.samples_per_eig)
        else:
            self.lazy_gap_evals = self.lam / (self.c1 + self.cmu) / N / 10

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, ', '.join(
            '%s=%s' % (k, utils.num2str(getattr(self, k), 4))
            for k in ['N', 'lam', 'mu', 'mueff', 'cc', 'cs', 'c1', 'cmu',
                      'damps', 'lazy_gap_evals']))
