"""Linear algebra backends implementing the interface of
`cmacore.interfaces.LinearAlgebraBackendBase`.

`NumpyBackend` is the default backend of `cmacore.CMAEngine`.
"""
import numpy as np
from .interfaces import LinearAlgebraBackendBase

class TensorStateError(ValueError):
    """a persisted tensor representation could not be decoded"""

class NumpyBackend(LinearAlgebraBackendBase):
    """`numpy` based dense linear algebra.

    :param seed: seed for the backend-owned `numpy.random.RandomState`,
        `None` draws the seed from the OS.
    :param randn: if given, a function called like ``randn(number,
        dimension)`` which returns an array of that shape with standard
        normal deviates. Overrides `seed`, useful to inject a
        deterministic noise sequence.
    :param dtype: floating point type of all arrays.

    >>> import numpy as np
    >>> from cmacore.backends import NumpyBackend
    >>> be = NumpyBackend(seed=1)
    >>> be.randn(3, 2).shape
    (3, 2)
    >>> bool(np.all(NumpyBackend(seed=1).randn(3, 2) == NumpyBackend(seed=1).randn(3, 2)))
    True
    >>> be.argsort([2., 1., 2., 0.]).tolist()  # stable with respect to ties
    [3, 1, 0, 2]

    The symmetric decomposition reconstructs the decomposed matrix and
    keeps the sign of the eigenvalues:

    >>> C = np.array([[2., 1.], [1., 3.]])
    >>> U, s = be.svd_symmetric(C)
    >>> bool(np.allclose(np.dot(U * s, U.T), C)) and bool(np.all(s > 0))
    True
    >>> sorted(be.svd_symmetric(np.diag([1., -0.5]))[1].tolist())
    [-0.5, 1.0]
    >>> be.diagonal(C).tolist()
    [2.0, 3.0]

    """
    def __init__(self, seed=None, randn=None, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        self.seed = seed
        self._random_state = np.random.RandomState(seed)
        self._randn = randn if randn is not None else self._random_state.randn

    def asarray(self, x):
        return np.array(x, dtype=self.dtype)
    def zeros(self, shape):
        return np.zeros(shape, dtype=self.dtype)
    def ones(self, shape):
        return np.ones(shape, dtype=self.dtype)
    def eye(self, dimension):
        return np.eye(dimension, dtype=self.dtype)
    def diag(self, vector):
        return np.diag(np.asarray(vector, dtype=self.dtype))
    def diagonal(self, A):
        return np.diagonal(A).copy()
    def transpose(self, A):
        return np.transpose(A)
    def dot(self, A, B):
        return np.dot(A, B)
    def outer(self, a, b):
        return np.outer(a, b)

    def randn(self, number, dimension):
        arz = np.asarray(self._randn(number, dimension), dtype=self.dtype)
        if arz.shape != (number, dimension):
            raise ValueError('randn(%d, %d) returned shape %s'
                             % (number, dimension, str(arz.shape)))
        return arz

    def argsort(self, values):
        return np.argsort(np.asarray(values), kind='stable')
    def sum(self, x, axis=None):
        return np.sum(x, axis=axis)
    def min(self, x):
        return np.min(x)
    def max(self, x):
        return np.max(x)
    def sqrt(self, x):
        return np.sqrt(x)
    def exp(self, x):
        return np.exp(x)
    def norm(self, x):
        return float(np.sqrt(np.sum(np.square(x))))

    def svd_symmetric(self, C):
        """return ``U, s`` from ``np.linalg.eigh(C)``, eigenvectors and
        eigenvalues, ``s`` ascending and with sign.

        For positive definite `C` this is its singular value
        decomposition, otherwise ``s`` has non-positive entries which the
        caller must check. Raises `numpy.linalg.LinAlgError` if the
        decomposition does not converge, e.g. when `C` contains `nan` or
        `inf`.
        """
        C = np.asarray(C, dtype=self.dtype)
        if not np.all(np.isfinite(C)):
            raise np.linalg.LinAlgError(
                "matrix to decompose has non-finite entries")
        s, U = np.linalg.eigh(C)
        return U, s

    def to_state(self, x):
        """return a `dict` with ``shape``, ``dtype`` and (nested `list`)
        ``data`` of `x`.

        The representation consists of Python literals only and survives
        ``ast.literal_eval(repr(state))`` without loss.

        >>> from cmacore.backends import NumpyBackend
        >>> NumpyBackend().to_state([[1, 2], [3, 4.5]])
        {'shape': [2, 2], 'dtype': 'float64', 'data': [[1.0, 2.0], [3.0, 4.5]]}

        """
        x = np.asarray(x, dtype=self.dtype)
        return {'shape': list(x.shape),
                'dtype': str(x.dtype),
                'data': x.tolist()}

    def from_state(self, state):
        """return array from a representation generated by `to_state`.

        >>> from cmacore.backends import NumpyBackend
        >>> be = NumpyBackend()
        >>> be.from_state(be.to_state([1, 2])).tolist()
        [1.0, 2.0]
        >>> be.from_state({'shape': [3], 'dtype': 'float64', 'data': [1.0, 2.0]})
        Traceback (most recent call last):
        ...
        cmacore.backends.TensorStateError: data of shape (2,) found where shape [3] was declared

        """
        try:
            shape = tuple(int(n) for n in state['shape'])
            dtype = np.dtype(state['dtype'])
            data = state['data']
        except (KeyError, TypeError, ValueError) as e:
            raise TensorStateError('invalid tensor state %s: %s'
                                   % (repr(state)[:80], str(e)))
        try:
            x = np.array(data, dtype=dtype)
        except (TypeError, ValueError) as e:
            raise TensorStateError('tensor data could not be decoded: %s'
                                   % str(e))
        if x.shape != shape:
            raise TensorStateError('data of shape %s found where shape %s'
                                   ' was declared' % (str(x.shape),
                                                      str(list(shape))))
        return x.astype(self.dtype)
