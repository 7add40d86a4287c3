# -*- coding: utf-8 -*-
"""various utilities not related to optimization"""
import warnings

global_verbosity = 1

def is_str(var):
    """`bytes` (in Python 3) also fit the bill.

    >>> from cmacore.utilities.utils import is_str
    >>> assert is_str(b'a') * is_str('a') * is_str(r'b')
    >>> assert not is_str([1]) and not is_str(1)

    """
    return isinstance(var, (str, bytes))

def print_warning(msg, method_name=None, class_name=None, iteration=None,
                   verbose=None, maxwarns=None):
    """Poor man's maxwarns: warn only if ``iteration<=maxwarns``"""
    if verbose is None:
        verbose = global_verbosity
    if maxwarns is not None and iteration is None:
        raise ValueError('iteration must be given to activate maxwarns')
    if verbose >= -2 and (iteration is None or maxwarns is None or
                            iteration <= maxwarns):
        warnings.warn(msg + ' (' +
              ('class=%s ' % str(class_name) if class_name else '') +
              ('method=%s ' % str(method_name) if method_name else '') +
              ('iteration=%s' % str(iteration) if iteration else '') +
              ')')

def safe_str(s, known_words=None):
    """return ``s`` as `str` safe to `eval` or raise an exception.

    Strings in the `dict` `known_words` are replaced by their values
    surrounded with a space, which the caller considers safe to evaluate
    with `eval` afterwards.

    >>> from cmacore.utilities.utils import safe_str
    >>> safe_str('4 + int(3 * log(N))', {'int': 'int', 'log': 'log', 'N': 2})
    '4 +  int (3 *  log ( 2 ))'
    >>> safe_str('__import__("os")')
    Traceback (most recent call last):
    ...
    ValueError: "__import__("os")" is not a safe string (known words are {})

    """
    safe_chars = ' 0123456789.,+-*/()[]e'
    if s != str(s):
        return str(s)
    if not known_words:
        known_words = {}
    stest = s[:]  # test this string
    sret = s[:]  # return this string
    for word in sorted(known_words.keys(), key=len, reverse=True):
        stest = stest.replace(word, '  ')
        sret = sret.replace(word, " %s " % known_words[word])
    for c in stest:
        if c not in safe_chars:
            raise ValueError('"%s" is not a safe string'
                             ' (known words are %s)' % (s, str(known_words)))
    return sret

def strip_comment(s):
    """return option string `s` without trailing ``# comment``.

    >>> from cmacore.utilities.utils import strip_comment
    >>> strip_comment('0.5  # initial step-size')
    '0.5'

    """
    return s.split('#')[0].strip()

def num2str(val, significant_digits=2):
    """return a short string representation of `val`, mostly for display.

    >>> from cmacore.utilities import utils
    >>> print([utils.num2str(val) for val in [12345, 12.345, .012345, 1.2e-7]])
    ['1.2e+04', '12', '0.012', '1.2e-07']

    """
    if val == 0:
        return '0'
    return '%.*g' % (significant_digits, val)
