"""various utilities, mostly not related to optimization"""
from . import utils
from . import math
