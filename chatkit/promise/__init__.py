# -*- coding: utf-8 -*-

from .deferred import Deferred
from .errors import TimeoutError
from .promise import Promise
from .util import is_cancellable, is_thenable

__all__ = ['Deferred', 'Promise', 'TimeoutError', 'is_cancellable',
           'is_thenable']
