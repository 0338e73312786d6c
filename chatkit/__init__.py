# -*- coding: utf-8 -*-

"""Small building blocks shared by chat client applications."""

from .__version__ import __version__  # noqa

from .common.strings import format_error_object, format_thrown_value
from .promise import Deferred, Promise, TimeoutError

__all__ = ['Deferred', 'Promise', 'TimeoutError', 'format_error_object',
           'format_thrown_value']
