# -*- coding: utf-8 -*-

import builtins


class TimeoutError(builtins.TimeoutError):
    """A Promise was not settled within the time allowed."""
    pass
