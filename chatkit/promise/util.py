# -*- coding: utf-8 -*-


def is_thenable(value):
    """Check if an object can be chained, like a Promise.

    Used to tell apart a value to adopt (a Promise, or any object with a
    `then()` method) from a plain result value.

    Returns:
        boolean: True if the value has a callable attribute 'then'.
    """
    return callable(getattr(value, 'then', None))


def is_cancellable(value):
    """Check if an object has a callable `cancel()` method.

    Args:
        value: object to test, usually a Promise.
    Returns:
        boolean: True if it can be cancelled, False if not.
    """
    return callable(getattr(value, 'cancel', None))
