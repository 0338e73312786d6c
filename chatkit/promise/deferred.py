# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Creator side of an async task, holding the controls of a Promise.

    A Promise represents the asynchronous value from the "consumer" side. The
    Deferred gives to its owner the functions settling this Promise, so the
    promise can be handed out to readers while the owner keeps `resolve` and
    `reject` for itself.

    Both controls are captured while the Promise is constructed, and so are
    available as soon as the Deferred exists. Only the first call to one of
    them has an effect; all subsequent calls are ignored.

    Example:

        >>> df = Deferred()
        >>> df.resolve(3)
        >>> df.reject(ValueError())  # no effect
        >>> df.promise.result()
        3

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        result (Promise): alias of `promise`.
        resolve (callable): fulfills the promise with its only argument. If
            the argument is a Promise (or any thenable), the promise adopts
            its state once settled.
        reject (callable): rejects the promise with its only argument.
    """

    def __init__(self, name=None):
        """
        Args:
            name (str, optional): name of the promise, used when the promise
                is converted to text.
        """
        self._resolve = None
        self._reject = None
        self._promise = Promise(self._executor, _name=name or 'DEFERRED')

    def _executor(self, resolve, reject):
        self._resolve = resolve
        self._reject = reject

    @property
    def promise(self):
        return self._promise

    @property
    def result(self):
        return self._promise

    @property
    def resolve(self):
        return self._resolve

    @property
    def reject(self):
        return self._reject

    def __repr__(self):
        return 'Deferred(%s)' % self._promise._inner_print()
