# -*- coding: utf-8 -*-

import logging
from functools import partial
from threading import Condition, Lock

from ..common.strings import format_thrown_value
from .errors import TimeoutError
from .util import is_cancellable, is_thenable

_logger = logging.getLogger(__name__)


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is
    known, or to block until the result is available.

    A Promise is settled only once: the first call to one of the settlement
    functions given to the executor wins, and all subsequent calls are
    ignored. When the resolve function receives a thenable, the Promise is
    locked on it and adopts its outcome.

    All calls to the methods are thread-safe.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, _name=None, _previous=None):
        """Constructor of the Promise.

        Call the `executor` with the two settlement functions. The executor
        is fully executed before the constructor returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `resolve()`, should be called when the task is
                done, with the result's value as its only argument. If the
                value is a thenable, the Promise will follow its state.
                The second, `reject()`, should be called when an error
                occurs, with the reason (usually an Exception instance).
            _name (str): if set, name used when converted to text.
        """
        self._state = self.PENDING
        self._locked = False
        self._result = None
        self._error = None
        self._condition = Condition()
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._callbacks = []
        self._errbacks = []

        try:
            executor(self._resolve, self._reject)
        except Exception as error:
            self._reject(error)

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        with self._condition:
            return self._state

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        Args:
            timeout (float, optional): if set, maximum time (in seconds) to
                wait the promise to be settled. By default, it can wait
                indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            *: If the promise is rejected, the rejection cause is raised.
        """
        with self._condition:
            self._wait(timeout)
            if self._state == self.REJECTED:
                raise self._error
            return self._result

    def exception(self, timeout=None):
        """Wait for the promise to be settled and returns its error.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled. By default, it can wait indefinitely.
        Returns:
            *: the reason of the rejection of the Promise, usually an
                Exception.
            None: if the promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        with self._condition:
            self._wait(timeout)
            return self._error

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not defined, the state of the "self" promise is
        transferred to the new promise (the state and the value/error).

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                reason of the rejection of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def chained_executor(resolve, reject):

            def callback(result):
                if on_fulfilled is None:
                    return resolve(result)
                try:
                    resolve(on_fulfilled(result))
                except Exception as error:
                    reject(error)

            def errback(error):
                if on_rejected is None:
                    return reject(error)
                try:
                    resolve(on_rejected(error))
                except Exception as new_error:
                    reject(new_error)

            self._add_callback(callback)
            self._add_errback(errback)

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return Promise(chained_executor, _name=name, _previous=self)

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Will be called with the rejection reason
                if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        If no error handler has been set (via then() or catch()), a rejection
        is silently ignored. Calling `safeguard()` after all chains are set
        will log these errors as ERROR, with the traceback for exceptions and
        a readable rendering for other rejection reasons.
        """
        def guard(error):
            if isinstance(error, BaseException):
                _logger.error('[SAFEGUARD] %s', self,
                              exc_info=(type(error), error,
                                        error.__traceback__))
            else:
                _logger.error(format_thrown_value(error,
                                                  '[SAFEGUARD] %s' % self))

        self._add_errback(guard)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        with self._condition:
            state = self._state[0].upper()

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    @classmethod
    def resolve(cls, value):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a thenable, it's returned
                as is.
        Returns:
            Promise: new Promise already fulfilled, containing the value
                passed in parameter.
        """
        if is_thenable(value):
            return value
        return cls(lambda ok, error: ok(value), _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: Exception set to the Promise
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT')

    @classmethod
    def all(cls, promises):
        """Create a Promise who wait a list of promises to be all fulfilled.

        The resulting Promise resolves when all of the promises in the list
        are resolved, with the list of all the resulting values, keeping the
        order of the promise list.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            promises (list of Promise)
        Returns:
            Promise<list>: fulfilled when all promises are fulfilled, or
                rejected as soon as one of the promises is rejected.
        """
        if not promises:
            return cls.resolve([])

        lock = Lock()
        results = [None] * len(promises)
        remaining = len(promises)

        def executor(resolve, reject):
            def resolve_one_promise(index, value):
                nonlocal remaining
                with lock:
                    results[index] = value
                    remaining -= 1
                    done = remaining == 0
                if done:
                    resolve(results)

            for index, p in enumerate(promises):
                p.then(partial(resolve_one_promise, index), reject)

        return cls(executor, _name='ALL')

    @classmethod
    def race(cls, promises):
        """Settle with the first promise of the list to be settled.

        The resulting Promise is fulfilled or rejected as soon as one of the
        promises is, with the same value or reason. Other promises are
        cancelled if they can be; their results are ignored.

        Args:
            promises (list): promises running at the same time.
        Returns:
            Promise: a promise
        Raises:
            ValueError: If the promise list is empty.
        """
        if not promises:
            raise ValueError('Empty promise list in Promise.race()')

        def executor(resolve, reject):
            def cancel_others():
                for p in promises:
                    if is_cancellable(p):
                        p.cancel()

            def resolve_first(result):
                resolve(result)
                cancel_others()

            def reject_first(reason):
                reject(reason)
                cancel_others()

            for p in promises:
                p.then(resolve_first, reject_first)

        return cls(executor, _name='RACE')

    def _wait(self, timeout):
        # Must be called with the condition held.
        if not self._condition.wait_for(
                lambda: self._state != self.PENDING, timeout):
            raise TimeoutError('%r is still pending' % self)

    def _resolve(self, value):
        with self._condition:
            if self._state != self.PENDING or self._locked:
                return
            self._locked = True

        if value is self:
            self._settle(self.REJECTED,
                         TypeError('A Promise cannot be resolved with '
                                   'itself.'))
        else:
            self._adopt(value)

    def _reject(self, reason):
        with self._condition:
            if self._state != self.PENDING or self._locked:
                return
            self._locked = True

        self._settle(self.REJECTED, reason)

    def _adopt(self, value):
        if not is_thenable(value):
            return self._settle(self.FULFILLED, value)

        try:
            value.then(self._adopt, partial(self._settle, self.REJECTED))
        except Exception as error:
            self._settle(self.REJECTED, error)

    def _settle(self, state, value):
        with self._condition:
            if self._state != self.PENDING:
                return
            if state == self.FULFILLED:
                self._result = value
                callbacks = self._callbacks
            else:
                self._error = value
                callbacks = self._errbacks
            self._state = state

            # Free the references
            self._callbacks = None
            self._errbacks = None

            self._condition.notify_all()

        for callback in callbacks:
            self._exec_callback(callback, value,
                                is_errback=state == self.REJECTED)

    @staticmethod
    def _exec_callback(callback, value, is_errback=False):
        try:
            callback(value)
        except Exception:
            if is_errback:
                _logger.exception("Promise errback raise an exception!")
            else:
                _logger.exception("Promise callback raise an exception!")

    def _add_callback(self, callback):
        with self._condition:
            if self._state == self.PENDING:
                self._callbacks.append(callback)
                return
            execute_now = self._state == self.FULFILLED
            result = self._result

        if execute_now:
            self._exec_callback(callback, result)

    def _add_errback(self, errback):
        with self._condition:
            if self._state == self.PENDING:
                self._errbacks.append(errback)
                return
            execute_now = self._state == self.REJECTED
            error = self._error

        if execute_now:
            self._exec_callback(errback, error, is_errback=True)
