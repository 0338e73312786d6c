# -*- coding: utf-8 -*-

"""Conversion of error values into human-readable text.

These helpers are used to report errors of any kind: exceptions, error-like
objects coming from other layers, or arbitrary values passed as rejection
reasons. They never raise: when a value can't be rendered, a placeholder
naming its type is used instead.
"""

import enum
import json
import numbers
import traceback
from collections.abc import Mapping

NO_STACK_TRACE = '(no stack trace information)'
MISSING_ERROR = '(missing error information)'
NO_DESCRIPTION = '(no error description)'

# Values rendered by their canonical str() form.
_primitive_types = (str, bytes, bool, numbers.Number, enum.Enum)


def _safe_str(value):
    try:
        return str(value)
    except Exception:
        return '<unprintable %s object>' % type(value).__name__


def _safe_getattr(value, name, default):
    try:
        return getattr(value, name, default)
    except Exception:
        return default


def _type_tag(value):
    return '[object %s]' % type(value).__name__


def _slot_names(cls):
    for klass in cls.__mro__:
        slots = getattr(klass, '__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ('__dict__', '__weakref__'):
                yield name


def _own_properties(value):
    """Return a JSON-compatible container of the value's own properties.

    Returns:
        dict/list: the properties, or None if the value has none to expose.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)

    slots = [name for name in _slot_names(type(value))
             if hasattr(value, name)]
    attributes = getattr(value, '__dict__', None)
    if not isinstance(attributes, dict):
        if not slots:
            return None
        attributes = {}
    elif not slots:
        # Same object each time: lets the encoder detect cycles.
        return attributes

    properties = dict(attributes)
    for name in slots:
        properties[name] = getattr(value, name)
    return properties


def _json_default(value):
    try:
        properties = _own_properties(value)
    except Exception:
        properties = None
    if properties is not None:
        return properties
    try:
        return repr(value)
    except Exception:
        return _type_tag(value)


def _serialize(value):
    # Any failure of user code (getters, __repr__, ...) or of the encoder
    # (cycles, unserializable keys) gives the type tag.
    try:
        properties = _own_properties(value)
        if properties is None:
            return _type_tag(value)
        result = json.dumps(properties, indent=2, ensure_ascii=False,
                            default=_json_default)
    except Exception:
        return _type_tag(value)
    if not result or result == 'null':
        return _type_tag(value)
    return result


def is_error_object(value):
    """Check if the value is an exception, or looks like one.

    An error-like object exposes at least a `name` and a `message`.
    """
    if isinstance(value, BaseException):
        return True
    try:
        return (getattr(value, 'name', None) is not None and
                getattr(value, 'message', None) is not None)
    except Exception:
        return False


def _format_traceback(err):
    if err.__traceback__ is None:
        return None
    try:
        lines = traceback.format_exception(type(err), err, err.__traceback__)
    except Exception:
        return None
    return ''.join(lines).rstrip('\n')


def format_error_object(err):
    """Convert an exception (or an error-like object) into text.

    The result has the form "NAME: message", followed by the stack trace on
    the next lines. The name is uppercased as is: "MyError" gives "MYERROR".

    Args:
        err: an Exception instance, or an object with the attributes `name`,
            `message` and, optionally, `stack`.
    Returns:
        str: the error description.
    """
    if isinstance(err, BaseException):
        name = type(err).__name__
        message = _safe_str(err)
        stack = _format_traceback(err)
    else:
        name = _safe_str(_safe_getattr(err, 'name', ''))
        message = _safe_str(_safe_getattr(err, 'message', ''))
        stack = _safe_getattr(err, 'stack', None)
        if stack is not None:
            stack = _safe_str(stack)

    return '%s: %s\n%s' % (name.upper(), message, stack or NO_STACK_TRACE)


def format_thrown_value(err, description=None):
    """Convert any raised or rejected value into a readable report.

    The first line is the description of the context, the rest is the
    rendering of the value:
    - exceptions and error-like objects are formatted by
      `format_error_object()`;
    - None gives a placeholder;
    - strings, numbers, booleans and enum members are converted by str();
    - other objects are serialized in indented JSON, with all their own
      attributes. If it fails (eg: a cyclic structure), a generic tag like
      "[object dict]" is used.

    Args:
        err: the value caught.
        description (str, optional): context of the error. If missing or
            empty, a placeholder is used.
    Returns:
        str: the full report. This function never raises.
    """
    if is_error_object(err):
        text = format_error_object(err)
    elif err is None:
        text = MISSING_ERROR
    elif isinstance(err, _primitive_types):
        text = _safe_str(err)
    else:
        text = _serialize(err)

    if description is None or (isinstance(description, str) and
                               not description):
        description = NO_DESCRIPTION
    return '%s\n%s' % (_safe_str(description), text)
