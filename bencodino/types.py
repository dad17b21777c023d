# BENCODING VALUE SHAPES

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from numbers import Integral
from types import SimpleNamespace

# python types that are always written as raw byte strings
STRING_TYPES = (bytes, bytearray, memoryview, str)


class Kind(Enum):
    INTEGER = 'i'
    STRING = 's'
    LIST = 'l'
    DICT = 'd'


class ForcedList:
    """
    Wraps a container so that it is always encoded as a bencoded list.

    Mappings are iterated by value, anything else in its own order, e.g.
    ForcedList({'b': 1, 'a': 2}) encodes as li1ei2ee.
    """
    def __init__(self, data: Iterable):
        self._data = data

    def __iter__(self):
        if isinstance(self._data, Mapping):
            return iter(self._data.values())
        return iter(self._data)

    def __repr__(self):
        return f'ForcedList({self._data!r})'


def is_sequential(mapping: Mapping) -> bool:
    """
    True when the keys of the mapping are 0, 1, 2, ... n-1 in iteration order.
    An empty mapping is sequential.
    """
    index = 0
    for key in mapping:
        # True == 1 in python, but a bool is not a list index
        if type(key) is bool or not isinstance(key, int) or key != index:
            return False
        index += 1
    return True


def is_record(value) -> bool:
    if isinstance(value, SimpleNamespace):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify(value) -> Kind:
    """
    Decides which bencode production a python value is written as.
    The first matching rule wins, and anything unrecognised is a string.
    """
    if isinstance(value, Integral):
        return Kind.INTEGER

    if isinstance(value, STRING_TYPES):
        return Kind.STRING

    # ForcedList overrides the shape of whatever it wraps
    if isinstance(value, ForcedList):
        return Kind.LIST

    if isinstance(value, Sequence):
        return Kind.LIST

    if isinstance(value, Mapping):
        if is_sequential(value):
            return Kind.LIST
        return Kind.DICT

    # all other iterables are dictionaries
    if isinstance(value, Iterable):
        return Kind.DICT

    if is_record(value):
        return Kind.DICT

    return Kind.STRING
