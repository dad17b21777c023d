# BENCODING ENCODER

import dataclasses
import logging
import operator
from collections.abc import Mapping
from types import SimpleNamespace

from bencodino.errors import DuplicateKeyError, InvalidIntegerError, RecursionLimitExceeded
from bencodino.types import ForcedList, Kind, classify

logger = logging.getLogger(__name__)

# deepest nesting of lists and dictionaries we accept, every level costs two
# interpreter frames so this has to stay well below sys.getrecursionlimit()
MAX_DEPTH = 256

# indicates start of integers
TOKEN_INTEGER = b'i'

# indicates start of list
TOKEN_LIST = b'l'

# indicates start of dict
TOKEN_DICT = b'd'

# indicates end of int, list and dict values
TOKEN_END = b'e'

# delimits string length from string data
TOKEN_STRING_SEPARATOR = b':'


def byte_order(pairs):
    """
    Default key ordering: sorts (key, value) pairs by the raw bytes of the key,
    which is the order bencoded dictionaries require.
    """
    return sorted(pairs, key=operator.itemgetter(0))


def to_bytes(value) -> bytes:
    """
    Raw byte form of a string or dictionary key. Nothing is reinterpreted,
    a numeric looking str stays the same digits.
    """
    if value is None:
        return b''
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode('utf-8', 'surrogateescape')
    return str(value).encode('utf-8', 'surrogateescape')


class Encoder:
    """
    Encodes a python value into its canonical bencoded form.

    The shape of the value decides the production it is written as:
    integers, then strings, then ForcedList, then sequences and mappings
    (a mapping keyed 0..n-1 is a list), then other iterables and plain
    records as dictionaries. Whatever is left is written as the string
    form of the value.

    The encoder only reads the value, so the same data always gives the same
    bytes, no matter the order a dictionary was filled in.
    """
    def __init__(self, data, max_depth: int = MAX_DEPTH, strict: bool = False, sort_keys=byte_order):
        self._data = data
        self._max_depth = max_depth
        self._strict = strict
        self._sort_keys = sort_keys

    def encode(self) -> bytes:
        logger.debug(f'Encoding value of type {type(self._data).__name__}')
        result = bytearray()
        try:
            self.encode_next(self._data, result, 0, set())
        except RecursionError as e:
            raise RecursionLimitExceeded(
                self._max_depth, 'Interpreter recursion limit reached while encoding') from e
        logger.debug(f'Encoded {len(result)} bytes')
        return bytes(result)

    def encode_next(self, data, result: bytearray, depth: int, seen: set):
        kind = classify(data)
        if kind is Kind.INTEGER:
            self.encode_int(data, result)
        elif kind is Kind.STRING:
            self.encode_bytes(to_bytes(data), result)
        else:
            depth += 1
            if depth > self._max_depth:
                raise RecursionLimitExceeded(self._max_depth)
            if id(data) in seen:
                raise RecursionLimitExceeded(
                    depth, f'Cyclic reference to {type(data).__name__} at depth {depth}')

            seen.add(id(data))
            if kind is Kind.LIST:
                self.encode_list(data, result, depth, seen)
            else:
                self.encode_dict(data, result, depth, seen)
            seen.discard(id(data))

    def encode_int(self, value, result: bytearray):
        try:
            number = operator.index(value)
            # %d ignores an overridden __str__, a huge int can still be refused
            digits = '%d' % number
        except (TypeError, ValueError) as e:
            raise InvalidIntegerError(value) from e
        if number != value:
            raise InvalidIntegerError(value)

        result += TOKEN_INTEGER
        result += digits.encode('ascii')
        result += TOKEN_END

    def encode_bytes(self, value: bytes, result: bytearray):
        result += str(len(value)).encode('ascii')
        result += TOKEN_STRING_SEPARATOR
        result += value

    def encode_list(self, data, result: bytearray, depth: int, seen: set):
        result += TOKEN_LIST
        for item in self._list_items(data):
            self.encode_next(item, result, depth, seen)
        result += TOKEN_END

    def encode_dict(self, data, result: bytearray, depth: int, seen: set):
        pairs = {}
        for key, value in self._dict_items(data):
            key = to_bytes(key)
            if key in pairs:
                if self._strict:
                    raise DuplicateKeyError(key)
                logger.warning(f'Duplicate dictionary key {key!r}, keeping the last value')
            pairs[key] = value

        result += TOKEN_DICT
        # sort by keys - bencode requirement
        for key, value in self._sort_keys(list(pairs.items())):
            self.encode_bytes(key, result)
            self.encode_next(value, result, depth, seen)
        result += TOKEN_END

    def _list_items(self, data):
        if isinstance(data, ForcedList):
            return iter(data)
        if isinstance(data, Mapping):
            # a mapping keyed 0..n-1
            return iter(data.values())
        return iter(data)

    def _dict_items(self, data):
        if isinstance(data, Mapping):
            return data.items()
        if isinstance(data, SimpleNamespace):
            return vars(data).items()
        if dataclasses.is_dataclass(data):
            return [(f.name, getattr(data, f.name)) for f in dataclasses.fields(data)]

        items = getattr(data, 'items', None)
        if callable(items):
            return items()
        # plain iterables are keyed by position
        return enumerate(data)
