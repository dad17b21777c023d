from bencodino.encoder import MAX_DEPTH, Encoder, byte_order
from bencodino.errors import DuplicateKeyError, EncodingError, InvalidIntegerError, RecursionLimitExceeded
from bencodino.types import ForcedList, Kind, classify

__all__ = [
    'MAX_DEPTH',
    'DuplicateKeyError',
    'Encoder',
    'EncodingError',
    'ForcedList',
    'InvalidIntegerError',
    'Kind',
    'RecursionLimitExceeded',
    'byte_order',
    'classify',
    'encode',
]


def encode(data, **options) -> bytes:
    """
    Shortcut for Encoder(data, **options).encode()
    """
    return Encoder(data, **options).encode()
