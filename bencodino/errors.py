# BENCODING ERRORS

class EncodingError(ValueError):
    pass


class InvalidIntegerError(EncodingError):
    """
    Raised when an integral value cannot be turned into an exact int
    """
    def __init__(self, value):
        super().__init__(f'Cannot encode {type(value).__name__} as an integer without losing precision')
        self.value = value


class DuplicateKeyError(EncodingError):
    """
    Raised in strict mode when two dictionary keys end up as the same byte string
    """
    def __init__(self, key: bytes):
        super().__init__(f'Duplicate dictionary key {key!r}')
        self.key = key


class RecursionLimitExceeded(EncodingError):
    def __init__(self, depth: int, message: str = None):
        super().__init__(message or f'Maximum nesting depth of {depth} exceeded')
        self.depth = depth
