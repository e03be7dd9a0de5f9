"""
Identifier sources for generated table documents.

Identifiers are opaque labels: they have no effect on which items are selected
or on the ranges they receive. Builders accept any zero-argument callable that
returns a string, so tests and reproducible runs can inject a deterministic one.
"""

import itertools
import secrets
import string
from collections.abc import Callable

IdSource = Callable[[], str]

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 16


def random_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def sequential_ids(prefix: str = "") -> IdSource:
    """
    Return a source yielding zero-padded sequential identifiers.

    Example:
        next_id = sequential_ids("v1")
        next_id() -> "v100000000000001"
    """
    counter = itertools.count(1)
    width = max(_ID_LENGTH - len(prefix), 1)

    def next_id() -> str:
        return f"{prefix}{next(counter):0{width}d}"

    return next_id
