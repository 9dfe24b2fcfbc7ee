from .arrays import ANY_LENGTH, ElementCheck, is_array_of
from .composite import (
    has_array_of,
    has_array_of_strings,
    has_bool,
    has_integer,
    has_key,
    has_object,
    has_string,
)
from .primitives import (
    has_valid_rune_length,
    is_array_of_strings,
    is_bool,
    is_integer,
    is_object,
    is_string,
)
from .verdict import Verdict, all_true

__all__ = [
    "ANY_LENGTH",
    "ElementCheck",
    "Verdict",
    "all_true",
    "has_array_of",
    "has_array_of_strings",
    "has_bool",
    "has_integer",
    "has_key",
    "has_object",
    "has_string",
    "has_valid_rune_length",
    "is_array_of",
    "is_array_of_strings",
    "is_bool",
    "is_integer",
    "is_object",
    "is_string",
]
