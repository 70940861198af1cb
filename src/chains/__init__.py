"""
Chain definitions, parsing and structural analysis
"""

from .base import ChainDefinition, Transition
from .parser import parse, parse_or_raise, ParseResult, ParseErrorKind, ChainParseError
from .generator import build_generator_matrix, is_irreducible, reachable_from, matrix_to_dict
from .presets import EXAMPLE_CHAINS

__all__ = ['ChainDefinition', 'Transition', 'parse', 'parse_or_raise', 'ParseResult',
           'ParseErrorKind', 'ChainParseError', 'build_generator_matrix', 'is_irreducible',
           'reachable_from', 'matrix_to_dict', 'EXAMPLE_CHAINS']
