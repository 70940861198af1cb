"""
Chain description parser

Three sections, in this order, each introduced by a case-insensitive header:

    States: A, B, C
    Initial distribution: A : 0.5, B : 0.3, C : 0.2      (or: uniform)
    Rates: A -> B : 2.5, B -> C : 1.0, C -> A : 0.5

Section bodies may continue over several lines until the next header.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .base import ChainDefinition, Transition

DISTRIBUTION_TOLERANCE = 1e-6

SECTION_ORDER = ['states', 'initial', 'rates']
SECTION_TITLES = {
    'states': 'States',
    'initial': 'Initial distribution',
    'rates': 'Rates',
}
HEADER_PATTERNS = {
    'states': re.compile(r'^states\s*:\s*', re.IGNORECASE),
    'initial': re.compile(r'^initial\s+distribution\s*:\s*', re.IGNORECASE),
    'rates': re.compile(r'^rates?\s*:\s*', re.IGNORECASE),
}

PROBABILITY_ENTRY = re.compile(r'([^\s:,]+)\s*:\s*([^\s,]+)')
RATE_ENTRY = re.compile(r'^(\S+?)\s*->\s*(\S+?)\s*:\s*(\S+)$')


class ParseErrorKind(Enum):
    EMPTY_INPUT = "empty_input"
    MISSING_SECTION = "missing_section"
    EMPTY_STATES = "empty_states"
    DUPLICATE_STATE = "duplicate_state"
    UNKNOWN_STATE = "unknown_state"
    INVALID_PROBABILITY = "invalid_probability"
    DISTRIBUTION_SUM = "distribution_sum"
    INVALID_RATE = "invalid_rate"
    SELF_LOOP = "self_loop"


@dataclass
class ParseResult:
    """either a parsed chain (ok) or a single error message with its category"""
    ok: bool
    chain: Optional[ChainDefinition] = None
    error: Optional[str] = None
    kind: Optional[ParseErrorKind] = None

    @classmethod
    def success(cls, chain: ChainDefinition) -> 'ParseResult':
        return cls(ok=True, chain=chain)

    @classmethod
    def failure(cls, kind: ParseErrorKind, error: str) -> 'ParseResult':
        return cls(ok=False, error=error, kind=kind)


class ChainParseError(ValueError):
    """raised by parse_or_raise when the description is invalid"""

    def __init__(self, kind: ParseErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class _Failure(Exception):
    def __init__(self, kind: ParseErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def parse(text: str) -> ParseResult:
    """parse a chain description into a ChainDefinition"""
    try:
        return ParseResult.success(_parse(text))
    except _Failure as failure:
        return ParseResult.failure(failure.kind, failure.message)


def parse_or_raise(text: str) -> ChainDefinition:
    result = parse(text)
    if not result.ok:
        raise ChainParseError(result.kind, result.error)
    return result.chain


def _parse(text: str) -> ChainDefinition:
    if not text or not text.strip():
        raise _Failure(ParseErrorKind.EMPTY_INPUT, "Definition is empty.")

    bodies = _split_sections(text)

    states = _parse_states(bodies['states'])
    initial = _parse_initial(bodies['initial'], states)
    transitions = _parse_rates(bodies['rates'], states)

    return ChainDefinition(states=tuple(states),
                           initial_distribution=initial,
                           transitions=tuple(transitions))


def _split_sections(text: str) -> Dict[str, List[str]]:
    """collect body lines for each section, enforcing header order"""
    bodies: Dict[str, List[str]] = {}
    current = None

    for raw_line in text.strip().splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header = _match_header(line)
        if header is not None:
            section, rest = header
            expected = _next_section(current)
            if section != expected:
                raise _Failure(
                    ParseErrorKind.MISSING_SECTION,
                    f'Section "{SECTION_TITLES[section]}:" is out of order; '
                    f'expected "{SECTION_TITLES[expected]}:" next.'
                    if expected else
                    f'Section "{SECTION_TITLES[section]}:" appears after "Rates:".'
                )
            current = section
            bodies[section] = [rest] if rest else []
            continue

        if current is None:
            raise _Failure(ParseErrorKind.MISSING_SECTION,
                           'First section must be "States: A, B, C, ...".')
        bodies[current].append(line)

    if 'states' not in bodies:
        raise _Failure(ParseErrorKind.MISSING_SECTION,
                       'Missing "States: A, B, C, ..." section.')
    if 'initial' not in bodies or not bodies['initial']:
        raise _Failure(ParseErrorKind.MISSING_SECTION,
                       'Missing "Initial distribution:" section.')
    if 'rates' not in bodies:
        raise _Failure(ParseErrorKind.MISSING_SECTION, 'Missing "Rates:" section.')

    return bodies


def _match_header(line: str):
    for section, pattern in HEADER_PATTERNS.items():
        match = pattern.match(line)
        if match:
            return section, line[match.end():].strip()
    return None


def _next_section(current: Optional[str]) -> Optional[str]:
    if current is None:
        return SECTION_ORDER[0]
    position = SECTION_ORDER.index(current)
    if position + 1 < len(SECTION_ORDER):
        return SECTION_ORDER[position + 1]
    return None


def _parse_states(lines: List[str]) -> List[str]:
    names = [name.strip() for name in ' '.join(lines).split(',')]
    names = [name for name in names if name]
    if not names:
        raise _Failure(ParseErrorKind.EMPTY_STATES, "States list is empty.")

    states: List[str] = []
    for name in names:
        if name in states:
            raise _Failure(ParseErrorKind.DUPLICATE_STATE, f"Duplicate state name: {name}")
        states.append(name)
    return states


def _parse_initial(lines: List[str], states: List[str]) -> Dict[str, float]:
    text = ' '.join(lines).strip()

    if text.lower() == 'uniform':
        p = 1.0 / len(states)
        return {s: p for s in states}

    leftover = PROBABILITY_ENTRY.sub('', text)
    if leftover.replace(',', ' ').strip():
        raise _Failure(ParseErrorKind.INVALID_PROBABILITY,
                       f'Could not read "{leftover.strip(" ,")}" in initial distribution '
                       f'(expected "state : probability").')

    known = set(states)
    distribution = {s: 0.0 for s in states}
    for match in PROBABILITY_ENTRY.finditer(text):
        name, value = match.group(1), match.group(2)
        if name not in known:
            raise _Failure(ParseErrorKind.UNKNOWN_STATE,
                           f'Unknown state "{name}" in initial distribution.')
        prob = _to_float(value)
        if prob is None or not 0.0 <= prob <= 1.0:
            raise _Failure(ParseErrorKind.INVALID_PROBABILITY,
                           f'Invalid probability "{value}" in initial distribution.')
        distribution[name] += prob

    total = sum(distribution.values())
    if abs(total - 1.0) > DISTRIBUTION_TOLERANCE:
        raise _Failure(ParseErrorKind.DISTRIBUTION_SUM,
                       f"Initial distribution must sum to 1 (got {total:.4f}).")
    return distribution


def _parse_rates(lines: List[str], states: List[str]) -> List[Transition]:
    known = set(states)
    transitions: List[Transition] = []

    for part in ' '.join(lines).split(','):
        entry = part.strip()
        if not entry:
            continue

        match = RATE_ENTRY.match(entry)
        if not match:
            raise _Failure(ParseErrorKind.INVALID_RATE,
                           f'Invalid rate entry "{entry}" (expected "from -> to : rate").')

        source, target, value = match.groups()
        if source not in known:
            raise _Failure(ParseErrorKind.UNKNOWN_STATE,
                           f'Unknown state "{source}" in rate specification.')
        if target not in known:
            raise _Failure(ParseErrorKind.UNKNOWN_STATE,
                           f'Unknown state "{target}" in rate specification.')
        if source == target:
            raise _Failure(ParseErrorKind.SELF_LOOP,
                           f'Self-loops not allowed in CTMC (from "{source}" to "{target}").')

        rate = _to_float(value)
        if rate is None or rate <= 0.0:
            raise _Failure(ParseErrorKind.INVALID_RATE,
                           f'Invalid rate "{value}" (must be a finite number > 0).')

        transitions.append(Transition(source, target, rate))

    return transitions


def _to_float(value: str) -> Optional[float]:
    """finite float or None"""
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
