"""
Random Generation

Unbiased random integers and password generation on top of a pluggable
random source. The default source is the operating system's CSPRNG; when
that is unavailable a seeded pseudo-random generator is used instead, so
callers must not assume cryptographic strength.
"""

import logging
import math
import os
import random
from typing import List, Optional, Protocol

from calculateshub.calculations.primitives import is_finite, to_number

logger = logging.getLogger(__name__)

U32_RANGE = 2 ** 32

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.?/|~"
AMBIGUOUS = "Il1O0"

MIN_PASSWORD_LENGTH = 4
MAX_PASSWORD_LENGTH = 64
DEFAULT_PASSWORD_LENGTH = 16


class RandomSource(Protocol):
    """Anything that can produce random bits (random.Random and subclasses)."""

    def getrandbits(self, k: int) -> int:  # pragma: no cover - interface
        ...


def default_source() -> RandomSource:
    """
    Return the strongest available random source.

    Falls back to a non-cryptographic generator if the OS randomness
    source cannot be used.
    """
    try:
        os.urandom(1)
    except NotImplementedError:
        logger.warning("OS randomness unavailable, falling back to pseudo-random source")
        return random.Random()
    return random.SystemRandom()


def random_u32(source: Optional[RandomSource] = None) -> int:
    """Draw a uniform 32-bit unsigned integer."""
    return (source or default_source()).getrandbits(32)


def random_float01(source: Optional[RandomSource] = None) -> float:
    """Draw a float in [0, 1) with 32 bits of randomness."""
    return random_u32(source) / U32_RANGE


def random_int_inclusive(
    minimum: float, maximum: float, source: Optional[RandomSource] = None
) -> Optional[int]:
    """
    Draw a uniform integer in [ceil(minimum), floor(maximum)].

    Uses rejection sampling over 32-bit draws: draws in the incomplete
    final bucket are discarded so every value in the range is equally
    likely.

    Returns:
        The integer, or None for an empty, non-finite or > 2**32 wide range
    """
    lo_raw = to_number(minimum)
    hi_raw = to_number(maximum)
    if not is_finite(lo_raw) or not is_finite(hi_raw):
        return None
    lo = math.ceil(lo_raw)
    hi = math.floor(hi_raw)
    if hi < lo:
        return None
    span = hi - lo + 1
    if not 1 <= span <= U32_RANGE:
        return None

    source = source or default_source()
    bucket = (U32_RANGE // span) * span
    draw = random_u32(source)
    while draw >= bucket:
        draw = random_u32(source)
    return lo + (draw % span)


def _without_ambiguous(chars: str) -> str:
    return "".join(ch for ch in chars if ch not in AMBIGUOUS)


def make_password(
    length: float = DEFAULT_PASSWORD_LENGTH,
    lower: bool = True,
    upper: bool = True,
    numbers: bool = True,
    symbols: bool = False,
    exclude_ambiguous: bool = False,
    source: Optional[RandomSource] = None,
) -> str:
    """
    Generate a password from the selected character classes.

    At least one character from every selected class is included, the
    rest is drawn from the combined pool, and the result is shuffled with
    an unbiased Fisher-Yates shuffle.

    Args:
        length: Requested length, truncated and clamped to 4-64
        lower: Include lowercase letters
        upper: Include uppercase letters
        numbers: Include digits
        symbols: Include symbols
        exclude_ambiguous: Drop easily confused characters (Il1O0)
        source: Random source (defaults to default_source())

    Returns:
        The generated password
    """
    requested = to_number(length)
    if not is_finite(requested) or requested == 0:
        requested = DEFAULT_PASSWORD_LENGTH
    size = max(MIN_PASSWORD_LENGTH, min(MAX_PASSWORD_LENGTH, math.trunc(requested)))

    classes = []
    if lower:
        classes.append(LOWERCASE)
    if upper:
        classes.append(UPPERCASE)
    if numbers:
        classes.append(DIGITS)
    if symbols:
        classes.append(SYMBOLS)
    if not classes:
        classes.append(LOWERCASE + UPPERCASE + DIGITS)

    pool = "".join(classes)
    if exclude_ambiguous:
        pool = _without_ambiguous(pool)
    if not pool:
        pool = LOWERCASE + UPPERCASE + DIGITS

    source = source or default_source()
    chars: List[str] = []

    for char_class in classes:
        candidates = _without_ambiguous(char_class) if exclude_ambiguous else char_class
        if not candidates:
            continue
        chars.append(candidates[random_int_inclusive(0, len(candidates) - 1, source)])

    while len(chars) < size:
        chars.append(pool[random_int_inclusive(0, len(pool) - 1, source)])

    for i in range(len(chars) - 1, 0, -1):
        j = random_int_inclusive(0, i, source)
        chars[i], chars[j] = chars[j], chars[i]

    return "".join(chars)
