"""
Validators and formatters for the fields collected by the certificate form.

Why this file exists
--------------------
The form accepts a CPF typed by a human: with or without dots and dashes,
sometimes half-typed. These functions reduce it to a canonical digit string,
check it against the CPF check digits and produce display forms of it.

Design principles
-----------------
- **Pure functions**: easy to test and reason about.
- **Total**: every string input yields a bool or a string, never an exception.
  Malformed input is simply "not valid".
- **Independent**: the formatter never validates and the validator never formats.
"""

from __future__ import annotations

import re

CPF_LENGTH = 11

_NON_DIGIT = re.compile(r"[^0-9]")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def strip_cpf(s: str) -> str:
    """
    Return only the digit characters from a string.

    "529.982.247-25" normalizes to "52998224725". Non-string input (e.g. None
    from an empty form field) normalizes to "".
    """
    if not isinstance(s, str):
        return ""
    return _NON_DIGIT.sub("", s)


def _check_digit(digits: str, first_weight: int) -> int:
    """
    Weighted mod-11 check digit over `digits`.

    Weights start at `first_weight` and decrease by one per position.
    Remainders 0 and 1 map to 0.
    """
    total = 0
    for i, ch in enumerate(digits):
        total += (ord(ch) - 48) * (first_weight - i)
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(s: str) -> bool:
    """
    Validate a CPF using its two check digits.

    Steps:
      1) Strip everything that is not a digit.
      2) Require exactly 11 digits.
      3) Reject the 11 repeated-digit numbers ("00000000000", "11111111111", ...),
         which satisfy the checksum but are never issued.
      4) First check digit: weights 10..2 over digits 0..8, compare with digit 9.
      5) Second check digit: weights 11..2 over digits 0..9, compare with digit 10.

    Args:
        s: Candidate string (may include dots, dashes, spaces).

    Returns:
        True if the digits form a valid CPF; False otherwise.
    """
    n = strip_cpf(s)
    if len(n) != CPF_LENGTH:
        return False

    if n == n[0] * CPF_LENGTH:
        return False

    if ord(n[9]) - 48 != _check_digit(n[:9], 10):
        return False

    return ord(n[10]) - 48 == _check_digit(n[:10], 11)


def format_cpf(s: str) -> str:
    """
    Format a CPF for display as ``AAA.BBB.CCC-DD``.

    Punctuation in the input is stripped first, so formatting an already
    formatted CPF returns it unchanged. When the input does not hold exactly
    11 digits the stripped digits are returned as they are; callers doing
    as-you-type masking should use `mask_cpf_partial` instead.
    """
    n = strip_cpf(s)
    if len(n) != CPF_LENGTH:
        return n
    return f"{n[0:3]}.{n[3:6]}.{n[6:9]}-{n[9:11]}"


def mask_cpf_partial(s: str) -> str:
    """
    Progressive mask for a CPF that is still being typed.

    Digits beyond the 11th are dropped. A separator is only emitted once a digit
    follows it:
      '5299'        -> '529.9'
      '529982247'   -> '529.982.247'
      '5299822472'  -> '529.982.247-2'
    """
    n = strip_cpf(s)[:CPF_LENGTH]
    out = []
    for i, ch in enumerate(n):
        if i in (3, 6):
            out.append(".")
        elif i == 9:
            out.append("-")
        out.append(ch)
    return "".join(out)


def is_valid_email(s: str) -> bool:
    """
    Syntactic sanity check for an email address.

    Accepts ``local@domain.tld`` where no part contains whitespace or '@' and the
    domain holds at least one dot with something after the last one. Says nothing
    about whether the address exists or accepts mail.
    """
    if not isinstance(s, str):
        return False
    return _EMAIL.fullmatch(s) is not None
