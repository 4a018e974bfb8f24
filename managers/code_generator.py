import random
import re

CODE_PREFIX = "NX"
TYPE_SUFFIXES = {"Main": "M", "Sub": "S"}
# Prefix letters are word characters of any script, never '_', '-' or spaces.
BRANCH_CODE_PATTERN = re.compile(r"^NX-([^\W_]{2})-(\d{4})-([MS])$")


def code_prefix(branch_name):
    """First two letters or digits of the name, uppercased. "" when there are fewer than two."""
    letters = "".join(ch for ch in (branch_name or "") if ch.isalnum()).upper()
    if len(letters) < 2:
        return ""
    return letters[:2]


def generate_branch_code(branch_name, branch_type, rng=None):
    """
    Builds a human readable branch code: NX-<2 letters>-<4 digits>-<M|S>.
    The letters come from the start of the name, the digits are random, so the
    code only looks unique. Returns "" when the name has fewer than 2 letters.
    """
    prefix = code_prefix(branch_name)
    if not prefix:
        return ""

    rng = rng or random
    suffix = rng.randint(1000, 9999)
    type_code = TYPE_SUFFIXES.get(branch_type, "S")
    return f"{CODE_PREFIX}-{prefix}-{suffix}-{type_code}"


def is_valid_branch_code(code) -> bool:
    if not isinstance(code, str):
        return False
    return bool(BRANCH_CODE_PATTERN.match(code))


def code_matches(code, branch_name, branch_type) -> bool:
    """True when the code's prefix and type letter agree with the record's name and type."""
    match = BRANCH_CODE_PATTERN.match(code) if isinstance(code, str) else None
    if match is None:
        return False
    prefix, _, type_code = match.groups()
    return prefix == code_prefix(branch_name) and type_code == TYPE_SUFFIXES.get(branch_type)
