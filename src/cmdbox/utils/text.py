"""Small string helpers shared by actions."""

import re
from urllib.parse import unquote

_VERSION_PREFIX = re.compile(r"^\s*(?:[\^~]|[<>]=?|=)*\s*v?")


def clean_version(version: str) -> str:
    """Strip range operators and a leading ``v`` from a version string.

    >>> clean_version("^1.2.3")
    '1.2.3'
    >>> clean_version(">= v2.0.0")
    '2.0.0'
    """
    return _VERSION_PREFIX.sub("", version).strip()


def try_unescape(text: str) -> str:
    """Percent-decode ``text``, returning it unchanged if it is not valid."""
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        return text
