"""
Token Classifier - decides whether a token is real text worth counting.

Functions:
- tokenize(): Split post text on the ASCII space only
- clean(): Trim whitespace, quotation marks and symbols from token edges
- qualifies(): True if the cleaned token passes every noise rule
- rejection_reason(): Name of the first rule rejecting a token (debugging)

The rules are independent boolean predicates. REJECTION_RULES lists them in
documentation order; a token qualifies only if none of them fires.
"""

import ipaddress
import re
import unicodedata
from typing import Callable, List, Optional, Tuple
from urllib.parse import unquote

# =============================================================================
# Character classes used by clean()
# =============================================================================

# Unicode White_Space property (str.strip() also strips U+001C..U+001F)
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

QUOTATION_MARKS = "„“‟”’❝❞〝〞〟＂'‚‘❛❜`\""

EDGE_SYMBOLS = "!$%^&*()_-+=<,>.?/{}[]\\|~\t\r\n"

# =============================================================================
# Rule constants
# =============================================================================

URL_PREFIXES = ("http://", "https://", "ftp://", "sftp://", "data:")

# Schemes that need a host to form a valid absolute URL
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

URL_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):(.*)$", re.DOTALL)

# Trimmed from both ends before parsing: C0 controls and space
URL_EDGE_CHARS = "".join(chr(c) for c in range(0x21))

# Removed anywhere before parsing
URL_REMOVED_RE = re.compile(r"[\t\n\r]")

URL_AUTHORITY_END_RE = re.compile(r"[/\\?#]")

URL_PORT_RE = re.compile(r"[0-9]*")

# Code points a domain host may not contain (after percent-decoding)
FORBIDDEN_DOMAIN_CHARS = frozenset(
    [chr(c) for c in range(0x21)] + list("#%/:<>?@[\\]^|\x7f")
)

FITZPATRICK_RANGE = range(0x1F3FB, 0x1F3FF + 1)
EMOJI_BLOCK_RANGE = range(0x1F600, 0x1F64F + 1)

ONLY_SYMBOLS = frozenset("!@#$%^&*()_-+=<,>.?/'\"{[}]\\|`~\t\r\n")

ZALGO_MIN_RATIO = 0.75

RETWEET_MARKER = "RT"


def tokenize(text: str) -> List[str]:
    """Split text on the ASCII space. Runs of spaces yield empty tokens."""
    return text.split(" ")


def clean(token: str) -> str:
    """
    Trim a token's edges.

    Whitespace, then quotation marks, then symbols are stripped from both
    ends, each class once. Interior characters are never touched.

    Args:
        token: Raw token from tokenize()

    Returns:
        The trimmed token (possibly empty)
    """
    return token.strip(WHITESPACE).strip(QUOTATION_MARKS).strip(EDGE_SYMBOLS)


# =============================================================================
# Predicates - each returns True when the token is noise
# =============================================================================


def is_too_short(token: str) -> bool:
    return len(token) <= 1


def is_mention(token: str) -> bool:
    return token.startswith("@")


def is_hashtag(token: str) -> bool:
    return token.startswith("#")


def _has_valid_host(rest: str) -> bool:
    """Authority check for special schemes: non-empty, well-formed host and port."""
    authority = URL_AUTHORITY_END_RE.split(rest.lstrip("/\\"), maxsplit=1)[0]
    if "@" in authority:
        authority = authority.rsplit("@", 1)[1]

    if authority.startswith("["):
        end = authority.find("]")
        if end == -1:
            return False
        try:
            ipaddress.IPv6Address(authority[1:end])
        except ValueError:
            return False
        port = authority[end + 1:]
        if port and not port.startswith(":"):
            return False
        port = port[1:]
    else:
        host, _, port = authority.partition(":")
        host = unquote(host)
        if not host or any(c in FORBIDDEN_DOMAIN_CHARS for c in host):
            return False

    return URL_PORT_RE.fullmatch(port) is not None and (not port or int(port) <= 65535)


def _is_absolute_url(token: str) -> bool:
    """
    Absolute URL check following the WHATWG parser.

    Leading and trailing C0/space are trimmed and tab, LF, CR removed
    before the scheme is read. Non-special schemes take any remainder.
    """
    candidate = URL_REMOVED_RE.sub("", token.strip(URL_EDGE_CHARS))
    match = URL_SCHEME_RE.match(candidate)
    if match is None:
        return False

    scheme, rest = match.group(1).lower(), match.group(2)
    if scheme in SPECIAL_SCHEMES:
        return _has_valid_host(rest)

    return True


def is_url(token: str) -> bool:
    """
    Well-formed absolute URL, or a malformed one with a known prefix.

    Any `scheme:rest` token counts as an absolute URL, so words such
    as "note:" are rejected too.
    """
    return _is_absolute_url(token) or token.startswith(URL_PREFIXES)


def is_numeric(token: str) -> bool:
    return all(unicodedata.category(c) in ("Nd", "Nl", "No") for c in token)


def is_emoji(token: str) -> bool:
    return all(
        ord(c) in FITZPATRICK_RANGE or ord(c) in EMOJI_BLOCK_RANGE for c in token
    )


def is_control(token: str) -> bool:
    return all(ord(c) < 0x20 or ord(c) == 0x7F for c in token)


def is_html_escape(token: str) -> bool:
    return token.startswith("&") and token.endswith(";")


def is_only_symbols(token: str) -> bool:
    return all(c in ONLY_SYMBOLS for c in token)


def is_zalgo(token: str) -> bool:
    """
    Combining marks make up more than 75% of the characters.

    Marks are Unicode general category M (Mn, Mc, Me).
    """
    if not token:
        return False
    marks = sum(1 for c in token if unicodedata.category(c).startswith("M"))
    return marks / len(token) > ZALGO_MIN_RATIO


def is_retweet_marker(token: str) -> bool:
    return token == RETWEET_MARKER


# Documentation order. Outcome does not depend on it.
REJECTION_RULES: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("too_short", is_too_short),
    ("mention", is_mention),
    ("hashtag", is_hashtag),
    ("url", is_url),
    ("numeric", is_numeric),
    ("emoji", is_emoji),
    ("control", is_control),
    ("html_escape", is_html_escape),
    ("symbols", is_only_symbols),
    ("zalgo", is_zalgo),
    ("retweet", is_retweet_marker),
)


def rejection_reason(token: str) -> Optional[str]:
    """
    Return the name of the first rule rejecting the token.

    Args:
        token: A cleaned token

    Returns:
        Rule name (see REJECTION_RULES) or None if the token qualifies
    """
    for name, predicate in REJECTION_RULES:
        if predicate(token):
            return name
    return None


def qualifies(token: str) -> bool:
    """True if the token is real text and should be counted."""
    return rejection_reason(token) is None
