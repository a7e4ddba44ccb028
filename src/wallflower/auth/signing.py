"""OAuth 1.0a HMAC-SHA1 request signing.

Pure functions: the same inputs always produce the same output. Callers
supply the nonce and timestamp that make each live request unique.
"""

import base64
import hashlib
import hmac
from collections.abc import Iterable, Mapping
from typing import TypeAlias
from urllib.parse import quote

Params: TypeAlias = Mapping[str, str] | Iterable[tuple[str, str]]


def percent_encode(value: str | bytes) -> str:
    """Percent-encode using the OAuth unreserved character set.

    Only ``A-Z a-z 0-9 - . _ ~`` pass through; every other byte, including
    ``/`` and all non-ASCII bytes, becomes ``%XX`` with uppercase hex.
    """
    return quote(value, safe="")


def _pairs(params: Params) -> list[tuple[str, str]]:
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def normalize_params(params: Params) -> str:
    """Encode each key and value, sort the ``key=value`` strings, join with ``&``."""
    encoded = [f"{percent_encode(k)}={percent_encode(v)}" for k, v in _pairs(params)]
    return "&".join(sorted(encoded))


def signature_base_string(verb: str, base_url: str, params: Params) -> str:
    """Build the canonical string that gets HMAC-signed.

    The normalized parameter string is percent-encoded a second time here.
    """
    return "&".join(
        [
            verb.upper(),
            percent_encode(base_url),
            percent_encode(normalize_params(params)),
        ]
    )


def sign(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """Compute the base64 HMAC-SHA1 ``oauth_signature`` for a base string.

    The result is not percent-encoded; that happens with every other
    parameter when the request URL is assembled.
    """
    signing_key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(
        signing_key.encode(),
        base_string.encode(),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode()


def build_url(base_url: str, params: Params) -> str:
    """Assemble a request URL with every parameter percent-encoded."""
    query = "&".join(f"{percent_encode(k)}={percent_encode(v)}" for k, v in _pairs(params))
    return f"{base_url}?{query}" if query else base_url
