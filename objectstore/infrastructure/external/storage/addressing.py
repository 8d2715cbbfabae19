"""Request target (URL, canonical URI, Host) and public URL derivation.

Path-style:           https://<endpoint host>/<base>/<bucket>/<key>
Virtual-hosted-style: https://<bucket>.<endpoint host>/<base>/<key>
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, quote, urlsplit

if TYPE_CHECKING:
    from objectstore.core.config import StorageSettings

_DEFAULT_PORTS = {"http": 80, "https": 443}
_MULTI_SLASH = re.compile(r"/+")
_DOT_SEGMENTS = {".": "%2E", "..": "%2E%2E"}


def sanitize_key(key: str) -> str:
    """Strip leading slashes from an object key."""
    return key.lstrip("/")


def encode_uri_component(value: str) -> str:
    """Percent-encode everything except A-Z a-z 0-9 - _ . ~ (UTF-8 bytes)."""
    return quote(value, safe="-_.~")


def _encode_segment(segment: str) -> str:
    # httpx collapses literal dot segments before sending; escaped ones survive.
    return _DOT_SEGMENTS.get(segment) or encode_uri_component(segment)


def encode_path_segments(path: str) -> str:
    """Encode each /-separated segment independently, keeping the separators.

    Segments that are exactly "." or ".." are escaped so the path is sent as signed.
    """
    return "/".join(_encode_segment(segment) for segment in path.split("/"))


def combine_path(base_path: str, addition: str) -> str:
    """Join two path parts; result starts with one / and has no repeated slashes."""
    sanitized_base = "" if base_path == "/" else base_path.rstrip("/")
    sanitized_addition = addition.lstrip("/")
    combined = "/".join(part for part in (sanitized_base, sanitized_addition) if part)
    normalized = f"/{combined}" if combined else "/"
    return _MULTI_SLASH.sub("/", normalized)


def canonical_query_string(params: list[tuple[str, str]]) -> str:
    """Sort pairs by key (stable) and join encoded key=value with &."""
    ordered = sorted(params, key=lambda pair: pair[0])
    return "&".join(
        f"{encode_uri_component(k)}={encode_uri_component(v)}" for k, v in ordered
    )


def build_public_url(public_base_url: str, key: str) -> str:
    """Join the public base URL and key with exactly one slash."""
    return f"{public_base_url.rstrip('/')}/{sanitize_key(key)}"


@dataclass(frozen=True)
class RequestTarget:
    """Where the PUT goes and what the signature covers.

    url keeps the key unencoded (for display); wire_url is what is sent and
    uses canonical_uri verbatim so the signed path and the sent path match.
    """

    scheme: str
    host: str
    url: str
    canonical_uri: str
    query: list[tuple[str, str]] = field(default_factory=list)

    @property
    def canonical_query(self) -> str:
        return canonical_query_string(self.query)

    @property
    def wire_url(self) -> str:
        query = self.canonical_query
        suffix = f"?{query}" if query else ""
        return f"{self.scheme}://{self.host}{self.canonical_uri}{suffix}"


def _bracket_ipv6(hostname: str) -> str:
    """urlsplit drops the brackets around IPv6 literals; Host and URLs need them."""
    return f"[{hostname}]" if ":" in hostname else hostname


def _host_header(scheme: str, hostname: str, port: int | None) -> str:
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return hostname
    return f"{hostname}:{port}"


def build_request_target(settings: StorageSettings, key: str) -> RequestTarget:
    """Derive the request target for key under the configured addressing mode.

    Args:
        settings: Storage settings (endpoint, bucket, force_path_style).
        key: Object key; leading slashes are ignored.

    Returns:
        RequestTarget with unencoded url, canonical URI, Host and query pairs.
    """
    sanitized_key = sanitize_key(key)
    endpoint = urlsplit(settings.endpoint or "")
    scheme = endpoint.scheme or "https"
    hostname = _bracket_ipv6(endpoint.hostname or "")
    base_path = endpoint.path or "/"
    encoded_key = encode_path_segments(sanitized_key)
    query = parse_qsl(endpoint.query, keep_blank_values=True)

    if settings.force_path_style:
        path = combine_path(base_path, f"{settings.bucket_name}/{sanitized_key}")
        canonical_uri = combine_path(
            base_path, f"{encode_uri_component(settings.bucket_name)}/{encoded_key}"
        )
    else:
        hostname = f"{settings.bucket_name}.{hostname}"
        path = combine_path(base_path, sanitized_key)
        canonical_uri = combine_path(base_path, encoded_key)

    host = _host_header(scheme, hostname, endpoint.port)
    query_suffix = f"?{endpoint.query}" if endpoint.query else ""
    return RequestTarget(
        scheme=scheme,
        host=host,
        url=f"{scheme}://{host}{path}{query_suffix}",
        canonical_uri=canonical_uri,
        query=query,
    )
