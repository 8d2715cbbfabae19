"""AWS Signature Version 4 (header-based) for S3-compatible services.

Pure functions plus a small SigV4Signer; given the same inputs and clock,
the Authorization header is byte-identical. No boto3/botocore dependency.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING

from objectstore.shared.utils.datetime import ensure_utc

if TYPE_CHECKING:
    from objectstore.core.config import StorageSettings

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
TERMINATOR = "aws4_request"

EMPTY_PAYLOAD_SHA256 = hashlib.sha256(b"").hexdigest()

_SPACES = re.compile(r" +")


def sha256_hex(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def format_amz_date(now: datetime) -> tuple[str, str]:
    """Return (YYYYMMDDTHHMMSSZ, YYYYMMDD) for a UTC instant."""
    amz_date = ensure_utc(now).strftime("%Y%m%dT%H%M%SZ")
    return amz_date, amz_date[:8]


def canonical_headers(headers: Mapping[str, str]) -> tuple[str, str]:
    """Build the canonical headers block and the signed-headers list.

    Names are lowercased and sorted; values are trimmed with inner runs of
    spaces collapsed. Every line, including the last, ends with a newline.

    Returns:
        (canonical headers block, semicolon-joined signed header names)
    """
    normalized = {
        name.lower(): _SPACES.sub(" ", str(value).strip())
        for name, value in headers.items()
    }
    names = sorted(normalized)
    block = "".join(f"{name}:{normalized[name]}\n" for name in names)
    return block, ";".join(names)


def build_canonical_request(
    method: str,
    canonical_uri: str,
    canonical_query: str,
    headers: Mapping[str, str],
    payload_hash: str,
) -> str:
    block, signed_headers = canonical_headers(headers)
    return "\n".join(
        [method, canonical_uri, canonical_query, block, signed_headers, payload_hash]
    )


def credential_scope(date_stamp: str, region: str, service: str = SERVICE) -> str:
    return f"{date_stamp}/{region}/{service}/{TERMINATOR}"


def build_string_to_sign(amz_date: str, scope: str, canonical_request: str) -> str:
    return "\n".join([ALGORITHM, amz_date, scope, sha256_hex(canonical_request)])


def derive_signing_key(
    secret_access_key: str,
    date_stamp: str,
    region: str,
    service: str = SERVICE,
) -> bytes:
    """HMAC-SHA256 chain: AWS4+secret -> date -> region -> service -> aws4_request."""
    k_date = _hmac(f"AWS4{secret_access_key}".encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


def build_authorization_header(
    access_key_id: str, scope: str, signed_headers: str, signature: str
) -> str:
    return (
        f"{ALGORITHM} Credential={access_key_id}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


class SigV4Signer:
    """Signs requests with one credential pair for one region and service."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        session_token: str | None = None,
        service: str = SERVICE,
    ) -> None:
        self.access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self.region = region
        self._session_token = session_token
        self.service = service

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> SigV4Signer:
        token = settings.session_token
        return cls(
            access_key_id=settings.access_key_id,
            secret_access_key=settings.secret_access_key.get_secret_value(),
            region=settings.region,
            session_token=token.get_secret_value() if token else None,
        )

    def sign(
        self,
        method: str,
        canonical_uri: str,
        canonical_query: str,
        headers: Mapping[str, str],
        payload_hash: str,
        now: datetime,
    ) -> dict[str, str]:
        """Return headers (lowercased) including x-amz-date and authorization.

        Args:
            method: HTTP method, e.g. "PUT".
            canonical_uri: Percent-encoded request path.
            canonical_query: Canonical query string ("" when none).
            headers: Headers to sign; must include host.
            payload_hash: Lowercase hex SHA-256 of the body.
            now: Signing instant (naive values are taken as UTC).

        Returns:
            New dict of lowercase header names to values, ready to send.
        """
        amz_date, date_stamp = format_amz_date(now)
        signed = {name.lower(): value for name, value in headers.items()}
        signed["x-amz-date"] = amz_date
        signed["x-amz-content-sha256"] = payload_hash
        if self._session_token:
            signed["x-amz-security-token"] = self._session_token

        canonical_request = build_canonical_request(
            method, canonical_uri, canonical_query, signed, payload_hash
        )
        _, signed_headers = canonical_headers(signed)
        scope = credential_scope(date_stamp, self.region, self.service)
        string_to_sign = build_string_to_sign(amz_date, scope, canonical_request)
        signing_key = derive_signing_key(
            self._secret_access_key, date_stamp, self.region, self.service
        )
        signature = hmac.new(
            signing_key, string_to_sign.encode("utf-8"), hashlib.sha256
        ).hexdigest()
        signed["authorization"] = build_authorization_header(
            self.access_key_id, scope, signed_headers, signature
        )
        return signed
