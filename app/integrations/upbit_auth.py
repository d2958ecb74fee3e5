from __future__ import annotations

import hashlib
import uuid
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import urlencode

import jwt


class Signer(Protocol):
    def sign(self, payload: Dict[str, Any]) -> str:
        ...

    def authorization_header(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
        ...


class UpbitJwtSigner:
    """HS256 bearer tokens for Upbit private endpoints.

    Each token carries the access key and a single-use uuid4 nonce. Endpoints
    taking query parameters also need the SHA-512 hash of the encoded query
    string in the payload; `/v1/accounts` takes none, so its token has no
    `query_hash`.
    """

    algorithm = "HS256"

    def __init__(self, access_key: str, secret_key: str) -> None:
        self.access_key = access_key
        self._secret_key = secret_key

    def sign(self, payload: Dict[str, Any]) -> str:
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def build_payload(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "access_key": self.access_key,
            "nonce": str(uuid.uuid4()),
        }
        if params:
            query = urlencode(params, doseq=True)
            payload["query_hash"] = hashlib.sha512(query.encode("utf-8")).hexdigest()
            payload["query_hash_alg"] = "SHA512"
        return payload

    def authorization_header(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
        token = self.sign(self.build_payload(params))
        return {"Authorization": f"Bearer {token}"}
