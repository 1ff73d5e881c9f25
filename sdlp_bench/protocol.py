"""
Protocol operations benchmarked by the runner.

The runner treats link creation, verification and compression as opaque
operations behind ``LinkProtocol``. ``ReferenceLinkProtocol`` is a compact
SDLP-1.0 style codec (Ed25519 over a JWS flattened envelope, SHA-256 payload
checksum, optional Brotli) so the harness can run without an external SDK.
"""

import base64
import hashlib
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import brotli
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

LINK_SCHEME = "sdlp://"
PROTOCOL_VERSION = "SDL-1.0"

# Deterministic benchmark key so that link sizes are stable between runs.
TEST_PRIVATE_KEY_D = "PwNrwDyAhz3HLLOq0HY6O3d0HpP9e8JHQJ9V7WhLMZA"
TEST_SIGNER_DID = "did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK"


class LinkFormatError(Exception):
    """Raised when a link cannot be parsed."""
    pass


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)


@dataclass(frozen=True)
class Signer:
    """Signing identity: a DID URL key id and its Ed25519 private key."""
    kid: str
    private_key: Ed25519PrivateKey

    @property
    def did(self) -> str:
        return self.kid.split("#", 1)[0]


def generate_test_signer() -> Signer:
    """Return the fixed benchmark signer."""
    private_key = Ed25519PrivateKey.from_private_bytes(base64url_decode(TEST_PRIVATE_KEY_D))
    fragment = TEST_SIGNER_DID.rsplit(":", 1)[1]
    return Signer(kid=f"{TEST_SIGNER_DID}#{fragment}", private_key=private_key)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying a link."""
    valid: bool
    payload: Optional[bytes] = None
    payload_type: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None


class LinkProtocol(ABC):
    """
    Operations the runner measures.

    Implementations may define these methods as coroutines; the runner
    awaits any awaitable they return.
    """

    #: Version string recorded in the suite environment.
    version = "unknown"

    @abstractmethod
    def create_link(self, payload: bytes, payload_type: str, compress: bool) -> str:
        """Encode and sign a payload into a link."""

    @abstractmethod
    def verify_link(self, link: str) -> VerificationResult:
        """Decode and verify a link."""

    @abstractmethod
    def compress(self, payload: bytes) -> bytes:
        """Run the compression step used by create_link(compress=True)."""


class ReferenceLinkProtocol(LinkProtocol):
    """
    Self-contained SDLP-1.0 style link codec.

    Link layout: ``sdlp://<base64url(JWS JSON)>.<base64url(payload)>`` where the
    JWS signs the core metadata (version, sender DID, payload type,
    compression and SHA-256 checksum of the uncompressed payload).
    """

    version = "1.0"

    def __init__(self, signer: Optional[Signer] = None):
        self.signer = signer or generate_test_signer()
        self.trusted_keys: Dict[str, Ed25519PublicKey] = {
            self.signer.did: self.signer.private_key.public_key()
        }

    def compress(self, payload: bytes) -> bytes:
        return brotli.compress(payload)

    def create_link(self, payload: bytes, payload_type: str = "application/json",
                    compress: bool = False) -> str:
        """
        Create a signed link.

        Args:
            payload: Raw payload bytes
            payload_type: MIME type recorded in the metadata
            compress: Whether to Brotli-compress the payload

        Returns:
            Complete ``sdlp://`` link
        """
        body = self.compress(payload) if compress else payload
        core_metadata = {
            "v": PROTOCOL_VERSION,
            "sid": self.signer.did,
            "type": payload_type,
            "comp": "br" if compress else "none",
            "chk": hashlib.sha256(payload).hexdigest(),
        }
        protected = base64url_encode(
            json.dumps({"alg": "EdDSA", "kid": self.signer.kid}).encode("utf-8")
        )
        encoded_metadata = base64url_encode(json.dumps(core_metadata).encode("utf-8"))
        signing_input = f"{protected}.{encoded_metadata}".encode("ascii")
        jws = {
            "protected": protected,
            "payload": encoded_metadata,
            "signature": base64url_encode(self.signer.private_key.sign(signing_input)),
        }
        encoded_jws = base64url_encode(json.dumps(jws).encode("utf-8"))
        return f"{LINK_SCHEME}{encoded_jws}.{base64url_encode(body)}"

    def _parse(self, link: str) -> Dict[str, Any]:
        if not link.startswith(LINK_SCHEME):
            raise LinkFormatError("Link does not use the sdlp:// scheme")
        parts = link[len(LINK_SCHEME):].split(".")
        if len(parts) != 2 or not parts[0]:
            raise LinkFormatError("Link must contain exactly two dot-separated parts")
        try:
            jws = json.loads(base64url_decode(parts[0]))
            header = json.loads(base64url_decode(jws["protected"]))
            metadata = json.loads(base64url_decode(jws["payload"]))
            body = base64url_decode(parts[1])
        except (ValueError, KeyError, TypeError) as e:
            raise LinkFormatError(f"Failed to decode link: {e}") from e
        return {"jws": jws, "header": header, "metadata": metadata, "body": body}

    def verify_link(self, link: str) -> VerificationResult:
        """
        Verify a link created by create_link.

        Failures are reported through the returned VerificationResult rather
        than raised.
        """
        try:
            parsed = self._parse(link)
        except LinkFormatError as e:
            return VerificationResult(False, error="INVALID_LINK_FORMAT", details=str(e))

        jws, header, metadata = parsed["jws"], parsed["header"], parsed["metadata"]
        signer_did = str(header.get("kid", "")).split("#", 1)[0]
        if signer_did != metadata.get("sid"):
            return VerificationResult(
                False, error="INVALID_SIGNATURE",
                details=f"Kid DID ({signer_did}) does not match sid ({metadata.get('sid')})",
            )

        public_key = self.trusted_keys.get(signer_did)
        if public_key is None:
            return VerificationResult(
                False, error="DID_RESOLUTION_FAILED",
                details=f"Failed to resolve DID: {signer_did}",
            )

        comp = metadata.get("comp")
        if comp == "none":
            payload = parsed["body"]
        elif comp == "br":
            try:
                payload = brotli.decompress(parsed["body"])
            except brotli.error as e:
                return VerificationResult(False, error="INVALID_LINK_FORMAT", details=str(e))
        else:
            return VerificationResult(
                False, error="UNSUPPORTED_COMPRESSION",
                details=f"Unsupported compression algorithm: {comp}",
            )

        if hashlib.sha256(payload).hexdigest() != metadata.get("chk"):
            return VerificationResult(
                False, error="PAYLOAD_CHECKSUM_MISMATCH",
                details="Payload checksum does not match metadata",
            )

        try:
            signing_input = f"{jws['protected']}.{jws['payload']}".encode("ascii")
            public_key.verify(base64url_decode(jws["signature"]), signing_input)
        except (InvalidSignature, KeyError, ValueError) as e:
            return VerificationResult(
                False, error="INVALID_SIGNATURE",
                details=f"JWS verification failed: {e or 'bad signature'}",
            )

        return VerificationResult(True, payload=payload, payload_type=metadata.get("type"))
