"""Asymmetric key pair generation.

Keys are produced with the ``cryptography`` package and returned as PEM text.
RSA private keys use the PKCS#1 layout and EC private keys the SEC1 layout,
both of which ``cryptography`` exposes as ``PrivateFormat.TraditionalOpenSSL``.
Public keys are always SubjectPublicKeyInfo, the format CloudFront expects.
"""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .constants import (
    DEFAULT_KEY_TYPE,
    ECDSA_256,
    RSA_2048,
    RSA_KEY_SIZE,
    RSA_PUBLIC_EXPONENT,
)
from .errors import GenerationError


def _private_key(key_type: str):
    if key_type == RSA_2048:
        return rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE
        )
    if key_type == ECDSA_256:
        return ec.generate_private_key(ec.SECP256R1())
    raise GenerationError(f"unsupported key type: {key_type}")


def generate_key_pair(key_type: str = DEFAULT_KEY_TYPE) -> tuple[str, str]:
    """Return a fresh ``(public_pem, private_pem)`` pair.

    Args:
        key_type: ``"RSA_2048"`` or ``"ECDSA_256"``.

    Returns:
        tuple[str, str]: SPKI public key and unencrypted private key, as PEM.

    Raises:
        GenerationError: If ``key_type`` is unknown or the backend fails.
    """
    try:
        private_key = _private_key(key_type)
        public_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except GenerationError:
        raise
    except Exception as exc:
        raise GenerationError(f"key generation failed: {exc}") from exc
    return public_pem.decode("ascii"), private_pem.decode("ascii")
