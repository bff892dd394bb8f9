"""
casevault - Confidential Medical Case Registry

A keyed registry of medical cases whose sensitive numeric field is held as an
opaque encrypted value until an authorized decryption is cryptographically
attested.

Registry Guarantees:
- A case id is admitted once and never reused or deleted
- A case is verified at most once; verification is never undone
- Untrusted ciphertexts are admitted only through the ciphertext authority
- Disclosed values are accepted only with a valid attestation
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
