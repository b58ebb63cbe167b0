"""
Credentials encryption - AES-256-CBC with a fixed key and IV

Encryption is deterministic on purpose: usernames are looked up by their
encrypted value, so the same plaintext must always give the same ciphertext.
"""

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from gestion_alquiler.core.exceptions import ValidationException


class CredentialCipher:
    """Encrypts and decrypts credentials as hex strings"""

    def __init__(self, key: str, iv: str):
        self._key = key.encode("utf-8")
        self._iv = iv.encode("utf-8")

    @classmethod
    def from_settings(cls, settings) -> "CredentialCipher":
        return cls(settings.CRYPT_KEY, settings.CRYPT_IV)

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(self._iv))

    def encrypt(self, text: str) -> str:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(text.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher().encryptor()
        return (encryptor.update(padded) + encryptor.finalize()).hex()

    def decrypt(self, text: str) -> str:
        try:
            data = bytes.fromhex(text)
            decryptor = self._cipher().decryptor()
            padded = decryptor.update(data) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
        except ValueError as e:
            raise ValidationException(f"Cannot decrypt value: {e}", error_code="DECRYPTION_ERROR")
