import pytest

from gestion_alquiler.core.exceptions import ValidationException
from gestion_alquiler.utils.encryption import CredentialCipher


@pytest.fixture
def cipher(settings):
    return CredentialCipher.from_settings(settings)


def test_encrypt_is_deterministic_hex(cipher):
    encrypted = cipher.encrypt("admin")
    assert encrypted == cipher.encrypt("admin")
    assert encrypted != "admin"
    assert len(encrypted) == 32
    int(encrypted, 16)


def test_decrypt_restores_text(cipher):
    assert cipher.decrypt(cipher.encrypt("contraseña segura")) == "contraseña segura"


def test_different_keys_give_different_values(cipher):
    other = CredentialCipher("f" * 32, "0" * 16)
    assert other.encrypt("admin") != cipher.encrypt("admin")


def test_decrypt_garbage(cipher):
    with pytest.raises(ValidationException) as exc_info:
        cipher.decrypt("zz")
    assert exc_info.value.error_code == "DECRYPTION_ERROR"
