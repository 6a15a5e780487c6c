from __future__ import annotations

import pytest

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.shared.errors import PasswordHashingError


def test_hash_is_not_plaintext_and_verifies(fast_hasher: WerkzeugPasswordHasher) -> None:
    hashed = fast_hasher.hash("p@ss")

    assert hashed != "p@ss"
    assert "p@ss" not in hashed
    assert fast_hasher.verify("p@ss", hashed) is True


def test_same_password_hashes_differently(fast_hasher: WerkzeugPasswordHasher) -> None:
    first = fast_hasher.hash("secret123")
    second = fast_hasher.hash("secret123")

    assert first != second
    assert fast_hasher.verify("secret123", first)
    assert fast_hasher.verify("secret123", second)


@pytest.mark.parametrize(
    "password",
    [
        "pässwörd",
        "密码🔑",
        'quote"back\\slash\nnewline',
        "$dollar$signs$",
        "   ",
        "<script>&amp;</script>",
        "x" * 512,
    ],
)
def test_verify_roundtrip_for_awkward_passwords(
    fast_hasher: WerkzeugPasswordHasher, password: str
) -> None:
    assert fast_hasher.verify(password, fast_hasher.hash(password))


def test_wrong_password_is_rejected(fast_hasher: WerkzeugPasswordHasher) -> None:
    hashed = fast_hasher.hash("right")

    assert fast_hasher.verify("wrong", hashed) is False
    assert fast_hasher.verify("", hashed) is False


@pytest.mark.parametrize(
    "hashed",
    [
        "",
        "not-a-hash",
        "p@ss",
        "unknown$salt$abcdef",
        "pbkdf2:sha999:1$salt$abcdef",
        "scrypt:notanumber:8:1$salt$abcdef",
        "$$",
    ],
)
def test_malformed_hash_returns_false(
    fast_hasher: WerkzeugPasswordHasher, hashed: str
) -> None:
    assert fast_hasher.verify("p@ss", hashed) is False


def test_verify_reads_cost_from_stored_hash() -> None:
    old = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    stored = old.hash("secret123")

    stronger = WerkzeugPasswordHasher(method="pbkdf2:sha256:2000")

    assert stronger.verify("secret123", stored)
    assert stronger.hash("secret123").startswith("pbkdf2:sha256:2000$")


def test_default_method_is_scrypt() -> None:
    hasher = WerkzeugPasswordHasher()

    assert hasher.hash("secret123").startswith("scrypt:32768:8:1$")


def test_unknown_method_fails_at_construction() -> None:
    with pytest.raises(PasswordHashingError):
        WerkzeugPasswordHasher(method="md5")
