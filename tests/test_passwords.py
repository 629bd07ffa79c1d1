import pytest

from security.passwords import CryptContextHasher


@pytest.fixture(scope="module")
def hasher():
    return CryptContextHasher(["pbkdf2_sha256"])


def test_hash_is_not_plaintext(hasher):
    digest = hasher.hash("pw1")
    assert digest != "pw1"
    assert digest.startswith("$pbkdf2-sha256$")


def test_hash_is_salted(hasher):
    assert hasher.hash("pw1") != hasher.hash("pw1")


def test_verify(hasher):
    digest = hasher.hash("pw1")
    assert hasher.verify(digest, "pw1") is True
    assert hasher.verify(digest, "pw2") is False


@pytest.mark.parametrize("digest", [None, "", "not-a-digest"])
def test_verify_bad_digest(hasher, digest):
    assert hasher.verify(digest, "pw1") is False


def test_default_schemes_from_config():
    hasher = CryptContextHasher()
    assert hasher.verify(hasher.hash("pw1"), "pw1")
