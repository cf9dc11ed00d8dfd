"""
Tests for bcrypt password hashing.
"""

from auth.password import BcryptPasswordHasher


class TestBcryptPasswordHasher:
    def setup_method(self):
        self.hasher = BcryptPasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash("secret1")
        assert hashed != "secret1"
        assert "secret1" not in hashed

    def test_verify(self):
        hashed = self.hasher.hash("secret1")
        assert self.hasher.verify("secret1", hashed)
        assert not self.hasher.verify("secret2", hashed)

    def test_salted(self):
        assert self.hasher.hash("secret1") != self.hasher.hash("secret1")

    def test_garbage_hash_does_not_raise(self):
        assert not self.hasher.verify("secret1", "not-a-bcrypt-hash")

    def test_input_longer_than_72_bytes_never_matches(self):
        hashed = self.hasher.hash("a" * 72)
        assert self.hasher.verify("a" * 72, hashed)
        assert not self.hasher.verify("a" * 72 + "!", hashed)
        assert not self.hasher.verify("a" * 71 + "é", hashed)
