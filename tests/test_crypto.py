"""
Tests — Password hashing and session tokens.
"""

from bountyhub.utils.crypto import generate_session_token, hash_password, hash_token, verify_password


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("hunter2hunter2")
        assert hashed != "hunter2hunter2"
        assert verify_password("hunter2hunter2", hashed)
        assert not verify_password("hunter3hunter3", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_garbage_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_tokens_are_unique(self):
        assert generate_session_token() != generate_session_token()

    def test_hash_token_is_stable_sha256(self):
        assert hash_token("abc") == hash_token("abc")
        assert len(hash_token("abc")) == 64
