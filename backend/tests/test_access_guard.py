"""
XYFORA Backend — Access Guard Unit Tests
=========================================

What we test:
    ✅ extract_identity: missing header, wrong scheme, empty/invalid/expired token
    ✅ sanitize_resource_id: whitespace and quote stripping
    ✅ is_valid_resource_id: 24-hex shape only
    ✅ authorize_mutation: exact, case-sensitive owner match
"""

from datetime import datetime, timedelta, timezone

import pytest

from xyfora.services.access_guard import AccessGuard
from xyfora.services.token_service import TokenService

SECRET = "guard-test-secret-0123456789abcdef012345678"


class TestExtractIdentity:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET)
        self.guard = AccessGuard(tokens=self.tokens)

    def test_valid_bearer_token(self):
        token = self.tokens.sign("64f3b2c4e1234567890abcde")
        assert self.guard.extract_identity(f"Bearer {token}") == "64f3b2c4e1234567890abcde"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Bearer    "])
    def test_missing_or_empty(self, header):
        assert self.guard.extract_identity(header) is None

    @pytest.mark.parametrize("scheme", ["Basic", "bearer", "Token"])
    def test_other_schemes(self, scheme):
        token = self.tokens.sign("u1")
        assert self.guard.extract_identity(f"{scheme} {token}") is None

    @pytest.mark.parametrize("template", ["Bearer  {}", "Bearer {} ", "Bearer   {}  "])
    def test_padded_token_rejected(self, template):
        token = self.tokens.sign("u1")
        assert self.guard.extract_identity(template.format(token)) is None

    def test_raw_token_without_scheme(self):
        token = self.tokens.sign("u1")
        assert self.guard.extract_identity(token) is None

    def test_expired_token(self):
        token = self.tokens.sign("u1", now=datetime.now(timezone.utc) - timedelta(days=30))
        assert self.guard.extract_identity(f"Bearer {token}") is None

    def test_token_signed_with_other_secret(self):
        foreign = TokenService(secret="foreign-secret-0123456789abcdef0123456789")
        assert self.guard.extract_identity(f"Bearer {foreign.sign('u1')}") is None

    def test_garbage_token(self):
        assert self.guard.extract_identity("Bearer not-a-jwt") is None


class TestResourceIdShape:

    def test_sanitize_strips_whitespace_and_quotes(self):
        assert AccessGuard.sanitize_resource_id('  "64f3b2c4e1234567890abcde" ') == "64f3b2c4e1234567890abcde"
        assert AccessGuard.sanitize_resource_id("'64f3b2c4e1234567890abcde'") == "64f3b2c4e1234567890abcde"
        assert AccessGuard.sanitize_resource_id("“64f3b2c4e1234567890abcde”") == "64f3b2c4e1234567890abcde"

    def test_sanitize_leaves_clean_id_alone(self):
        assert AccessGuard.sanitize_resource_id("64f3b2c4e1234567890abcde") == "64f3b2c4e1234567890abcde"

    @pytest.mark.parametrize("value", [
        "64f3b2c4e1234567890abcde",
        "64F3B2C4E1234567890ABCDE",
        "000000000000000000000000",
    ])
    def test_valid_ids(self, value):
        assert AccessGuard.is_valid_resource_id(value)

    @pytest.mark.parametrize("value", [
        "",
        "abc",
        "64f3b2c4e1234567890abcd",     # 23 chars
        "64f3b2c4e1234567890abcdef",   # 25 chars
        "64f3b2c4e1234567890abcdg",    # non-hex
        " 64f3b2c4e1234567890abcde",
        "not-a-valid-id",
    ])
    def test_invalid_ids(self, value):
        assert not AccessGuard.is_valid_resource_id(value)


class TestAuthorizeMutation:

    def test_owner_allowed(self):
        assert AccessGuard.authorize_mutation("64f3b2c4e1234567890abcde", "64f3b2c4e1234567890abcde")

    def test_other_user_denied(self):
        assert not AccessGuard.authorize_mutation("64f3b2c4e1234567890abcde", "64f3b2c4e1234567890abcdf")

    def test_comparison_is_case_sensitive(self):
        assert not AccessGuard.authorize_mutation("64F3B2C4E1234567890ABCDE", "64f3b2c4e1234567890abcde")
