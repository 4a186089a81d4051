"""Unit tests for token issuance and validation."""

import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from src.vehicle_registry.application.services.token_service import TokenService
from src.vehicle_registry.domain.entities.administrator import Administrator
from src.vehicle_registry.domain.exceptions import AuthenticationError, ConfigurationError

from tests.conftest import TEST_ISSUER, TEST_SECRET_KEY


@pytest.fixture
def administrator():
    """Stored administrator."""
    return Administrator(email="admin@admin", name="Admin", administrator_id=1)


class TestTokenIssue:
    """Test cases for TokenService.issue."""

    def test_issue_sets_claims(self, token_service, administrator, clock):
        """Test issued token carries the administrator claims."""
        auth_token = token_service.issue(administrator)

        payload = jwt.get_unverified_claims(auth_token.token)
        assert payload["sub"] == "Admin"
        assert payload["email"] == "admin@admin"
        assert payload["role"] == "Administrator"
        assert payload["iss"] == TEST_ISSUER
        assert payload["exp"] - payload["iat"] == 3600
        assert auth_token.issued_at == clock.now
        assert auth_token.expires_at == clock.now + timedelta(hours=1)

    def test_issue_uses_hs256(self, token_service, administrator):
        """Test tokens are signed with a symmetric algorithm."""
        auth_token = token_service.issue(administrator)
        assert jwt.get_unverified_header(auth_token.token)["alg"] == "HS256"

    def test_missing_name_uses_placeholder(self, token_service):
        """Test subject falls back when the administrator has no name."""
        auth_token = token_service.issue(Administrator(email="noname@admin", administrator_id=2))

        claims = token_service.validate(auth_token.token)
        assert claims.subject == "NoName"
        assert claims.email == "noname@admin"


class TestTokenValidate:
    """Test cases for TokenService.validate."""

    def test_valid_token(self, token_service, administrator, clock):
        """Test a fresh token validates and round-trips its claims."""
        auth_token = token_service.issue(administrator)

        claims = token_service.validate(auth_token.token)

        assert claims.email == administrator.email
        assert claims.subject == "Admin"
        assert claims.role == "Administrator"
        assert claims.issuer == TEST_ISSUER
        assert claims.expires_at == clock.now + timedelta(hours=1)
        assert claims.issued_at == clock.now

    def test_token_valid_until_just_before_expiry(self, token_service, administrator, clock):
        """Test token is accepted through the last second of its hour."""
        auth_token = token_service.issue(administrator)

        clock.advance(timedelta(minutes=59, seconds=59))

        assert token_service.validate(auth_token.token).email == administrator.email

    def test_expiry_follows_injected_clock(self, token_service, administrator, clock):
        """Test a token whose hour ended long ago on the wall clock is judged by the service clock."""
        assert clock.now + timedelta(hours=1) < datetime.now(timezone.utc)
        auth_token = token_service.issue(administrator)

        clock.advance(timedelta(minutes=30))

        assert token_service.validate(auth_token.token).email == administrator.email

    def test_token_issued_mid_second_lives_a_full_hour(self, token_service, administrator, clock):
        """Test sub-second issue times are not truncated away."""
        clock.now = clock.now.replace(microsecond=900000)
        auth_token = token_service.issue(administrator)

        clock.advance(timedelta(minutes=59, seconds=59, microseconds=500000))
        assert token_service.validate(auth_token.token).email == administrator.email

        clock.advance(timedelta(microseconds=500000))
        with pytest.raises(AuthenticationError, match="expired"):
            token_service.validate(auth_token.token)

    def test_token_without_issuer_rejected(self, token_service, clock):
        """Test tokens must name their issuer."""
        token = jwt.encode(
            {"sub": "Admin", "email": "admin@admin", "exp": clock.now.timestamp() + 60},
            TEST_SECRET_KEY,
            algorithm="HS256"
        )

        with pytest.raises(AuthenticationError):
            token_service.validate(token)

    def test_token_rejected_at_expiry(self, token_service, administrator, clock):
        """Test token is rejected exactly one hour after issuance."""
        auth_token = token_service.issue(administrator)

        clock.advance(timedelta(hours=1))

        with pytest.raises(AuthenticationError, match="expired"):
            token_service.validate(auth_token.token)

    def test_token_rejected_after_expiry(self, token_service, administrator, clock):
        """Test token stays rejected after expiry."""
        auth_token = token_service.issue(administrator)

        clock.advance(timedelta(days=2))

        with pytest.raises(AuthenticationError):
            token_service.validate(auth_token.token)

    def test_token_signed_with_other_key_rejected(self, token_service, administrator, clock):
        """Test a token from another key is rejected even when fresh."""
        forger = TokenService(secret_key="another-key-entirely-0123456789abcdef", issuer=TEST_ISSUER, clock=clock)
        forged = forger.issue(administrator)

        with pytest.raises(AuthenticationError):
            token_service.validate(forged.token)

    def test_token_with_other_issuer_rejected(self, token_service, administrator, clock):
        """Test a correctly signed token from another issuer is rejected."""
        other = TokenService(secret_key=TEST_SECRET_KEY, issuer="someone-else", clock=clock)
        foreign = other.issue(administrator)

        with pytest.raises(AuthenticationError):
            token_service.validate(foreign.token)

    def test_audience_is_not_checked(self, token_service, clock):
        """Test any audience value is accepted."""
        exp = int(clock.now.timestamp()) + 60
        token = jwt.encode(
            {"sub": "Admin", "email": "admin@admin", "role": "Administrator",
             "iss": TEST_ISSUER, "aud": "some-other-audience", "exp": exp},
            TEST_SECRET_KEY,
            algorithm="HS256"
        )

        assert token_service.validate(token).email == "admin@admin"

    def test_token_without_expiry_rejected(self, token_service):
        """Test tokens must carry an expiry."""
        token = jwt.encode(
            {"sub": "Admin", "email": "admin@admin", "role": "Administrator", "iss": TEST_ISSUER},
            TEST_SECRET_KEY,
            algorithm="HS256"
        )

        with pytest.raises(AuthenticationError):
            token_service.validate(token)

    def test_token_with_other_algorithm_rejected(self, token_service, clock):
        """Test only the configured algorithm is accepted."""
        exp = int(clock.now.timestamp()) + 60
        token = jwt.encode(
            {"sub": "Admin", "email": "admin@admin", "iss": TEST_ISSUER, "exp": exp},
            TEST_SECRET_KEY,
            algorithm="HS512"
        )

        with pytest.raises(AuthenticationError):
            token_service.validate(token)

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_malformed_token_rejected(self, token_service, token):
        """Test garbage input is rejected."""
        with pytest.raises(AuthenticationError):
            token_service.validate(token)

    def test_tampered_token_rejected(self, token_service, administrator):
        """Test changing the payload invalidates the signature."""
        header, payload, signature = token_service.issue(administrator).token.split(".")
        other = token_service.issue(Administrator(email="other@admin", name="Other", administrator_id=2))
        _, other_payload, _ = other.token.split(".")

        with pytest.raises(AuthenticationError):
            token_service.validate(f"{header}.{other_payload}.{signature}")


class TestTokenServiceConfiguration:
    """Test cases for TokenService construction."""

    @pytest.mark.parametrize("secret_key,issuer", [
        ("", TEST_ISSUER),
        ("   ", TEST_ISSUER),
        (TEST_SECRET_KEY, ""),
        (None, TEST_ISSUER),
    ])
    def test_missing_configuration_raises_error(self, secret_key, issuer):
        """Test the key and issuer are mandatory."""
        with pytest.raises(ConfigurationError):
            TokenService(secret_key=secret_key, issuer=issuer)

    def test_non_positive_lifetime_raises_error(self):
        """Test a zero lifetime is rejected."""
        with pytest.raises(ConfigurationError):
            TokenService(secret_key=TEST_SECRET_KEY, issuer=TEST_ISSUER, lifetime=timedelta(0))
