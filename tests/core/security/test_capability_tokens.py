import pytest

from core.models.errors import ConfigurationError, ValidationError
from core.security.capability_tokens import CapabilityTokenService
from core.utils.constants import DEFAULT_TOKEN_TTL_SECONDS, ENV_API_SECRET_KEY, ENV_TOKEN_EXPIRY


class FakeClock:
    def __init__(self, now: float = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens(clock) -> CapabilityTokenService:
    return CapabilityTokenService(secret_key="unit-test-secret", clock=clock)


class TestIssue:
    def test_token_format(self, tokens, clock) -> None:
        issued = tokens.issue("rec-1", ttl_seconds=60)

        record_id, expires_at, signature = issued.token.split(":")

        assert record_id == "rec-1"
        assert int(expires_at) == int(clock.now) + 60 == issued.expires_at
        assert len(signature) == 64
        assert all(char in "0123456789abcdef" for char in signature)

    def test_default_ttl(self, tokens, clock) -> None:
        issued = tokens.issue("rec-1")

        assert issued.expires_at == int(clock.now) + DEFAULT_TOKEN_TTL_SECONDS

    def test_issue_is_deterministic_for_same_instant(self, tokens) -> None:
        assert tokens.issue("rec-1", 30).token == tokens.issue("rec-1", 30).token

    @pytest.mark.parametrize("record_id", ["", "a:b"])
    def test_rejects_unembeddable_record_id(self, tokens, record_id) -> None:
        with pytest.raises(ValidationError):
            tokens.issue(record_id)

    def test_rejects_negative_ttl(self, tokens) -> None:
        with pytest.raises(ValidationError):
            tokens.issue("rec-1", ttl_seconds=-1)


class TestVerify:
    def test_fresh_token_verifies(self, tokens) -> None:
        issued = tokens.issue("rec-1", ttl_seconds=3600)

        assert tokens.verify(issued.token, "rec-1") is True

    def test_zero_ttl_valid_in_same_second(self, tokens, clock) -> None:
        issued = tokens.issue("rec-1", ttl_seconds=0)

        assert tokens.verify(issued.token, "rec-1") is True

        clock.advance(1)
        assert tokens.verify(issued.token, "rec-1") is False

    def test_expiry_boundary(self, tokens, clock) -> None:
        issued = tokens.issue("rec-1", ttl_seconds=2)

        clock.advance(1)
        assert tokens.verify(issued.token, "rec-1") is True

        clock.advance(1)
        assert tokens.verify(issued.token, "rec-1") is True

        clock.advance(1)
        assert tokens.verify(issued.token, "rec-1") is False

    def test_wrong_record_id(self, tokens) -> None:
        issued = tokens.issue("rec-1")

        assert tokens.verify(issued.token, "rec-2") is False

    def test_record_id_cannot_be_swapped(self, tokens) -> None:
        issued = tokens.issue("rec-1")
        _, expires_at, signature = issued.token.split(":")

        assert tokens.verify(f"rec-2:{expires_at}:{signature}", "rec-2") is False

    def test_extended_expiry_is_rejected(self, tokens) -> None:
        issued = tokens.issue("rec-1", ttl_seconds=10)
        record_id, expires_at, signature = issued.token.split(":")

        forged = f"{record_id}:{int(expires_at) + 10_000}:{signature}"

        assert tokens.verify(forged, "rec-1") is False

    def test_every_signature_mutation_is_rejected(self, tokens) -> None:
        issued = tokens.issue("rec-1")
        prefix, signature = issued.token.rsplit(":", 1)

        for position, char in enumerate(signature):
            replacement = "0" if char != "0" else "1"
            mutated = signature[:position] + replacement + signature[position + 1 :]
            assert tokens.verify(f"{prefix}:{mutated}", "rec-1") is False

    def test_other_secret_rejects(self, tokens, clock) -> None:
        other = CapabilityTokenService(secret_key="another-secret", clock=clock)

        assert other.verify(tokens.issue("rec-1").token, "rec-1") is False

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "rec-1",
            "rec-1:123",
            "rec-1:123:abc:extra",
            "rec-1:notanumber:abc",
            "rec-1:-5:abc",
            "rec-1:１２３:abc",
            "rec-1:9999999999:\udcff",
            "rec-1:" + "9" * 5000 + ":" + "a" * 64,
            None,
            12345,
        ],
    )
    def test_malformed_tokens_are_rejected(self, tokens, token) -> None:
        assert tokens.verify(token, "rec-1") is False


class TestConfiguration:
    @pytest.mark.parametrize("secret", [None, ""])
    def test_missing_secret(self, secret) -> None:
        with pytest.raises(ConfigurationError):
            CapabilityTokenService(secret_key=secret)

    def test_negative_default_ttl(self) -> None:
        with pytest.raises(ConfigurationError):
            CapabilityTokenService(secret_key="s", default_ttl=-1)

    def test_from_env(self, monkeypatch, clock) -> None:
        monkeypatch.setenv(ENV_API_SECRET_KEY, "env-secret")
        monkeypatch.setenv(ENV_TOKEN_EXPIRY, "120")

        service = CapabilityTokenService.from_env(clock=clock)

        assert service.default_ttl == 120
        assert service.issue("rec-1").expires_at == int(clock.now) + 120

    def test_from_env_default_ttl(self, monkeypatch) -> None:
        monkeypatch.setenv(ENV_API_SECRET_KEY, "env-secret")
        monkeypatch.delenv(ENV_TOKEN_EXPIRY, raising=False)

        assert CapabilityTokenService.from_env().default_ttl == DEFAULT_TOKEN_TTL_SECONDS

    def test_from_env_missing_secret(self, monkeypatch) -> None:
        monkeypatch.delenv(ENV_API_SECRET_KEY, raising=False)

        with pytest.raises(ConfigurationError):
            CapabilityTokenService.from_env()

    def test_from_env_bad_ttl(self, monkeypatch) -> None:
        monkeypatch.setenv(ENV_API_SECRET_KEY, "env-secret")
        monkeypatch.setenv(ENV_TOKEN_EXPIRY, "soon")

        with pytest.raises(ConfigurationError):
            CapabilityTokenService.from_env()
