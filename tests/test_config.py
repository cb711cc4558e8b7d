"""Unit tests for provider configuration and session construction from settings."""
import pytest
from pydantic import ValidationError

from tickerchat.config import (
    CredentialStatus,
    EnvironmentConfigService,
    ProviderSettings,
    StaticConfigService,
    create_provider,
)
from tickerchat.llm import AnthropicProvider, OpenAIProvider
from tickerchat.session import Availability, SubmitOutcome, create_session_from_settings


class TestProviderSettings:
    """Tests for ProviderSettings.from_env."""

    def test_defaults(self):
        settings = ProviderSettings.from_env({})

        assert settings.provider == "openai"
        assert settings.api_key is None
        assert settings.model == "gpt-4o-mini"
        assert settings.temperature == 0.7
        assert settings.max_tokens == 1000
        assert settings.response_timeout is None

    def test_reads_selected_provider(self):
        settings = ProviderSettings.from_env({
            "LLM_PROVIDER": "claude",
            "ANTHROPIC_API_KEY": "sk-ant-abc",
            "ANTHROPIC_MODEL": "claude-3-5-haiku-latest",
            "OPENAI_API_KEY": "sk-ignored",
        })

        assert settings.provider == "anthropic"
        assert settings.api_key == "sk-ant-abc"
        assert settings.model == "claude-3-5-haiku-latest"

    def test_numeric_overrides(self):
        settings = ProviderSettings.from_env({
            "TICKERCHAT_TEMPERATURE": "0.2",
            "TICKERCHAT_MAX_TOKENS": "256",
            "TICKERCHAT_RESPONSE_TIMEOUT": "30",
        })

        assert settings.temperature == 0.2
        assert settings.max_tokens == 256
        assert settings.response_timeout == 30.0

    def test_unknown_provider(self):
        with pytest.raises(ValidationError):
            ProviderSettings.from_env({"LLM_PROVIDER": "gemini"})

    def test_temperature_bounds(self):
        with pytest.raises(ValidationError):
            ProviderSettings(temperature=3.0)

    @pytest.mark.parametrize("provider,key,status", [
        ("openai", None, CredentialStatus.MISSING),
        ("openai", "", CredentialStatus.MISSING),
        ("openai", "abc123", CredentialStatus.MALFORMED),
        ("openai", "sk-abc", CredentialStatus.PRESENT),
        ("deepseek", "sk-abc", CredentialStatus.PRESENT),
        ("anthropic", "sk-abc", CredentialStatus.MALFORMED),
        ("anthropic", "sk-ant-abc", CredentialStatus.PRESENT),
    ])
    def test_credential_status(self, provider, key, status):
        settings = ProviderSettings(provider=provider, api_key=key)
        assert settings.credential_status == status

    def test_masked_key(self):
        settings = ProviderSettings(api_key="sk-1234567890abcdef")
        assert settings.masked_key == "sk-1234567..."
        assert ProviderSettings().masked_key is None


class TestConfigServices:

    def test_environment_service(self):
        assert EnvironmentConfigService(ProviderSettings(api_key="sk-abc")).is_configured()
        assert not EnvironmentConfigService(ProviderSettings()).is_configured()
        assert not EnvironmentConfigService(ProviderSettings(api_key="bogus")).is_configured()

    def test_static_service(self):
        service = StaticConfigService(False)
        assert not service.is_configured()
        service.configured = True
        assert service.is_configured()

    def test_create_provider(self):
        assert isinstance(create_provider(ProviderSettings(api_key="sk-abc")), OpenAIProvider)
        assert isinstance(
            create_provider(ProviderSettings(provider="anthropic", api_key="sk-ant-abc")),
            AnthropicProvider,
        )

    def test_create_provider_without_key(self):
        with pytest.raises(TypeError, match="OPENAI_API_KEY"):
            create_provider(ProviderSettings())


class TestSessionFromSettings:

    @pytest.mark.asyncio
    async def test_missing_key_gives_advisory_session(self):
        session = create_session_from_settings("AAPL", ProviderSettings())
        snap = session.snapshot()

        assert snap.configured is False
        assert snap.availability == Availability.UNCONFIGURED
        assert len(snap.transcript) == 1

        session.set_input("hello")
        assert await session.submit() == SubmitOutcome.REJECTED

    @pytest.mark.asyncio
    async def test_configured_session_uses_settings_model(self):
        settings = ProviderSettings(api_key="sk-abc", model="gpt-4o", response_timeout=5)
        session = create_session_from_settings("AAPL", settings)

        assert session.snapshot().configured is True
        assert session.model == "gpt-4o"
        await session.close()
