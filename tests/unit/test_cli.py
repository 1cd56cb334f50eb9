"""Unit tests for the CLI commands."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from handy_cloud.cli.main import cli
from handy_cloud.features.llm.errors import LlmApiError, MissingCredentialError
from handy_cloud.features.transcription.wav import encode_wav


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each command with a known environment and no .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HANDY_POST_PROCESS_PROVIDER", "openai")
    monkeypatch.setenv("HANDY_POST_PROCESS_API_KEY", "sk-post")
    monkeypatch.setenv("HANDY_POST_PROCESS_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.delenv("HANDY_POST_PROCESS_BASE_URL", raising=False)
    monkeypatch.delenv("HANDY_TRANSCRIPTION_SERVICE", raising=False)


class TestChatCommand:
    """Tests for the chat command."""

    @patch("handy_cloud.cli.main.send_chat_completion", new_callable=AsyncMock)
    def test_prints_completion(self, mock_chat: AsyncMock) -> None:
        """Completion text is echoed."""
        mock_chat.return_value = "Polished text."

        result = CliRunner().invoke(cli, ["chat", "rough text"])

        assert result.exit_code == 0
        assert "Polished text." in result.output
        provider, api_key, model, prompt = mock_chat.call_args.args
        assert provider.id == "openai"
        assert api_key == "sk-post"
        assert model == "gpt-4o-mini"
        assert prompt == "rough text"

    @patch("handy_cloud.cli.main.send_chat_completion", new_callable=AsyncMock)
    def test_no_content_notice(self, mock_chat: AsyncMock) -> None:
        """A None completion is reported, not treated as failure."""
        mock_chat.return_value = None

        result = CliRunner().invoke(cli, ["chat", "hello"])

        assert result.exit_code == 0
        assert "no content" in result.output

    @patch("handy_cloud.cli.main.send_chat_completion", new_callable=AsyncMock)
    def test_api_error_exits_nonzero(self, mock_chat: AsyncMock) -> None:
        """API failures print the message and exit 1."""
        mock_chat.side_effect = LlmApiError(
            "API request failed with status 401 Unauthorized: bad key",
            status_code=401,
        )

        result = CliRunner().invoke(cli, ["chat", "hello"])

        assert result.exit_code == 1
        assert "401" in result.output

    def test_unknown_provider(self) -> None:
        """Unknown provider ids fail cleanly."""
        result = CliRunner().invoke(cli, ["chat", "hello", "--provider", "nope"])

        assert result.exit_code == 1
        assert "Unknown provider: nope" in result.output


class TestModelsCommand:
    """Tests for the models command."""

    @patch("handy_cloud.cli.main.fetch_models", new_callable=AsyncMock)
    def test_lists_models(self, mock_fetch: AsyncMock) -> None:
        """One model id per line."""
        mock_fetch.return_value = ["gpt-4o", "gpt-4o-mini"]

        result = CliRunner().invoke(cli, ["models", "--provider", "groq"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["gpt-4o", "gpt-4o-mini"]
        assert mock_fetch.call_args.args[0].id == "groq"


class TestTranscribeCommand:
    """Tests for the transcribe command."""

    @patch("handy_cloud.cli.main.transcribe_cloud", new_callable=AsyncMock)
    def test_transcribes_wav_file(self, mock_transcribe: AsyncMock, tmp_path: Path) -> None:
        """Decoded samples are uploaded with the configured credentials."""
        mock_transcribe.return_value = "hello there"
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(encode_wav([0.0, 0.25, -0.25]))

        result = CliRunner().invoke(cli, ["transcribe", str(wav_path)])

        assert result.exit_code == 0
        assert "hello there" in result.output
        api_key, base_url, model, samples = mock_transcribe.call_args.args
        assert api_key == "sk-openai"
        assert base_url == "https://api.openai.com/v1"
        assert model == "whisper-1"
        assert len(samples) == 3

    @patch("handy_cloud.cli.main.transcribe_cloud", new_callable=AsyncMock)
    def test_missing_key_reported(self, mock_transcribe: AsyncMock, tmp_path: Path) -> None:
        """Credential errors exit 1 with the message."""
        mock_transcribe.side_effect = MissingCredentialError("API key is missing")
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(encode_wav([0.0]))

        result = CliRunner().invoke(cli, ["transcribe", str(wav_path), "--service", "nova"])

        assert result.exit_code == 1
        assert "API key is missing" in result.output

    def test_wrong_sample_rate_rejected(self, tmp_path: Path) -> None:
        """Files not at 16 kHz are refused."""
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(encode_wav([0.0], sample_rate=44100))

        result = CliRunner().invoke(cli, ["transcribe", str(wav_path)])

        assert result.exit_code == 1
        assert "44100" in result.output

    def test_truncated_wav_reported(self, tmp_path: Path) -> None:
        """A WAV cut mid-sample is reported without a traceback."""
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(encode_wav([0.1, 0.2, 0.3])[:-1])

        result = CliRunner().invoke(cli, ["transcribe", str(wav_path)])

        assert result.exit_code == 1
        assert "Truncated WAV data" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_unreadable_file_reported(self, tmp_path: Path) -> None:
        """OS errors while reading the file are reported without a traceback."""
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(encode_wav([0.0]))

        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            result = CliRunner().invoke(cli, ["transcribe", str(wav_path)])

        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert "denied" in result.output


class TestConfiguration:
    """Settings errors surface as CLI errors."""

    def test_invalid_setting_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A setting that fails validation exits 1 with a message."""
        monkeypatch.setenv("HANDY_HTTP_TIMEOUT", "0")

        result = CliRunner().invoke(cli, ["models"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert isinstance(result.exception, SystemExit)
