from __future__ import annotations

import pytest
from pydantic import ValidationError

from contract_compare.config.settings import Settings


def test_settings_builds_client_kwargs(tmp_path):
    settings = Settings(
        extraction_base_url="https://extract.test/api/",
        extraction_api_key="secret",
        max_file_size_mb=2,
        accepted_suffixes="PDF, .xlsx",
        log_dir=tmp_path / "logs",
        output_dir=tmp_path / "reports",
    )

    kwargs = settings.client_kwargs()
    assert kwargs["base_url"] == "https://extract.test/api"
    assert kwargs["max_file_size"] == 2 * 1024 * 1024
    assert kwargs["accepted_suffixes"] == (".pdf", ".xlsx")
    assert kwargs["headers"] == {"Authorization": "Bearer secret"}
    settings.ensure_directories()
    assert settings.output_dir.exists()
    assert settings.log_dir.exists()


def test_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPARE_EXTRACTION_MAX_RETRIES", "5")
    monkeypatch.setenv("COMPARE_ACCEPTED_SUFFIXES", ".pdf,.xls")

    settings = Settings(_env_file=None)

    assert settings.extraction_max_retries == 5
    assert settings.accepted_suffixes == (".pdf", ".xls")
    assert "headers" not in settings.client_kwargs()


def test_settings_rejects_invalid_limits() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_file_size_mb=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, extraction_max_retries=-1)
