"""Shared fixtures for the EduConfig tests"""

from unittest.mock import MagicMock, patch

import pytest

from src.ui import UserInterface

SAMPLE_DER = b"\x30\x82\x01\x0a" + bytes(range(64))


@pytest.fixture(autouse=True)
def no_logging_setup():
    """main() must not attach file handlers while testing"""
    with patch("src.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def interactive_ui() -> MagicMock:
    """Interactive UI that answers Yes to every question"""
    ui = MagicMock(spec=UserInterface)
    ui.silent = False
    ui.ask_yes_no.return_value = True
    return ui


@pytest.fixture
def cert_file(tmp_path):
    path = tmp_path / "ca_cert.der"
    path.write_bytes(SAMPLE_DER)
    return path


@pytest.fixture(autouse=True)
def no_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore EDUCONFIG_* variables of the machine running the tests"""
    monkeypatch.setattr("src.main.DEBUG_MODE", False)
    monkeypatch.setattr("src.main.CA_CERT_OVERRIDE", None)
    monkeypatch.setattr("src.main.PROFILE_XML_PATH", None)
    monkeypatch.setattr("src.main.TOOL_TIMEOUT", None)
