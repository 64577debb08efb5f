"""
Tests for the Typer CLI.
"""

from typer.testing import CliRunner

from barberslots import __version__
from barberslots.cli import app as cli_app

runner = CliRunner()


def _write_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "timezone: Europe/Berlin\n"
        "barbers:\n"
        "  - name: alex\n"
        "    barber_id: barber-1\n"
        "  - name: sam\n"
        "    barber_id: barber-2\n",
        encoding="utf-8",
    )
    return config_path


class FakeSessionStore:
    """Records what the CLI stores."""

    instances = []

    def __init__(self):
        self.token = None
        self.cleared = False
        self.backend = "keyring"
        FakeSessionStore.instances.append(self)

    def set_token(self, token):
        self.token = token

    def get_token(self):
        return self.token

    def clear(self):
        self.cleared = True


def test_slots_with_mock_data(tmp_path):
    """Slots for a past date are listed but none is available."""
    result = runner.invoke(
        cli_app.app,
        ["slots", "alex", "--mock", "--date", "2024-11-25", "--duration", "60", "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "barber-1" in result.output
    assert "09:00 – 10:00 (booked)" in result.output
    assert "17:00 – 18:00 (booked)" in result.output
    assert "No availability" in result.output


def test_slots_mock_without_config_uses_defaults(tmp_path):
    """Mock mode works without a config file."""
    result = runner.invoke(
        cli_app.app,
        ["slots", "barber-3", "--mock", "--date", "2024-11-25", "--config", str(tmp_path / "missing.yaml")],
    )

    assert result.exit_code == 0, result.output
    assert "19:00 – 20:00" in result.output


def test_slots_default_hours(tmp_path):
    """The default-hours flag ignores the barber's schedule."""
    result = runner.invoke(
        cli_app.app,
        ["slots", "sam", "--mock", "--default-hours", "--date", "2024-11-25", "-d", "30",
         "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "19:30 – 20:00" in result.output


def test_slots_invalid_date(tmp_path):
    """An unparseable date exits with an error."""
    result = runner.invoke(
        cli_app.app,
        ["slots", "alex", "--mock", "--date", "25.11.2024", "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1


def test_slots_invalid_duration(tmp_path):
    """A non-positive duration exits with an error."""
    result = runner.invoke(
        cli_app.app,
        ["slots", "alex", "--mock", "--date", "2024-11-25", "--duration", "0",
         "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "Error" in result.output


def test_slots_missing_config_without_mock(tmp_path):
    """Talking to the API requires a config file."""
    result = runner.invoke(cli_app.app, ["slots", "alex", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_list_barbers(tmp_path):
    """Configured barbers are listed."""
    result = runner.invoke(cli_app.app, ["list-barbers", "--config", str(_write_config(tmp_path))])

    assert result.exit_code == 0, result.output
    assert "alex" in result.output
    assert "barber-2" in result.output


def test_list_barbers_from_mock_data(tmp_path):
    """Mock mode lists the barbers of the bundled data with their aliases."""
    result = runner.invoke(cli_app.app, ["list-barbers", "--mock", "--config", str(_write_config(tmp_path))])

    assert result.exit_code == 0, result.output
    assert "barber-1" in result.output
    assert "barber-2" in result.output
    assert "barber-3" in result.output
    assert "alex" in result.output


def test_list_barbers_mock_without_config(tmp_path):
    """Mock listing works without a config file."""
    result = runner.invoke(cli_app.app, ["list-barbers", "--mock", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 0, result.output
    assert "barber-3" in result.output


class UnusableSessionStore:
    """Fails if the CLI touches stored credentials."""

    def __init__(self):
        raise AssertionError("session store must not be used")


class UnusableGraphQLClient:
    """Fails if the CLI builds an API client."""

    def __init__(self, *args, **kwargs):
        raise AssertionError("GraphQL client must not be built")


def test_slots_default_hours_does_not_contact_api(tmp_path, monkeypatch):
    """Default hours need neither credentials nor the API."""
    monkeypatch.setattr(cli_app, "SessionStore", UnusableSessionStore)
    monkeypatch.setattr(cli_app, "GraphQLScheduleClient", UnusableGraphQLClient)

    result = runner.invoke(
        cli_app.app,
        ["slots", "alex", "--default-hours", "--date", "2024-11-25", "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "09:00 – 10:00" in result.output


def test_login_and_logout(monkeypatch):
    """Login stores the token and logout clears the session."""
    FakeSessionStore.instances = []
    monkeypatch.setattr(cli_app, "SessionStore", FakeSessionStore)

    login = runner.invoke(cli_app.app, ["login", "--token", "abc"])
    logout = runner.invoke(cli_app.app, ["logout"])

    assert login.exit_code == 0, login.output
    assert logout.exit_code == 0, logout.output
    assert FakeSessionStore.instances[0].token == "abc"
    assert FakeSessionStore.instances[1].cleared


def test_version():
    """The version command prints the package version."""
    result = runner.invoke(cli_app.app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
