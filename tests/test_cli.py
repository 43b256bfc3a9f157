import pytest

from earth_geo import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


def test_offline_known_place(capsys):
    assert cli.main(["--offline", "Berlin"]) == 0

    assert "Earth: Moving to Berlin : " in capsys.readouterr().out


def test_offline_multi_word_place(capsys):
    assert cli.main(["--offline", "new", "york"]) == 0


def test_offline_unknown_place(capsys):
    assert cli.main(["--offline", "Nowhereville"]) == 1

    assert "Unknown place: Nowhereville" in capsys.readouterr().out


def test_coordinates(capsys):
    assert cli.main(["--offline", "48.8566,", "2.3522"]) == 0

    assert "Earth: Moving to " in capsys.readouterr().out


def test_invalid_coordinates(capsys):
    assert cli.main(["--offline", "95", "10"]) == 1

    assert "Invalid lat/lon" in capsys.readouterr().out


def test_private_address_is_skipped(capsys):
    assert cli.main(["--offline", "--ip", "192.168.1.5"]) == 0

    assert "Nothing to look up for 192.168.1.5" in capsys.readouterr().out


def test_old_client_is_vetoed(capsys):
    assert cli.main(["--offline", "--protocol", "100", "Berlin"]) == 1

    assert "does not support 32bit worlds" in capsys.readouterr().out


def test_missing_query_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 2
