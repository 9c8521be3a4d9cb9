import json

import pytest

from jobcast.cli import main

POSTING = (
    "Backend Engineer at Acme\n"
    "Location: Lagos\n"
    "\n"
    "Requirements: Python and SQL\n"
    "\n"
    "Apply: https://acme.com/careers/1\n"
)


@pytest.fixture
def posting(tmp_path):
    path = tmp_path / "posting.txt"
    path.write_text(POSTING, encoding="utf-8")
    return str(path)


def test_extract(posting, capsys):
    assert main(["extract", posting]) == 0
    fields = json.loads(capsys.readouterr().out)
    assert fields["title"] == "Backend Engineer"
    assert fields["company"] == "Acme"
    assert fields["apply_link"] == "https://acme.com/careers/1"


def test_preview(posting, capsys):
    assert main(["preview", posting]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Backend Engineer at Acme\nLagos")
    assert "https://acme.com/careers/1" in out


def test_concise_preview_for_telegram(posting, capsys):
    assert main(["preview", posting, "--concise", "--channel", "telegram"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<b>Backend Engineer at Acme</b>")
    assert "About the role:\nAcme is hiring a Backend Engineer." in out


def test_status(tmp_path, capsys):
    path = tmp_path / "long.txt"
    path.write_text("A" * 300, encoding="utf-8")
    assert main(["status", str(path)]) == 0
    out = capsys.readouterr().out
    assert "300/280 characters" in out
    assert "thread of 2" in out


def test_stats_on_empty_queue(capsys):
    assert main(["stats"]) == 0
    assert "Pending today: 0" in capsys.readouterr().out


def test_missing_file(tmp_path):
    assert main(["extract", str(tmp_path / "nope.txt")]) == 1


def test_unknown_command():
    with pytest.raises(SystemExit):
        main(["bogus"])
