"""Tests for the command-line interface."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from feedmail.cli import load_records, main, parse_args

PLAIN_EML = b"""\
Message-ID: <status-1@facebookmail.com>
Date: Tue, 5 Mar 2024 08:30:00 +0000
Subject: Ken Tanaka updated their status
From: notification@facebookmail.com
Content-Type: text/plain; charset="utf-8"

Facebook
Finally moved into the new apartment downtown.
Like
"""


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run from an empty directory so no local .env is picked up."""
    monkeypatch.chdir(tmp_path)
    yield
    logging.getLogger("feedmail").handlers.clear()


def read_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.strip()]


class TestParseArgs:
    """Tests for parse_args function."""

    def test_extract(self) -> None:
        """Test extract arguments."""
        args = parse_args(["-v", "extract", "a.eml", "b.json", "--include-absent"])

        assert args.command == "extract"
        assert args.paths == [Path("a.eml"), Path("b.json")]
        assert args.include_absent is True
        assert args.verbose is True

    def test_command_required(self) -> None:
        """Test a subcommand is mandatory."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestLoadRecords:
    """Tests for load_records function."""

    def test_json_object(self, tmp_path: Path) -> None:
        """Test a single JSON object."""
        path = tmp_path / "one.json"
        path.write_text(json.dumps({"id": "1", "subject": "s", "from": "f", "date": "d"}))

        records = list(load_records(path))

        assert len(records) == 1
        assert records[0].identifier == "1"
        assert records[0].sender == "f"
        assert records[0].timestamp == "d"

    def test_json_list(self, tmp_path: Path) -> None:
        """Test a JSON list of objects."""
        path = tmp_path / "many.json"
        path.write_text(json.dumps([{"identifier": "a"}, {"identifier": "b"}]))

        assert [r.identifier for r in load_records(path)] == ["a", "b"]

    def test_json_non_object(self, tmp_path: Path) -> None:
        """Test list entries must be objects."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(["nope"]))

        with pytest.raises(ValueError, match="expected an email object"):
            list(load_records(path))

    def test_eml(self, tmp_path: Path) -> None:
        """Test any other suffix is read as a message file."""
        path = tmp_path / "status.eml"
        path.write_bytes(PLAIN_EML)

        [record] = list(load_records(path))

        assert record.identifier == "<status-1@facebookmail.com>"


class TestMain:
    """Tests for main function."""

    def test_extract_eml(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test extraction prints one JSON line per post."""
        path = tmp_path / "status.eml"
        path.write_bytes(PLAIN_EML)

        assert main(["extract", str(path)]) == 0

        [line] = read_lines(capsys.readouterr().out)
        assert line["identifier"] == "<status-1@facebookmail.com>"
        assert line["post"]["author"] == "Ken Tanaka"
        assert line["post"]["category"] == "status"
        assert line["post"]["content"] == "Finally moved into the new apartment downtown."
        assert line["post"]["timestamp"] == "2024-03-05T08:30:00+00:00"
        assert line["importance"] == 1.0
        assert line["tags"] == ["Facebook", "Ken Tanaka", "Status"]

    def test_absent_skipped_by_default(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test emails without a post are only printed on request."""
        path = tmp_path / "batch.json"
        path.write_text(json.dumps([{"id": "digest", "subject": "Weekly digest"}]))

        assert main(["extract", str(path)]) == 0
        assert read_lines(capsys.readouterr().out) == []

        assert main(["extract", "--include-absent", str(path)]) == 0
        assert read_lines(capsys.readouterr().out) == [
            {"path": str(path), "identifier": "digest", "post": None}
        ]

    def test_bad_input_continues(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an unreadable file is reported and the rest still processed."""
        good = tmp_path / "status.eml"
        good.write_bytes(PLAIN_EML)
        missing = tmp_path / "missing.eml"

        assert main(["extract", str(missing), str(good)]) == 1

        captured = capsys.readouterr()
        assert "missing.eml" in captured.err
        assert len(read_lines(captured.out)) == 1

    def test_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the effective configuration is printed."""
        assert main(["config"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["max_importance"] == 10
        assert data["category_patterns"][0][0] == "photo"

    def test_invalid_config(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a bad pattern in the environment exits with code 2."""
        monkeypatch.setenv("FEEDMAIL_BOILERPLATE_PATTERNS", '["(unclosed"]')

        assert main(["config"]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_env_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test settings are read from an explicit .env file."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("FEEDMAIL_TAG_SOURCE_LABEL=Social\n")

        assert main(["--env-file", str(env_file), "config"]) == 0
        assert json.loads(capsys.readouterr().out)["tag_source_label"] == "Social"
