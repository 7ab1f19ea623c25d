import json

from click.testing import CliRunner

from photoalbum.cli import cli
from photoalbum.db import empty_document


def test_init_db(tmp_path):
    path = tmp_path / "db.json"
    runner = CliRunner()

    r = runner.invoke(cli, ["--db", str(path), "init-db"])
    assert r.exit_code == 0
    assert json.loads(path.read_text()) == empty_document()

    r = runner.invoke(cli, ["--db", str(path), "init-db"])
    assert "already exists" in r.output


def test_check_reports_and_repairs(tmp_path):
    path = tmp_path / "db.json"
    doc = empty_document()
    doc["photos"] = [{"id": 1, "albumIds": []}]
    doc["albums"] = [{"id": 1, "photoIds": [1], "coverPhoto": 1, "shareId": "a-1"}]
    path.write_text(json.dumps(doc))
    runner = CliRunner()

    r = runner.invoke(cli, ["--db", str(path), "check"])
    assert r.exit_code == 1
    assert "album 1 lists photo 1" in r.output

    r = runner.invoke(cli, ["--db", str(path), "check", "--repair"])
    assert r.exit_code == 0
    assert "repaired 1" in r.output
    assert json.loads(path.read_text())["photos"][0]["albumIds"] == [1]

    r = runner.invoke(cli, ["--db", str(path), "check"])
    assert r.exit_code == 0
    assert "ok" in r.output


def test_check_missing_store(tmp_path):
    r = CliRunner().invoke(cli, ["--db", str(tmp_path / "missing.json"), "check"])
    assert r.exit_code != 0
    assert "unreadable" in r.output
