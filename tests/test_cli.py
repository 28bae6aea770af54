"""Tests for the html2md command line."""

import io
import json
import tempfile
from pathlib import Path

import pytest

from html_to_md.cli import main


def _write(tmpdir: str, name: str, body: str) -> Path:
    path = Path(tmpdir) / name
    path.write_text(body, encoding="utf-8")
    return path


class TestMain:
    def test_converts_file(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "page.html", "<h1>Title</h1><p>Body</p>")
            main(["--no-config", str(path)])
        assert capsys.readouterr().out == "# Title\n\nBody\n"

    def test_reads_stdin(self, capsys, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO(b"<p>from stdin</p>"), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", stdin)
        main(["--no-config"])
        assert capsys.readouterr().out == "from stdin\n"

    def test_base_url_and_width_flags(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "page.html", '<p>aaa bbb <a href="p">c</a></p>')
            main(["--no-config", "--base-url", "https://e.com", "--width", "7", str(path)])
        assert capsys.readouterr().out == "aaa bbb\n[c](https://e.com/p)\n"

    def test_config_file_is_applied(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = _write(tmpdir, "conf.toml", '[convert]\nbase_url = "https://e.com"\n')
            path = _write(tmpdir, "page.html", '<a href="p">c</a>')
            main(["--config", str(config), str(path)])
        assert capsys.readouterr().out == "[c](https://e.com/p)\n"

    def test_flag_overrides_config(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = _write(tmpdir, "conf.toml", '[convert]\nbase_url = "https://e.com"\n')
            path = _write(tmpdir, "page.html", '<a href="p">c</a>')
            main(["--config", str(config), "--base-url", "https://o.org", str(path)])
        assert capsys.readouterr().out == "[c](https://o.org/p)\n"

    def test_output_dir_writes_files(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            first = _write(tmpdir, "one.html", "<p>one</p>")
            second = _write(tmpdir, "two.html", "<p>two</p>")
            listing = _write(tmpdir, "files.txt", f"# inputs\n{second}\n")
            out_dir = Path(tmpdir) / "out"
            main(["--no-config", "--output-dir", str(out_dir), "--from", str(listing), str(first)])

            summary = json.loads(capsys.readouterr().out)
            assert [Path(entry["output"]).name for entry in summary] == ["one.md", "two.md"]
            assert (out_dir / "one.md").read_text(encoding="utf-8") == "one\n"
            assert (out_dir / "two.md").read_text(encoding="utf-8") == "two\n"

    def test_missing_file_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--no-config", "/nonexistent/page.html"])
        assert exc.value.code == 1
        assert "file not found" in capsys.readouterr().err

    def test_bad_width_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--no-config", "--width", "0", "x.html"])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_config_exits(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = _write(tmpdir, "conf.toml", "[convert]\nwidth = -1\n")
            with pytest.raises(SystemExit) as exc:
                main(["--config", str(config), "x.html"])
        assert exc.value.code == 1


class TestJsonMode:
    def test_tool_request(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"html": "<p>x</p>"})))
        with pytest.raises(SystemExit) as exc:
            main(["--json"])
        assert exc.value.code == 0
        assert json.loads(capsys.readouterr().out) == {"text": "x"}

    def test_tool_error(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"width": 3})))
        with pytest.raises(SystemExit) as exc:
            main(["--json"])
        assert exc.value.code == 1
        assert json.loads(capsys.readouterr().out)["isError"] is True

    def test_invalid_json(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("{not json"))
        with pytest.raises(SystemExit) as exc:
            main(["--json"])
        assert exc.value.code == 1
        assert "invalid JSON" in capsys.readouterr().err
