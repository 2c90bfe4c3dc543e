"""
CLI tests: argument handling, report output and exit codes.
"""
import os
import sys
import json
from unittest import mock
import pytest
from find_dupes import cli
from find_dupes.cli import CLIApplication
from find_dupes.core.models import DEFAULT_MIN_SIZE


def run_cli(argv):
    with mock.patch.object(sys, 'argv', ['find-dupes'] + argv):
        CLIApplication().run()


class TestArgumentParsing:

    def test_defaults(self):
        args = CLIApplication.parse_args(["/data"])
        assert args.path == "/data"
        assert args.min_size == str(DEFAULT_MIN_SIZE)
        assert args.report_format == "html"
        assert args.output is None
        assert not args.verbose and not args.quiet

    def test_path_is_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args([])
        assert exc_info.value.code == 2

    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["/data", "--format", "xml"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "find-dupes" in capsys.readouterr().out


class TestReports:

    def test_default_html_report(self, test_files, capsys):
        run_cli([str(test_files["dup1_a"].parent), "--min-size", "0"])
        out = capsys.readouterr().out

        assert out.startswith("<!doctype html>")
        assert out.count("<tr><td>") == 2
        assert str(test_files["dup2_a"]) in out
        assert str(test_files["unique1"]) not in out

    def test_json_report(self, test_files, capsys):
        run_cli([str(test_files["dup1_a"].parent), "-m", "1025", "--format", "json"])
        payload = json.loads(capsys.readouterr().out)

        assert len(payload) == 1
        assert sorted(f["paths"][0] for f in payload[0]) == sorted(
            [str(test_files["dup2_a"]), str(test_files["dup2_b"])])

    def test_human_readable_min_size(self, test_files, capsys):
        """1k = 1000 bytes, so both 1024- and 2048-byte groups survive."""
        run_cli([str(test_files["dup1_a"].parent), "-m", "1k", "--format", "text"])
        assert "Found 2 duplicate groups" in capsys.readouterr().out

    def test_default_threshold_hides_small_files(self, test_files, capsys):
        run_cli([str(test_files["dup1_a"].parent), "--format", "text"])
        assert "No duplicate files found." in capsys.readouterr().out

    def test_output_file(self, test_files, temp_dir, capsys):
        report = temp_dir / "out" / "report.html"
        report.parent.mkdir()
        run_cli([str(test_files["dup1_a"].parent), "-m", "0", "-o", str(report)])

        assert capsys.readouterr().out == ""
        assert report.read_text(encoding="utf-8").count("<tr><td>") == 2

    @pytest.mark.skipif(sys.getfilesystemencoding().lower() not in ("utf-8", "utf8"),
                        reason="needs a UTF-8 filesystem encoding")
    def test_undecodable_file_name_in_report(self, temp_dir, capsys):
        """A duplicate named with invalid UTF-8 bytes still produces a complete report."""
        data = b"same bytes" * 10
        try:
            with open(os.path.join(os.fsencode(temp_dir), b"bad\xff.bin"), "wb") as f:
                f.write(data)
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")
        (temp_dir / "good.bin").write_bytes(data)
        report = temp_dir / "report.html"

        run_cli([str(temp_dir), "-m", "0", "-o", str(report)])

        content = report.read_text(encoding="utf-8")
        assert "bad\ufffd.bin" in content
        assert str(temp_dir / "good.bin") in content
        assert content.rstrip().endswith("</html>")

    def test_verbose_prints_statistics_to_stderr(self, test_files, capsys):
        run_cli([str(test_files["dup1_a"].parent), "-m", "0", "-v", "--format", "json"])
        captured = capsys.readouterr()

        json.loads(captured.out)  # stdout stays a clean report
        assert "Scan Statistics:" in captured.err
        assert "Completed in" in captured.err


class TestErrors:

    def test_missing_root_exits_with_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(temp_dir / "missing")])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Root path does not exist")

    def test_invalid_min_size_exits_with_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(temp_dir), "--min-size", "ten"])

        assert exc_info.value.code == 1
        assert "Invalid size format" in capsys.readouterr().err

    def test_negative_min_size_exits_with_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(temp_dir), "--min-size=-1"])

        assert exc_info.value.code == 1
        assert "Negative size not allowed" in capsys.readouterr().err

    def test_unwritable_output_exits_with_error(self, test_files, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(test_files["dup1_a"].parent), "-o", str(temp_dir / "no_dir" / "r.html")])

        assert exc_info.value.code == 1
        assert "Cannot write report" in capsys.readouterr().err

    def test_main_handles_keyboard_interrupt(self, capsys):
        with mock.patch.object(CLIApplication, 'run', side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 130

    def test_main_reports_unexpected_errors(self, capsys, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, 'run', side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 1
        assert "Unexpected error: boom" in capsys.readouterr().err
