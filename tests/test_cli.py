"""Tests for the click command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from bayes_spam_filter.cli import main

TINY = ["--word-set-size", "2", "--offset", "0.01"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestEvaluateCommand:
    def test_rich_output(self, runner, train_file, test_file) -> None:
        result = runner.invoke(main, ["evaluate", *TINY, str(train_file), str(test_file)])
        assert result.exit_code == 0, result.output
        assert "Confusion Matrix" in result.output
        assert "100.00%" in result.output

    def test_save_json(self, runner, train_file, test_file, tmp_path) -> None:
        out = tmp_path / "report.json"
        result = runner.invoke(
            main,
            ["evaluate", *TINY, "--output", "json", "--save", str(out),
             str(train_file), str(test_file)],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["training"]["total"] == 8
        assert data["test"]["total"] == 4
        assert data["accuracy_percent"] == 100.0

    def test_missing_file_exits_1(self, runner, train_file, tmp_path) -> None:
        result = runner.invoke(
            main, ["evaluate", *TINY, str(train_file), str(tmp_path / "missing.data")]
        )
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_malformed_line_exits_1(self, runner, write_corpus, test_file) -> None:
        train = write_corpus("bad.data", ["1,0,0", "oops", "0,1,1"])
        result = runner.invoke(main, ["evaluate", *TINY, str(train), str(test_file)])
        assert result.exit_code == 1
        assert "Malformed record" in result.output

    def test_skip_malformed_flag(self, runner, write_corpus, test_file, tmp_path) -> None:
        train = write_corpus("bad.data", ["1,0,0", "", "oops", "0,1,1"])
        out = tmp_path / "report.json"
        result = runner.invoke(
            main,
            ["evaluate", *TINY, "--skip-malformed", "--output", "json", "--save", str(out),
             str(train), str(test_file)],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["training"]["skipped"] == 1
        assert data["training"]["blank"] == 1
        assert data["test"]["blank"] == 0

    def test_undecodable_line_exits_1(self, runner, tmp_path, test_file) -> None:
        train = tmp_path / "latin1.data"
        train.write_bytes(b"1,0,0\n0,1,1\n\xff\xfe,0,0\n")
        result = runner.invoke(main, ["evaluate", *TINY, str(train), str(test_file)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "UTF-8" in result.output

    def test_undecodable_line_skipped(self, runner, tmp_path, test_file) -> None:
        train = tmp_path / "latin1.data"
        train.write_bytes(b"1,0,0\n0,1,1\n\xff\xfe,0,0\n")
        out = tmp_path / "report.json"
        result = runner.invoke(
            main,
            ["evaluate", *TINY, "--skip-malformed", "--output", "json", "--save", str(out),
             str(train), str(test_file)],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["training"]["total"] == 2
        assert data["training"]["skipped"] == 1

    def test_overflowing_frequencies_exit_1(self, runner, write_corpus, test_file) -> None:
        train = write_corpus("huge.data", ["1e308,0,0", "1e308,0,0", "0,1,1"])
        result = runner.invoke(main, ["evaluate", *TINY, str(train), str(test_file)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "overflow" in result.output

    def test_invalid_offset_rejected(self, runner, train_file, test_file) -> None:
        result = runner.invoke(
            main,
            ["evaluate", "--word-set-size", "2", "--offset", "0", str(train_file), str(test_file)],
        )
        assert result.exit_code == 2
        assert "offset" in result.output

    def test_env_var_configuration(self, runner, train_file, test_file, tmp_path) -> None:
        out = tmp_path / "report.json"
        result = runner.invoke(
            main,
            ["evaluate", "--output", "json", "--save", str(out), str(train_file), str(test_file)],
            env={"BAYES_SPAM_WORD_SET_SIZE": "2", "BAYES_SPAM_OFFSET": "0.01"},
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["config"]["word_set_size"] == 2


class TestFeaturesCommand:
    def test_spam_features(self, runner, train_file, tmp_path) -> None:
        result = runner.invoke(
            main, ["features", *TINY, "--label", "spam", "--top", "2", str(train_file)]
        )
        assert result.exit_code == 0, result.output
        assert "Most informative words" in result.output

    def test_tie_option_not_accepted(self, runner, train_file) -> None:
        result = runner.invoke(main, ["features", *TINY, "--tie", "spam", str(train_file)])
        assert result.exit_code == 2
        assert "--tie" in result.output

    def test_undecodable_line_exits_1(self, runner, tmp_path) -> None:
        train = tmp_path / "latin1.data"
        train.write_bytes(b"1,0,0\n\xe9,1,1\n0,1,1\n")
        result = runner.invoke(main, ["features", *TINY, str(train)])
        assert result.exit_code == 1
        assert "UTF-8" in result.output

    def test_degenerate_training_exits_1(self, runner, write_corpus) -> None:
        train = write_corpus("ham_only.data", ["0,1,1", "0,2,1"])
        result = runner.invoke(main, ["features", *TINY, str(train)])
        assert result.exit_code == 1
        assert "spam" in result.output
