"""
Tests for the corpus evaluator.

Tests cover:
- Accuracy and mismatch capture
- Undetermined comments scored as neutral
- Per-row failure isolation
- Empty corpora
- Report formatting and the command line entry point
"""

import json

import pytest

from comment_sentiment.data_loader import EmptyCorpusError
from comment_sentiment.evaluate import (
    EvaluationReport,
    Mismatch,
    compute_class_metrics,
    evaluate,
    format_report,
    main,
)
from comment_sentiment.scorer import SentimentResult, detect_sentiment
from comment_sentiment.utils import load_config, save_config


class TestEvaluate:
    """Tests for the evaluation pass."""

    def test_small_corpus(self, labeled_rows):
        """The three-row corpus is scored completely."""
        report = evaluate(labeled_rows)

        assert report.total == 3
        assert report.correct == 3
        assert report.accuracy == pytest.approx(100.0)
        assert report.mismatches == []

    def test_mismatch_captured(self):
        """Wrong predictions keep label, prediction and confidence."""
        report = evaluate([("I love this!", "negative"), ("bad", "negative")])

        assert report.total == 2
        assert report.correct == 1
        assert len(report.mismatches) == 1

        mismatch = report.mismatches[0]
        assert mismatch.index == 0
        assert mismatch.expected == "negative"
        assert mismatch.predicted == "positive"
        assert mismatch.confidence == pytest.approx(detect_sentiment("I love this!").confidence)

    def test_accuracy_percentage(self, labeled_rows):
        rows = labeled_rows[:2] + [("It is a table.", "positive")]
        report = evaluate(rows)

        assert report.accuracy == pytest.approx(2 / 3 * 100)
        assert round(report.accuracy, 2) == 66.67

    def test_undetermined_counts_as_neutral(self):
        """No result is a neutral guess with zero confidence."""
        report = evaluate([("!!!", "neutral"), ("???", "positive")])

        assert report.total == 2
        assert report.correct == 1
        assert report.mismatches[0].predicted == "neutral"
        assert report.mismatches[0].confidence == 0.0

    def test_labels_and_comments_normalized(self):
        report = evaluate([("  good  ", " POSITIVE ")])
        assert report.correct == 1

    def test_mismatch_limit_and_order(self):
        """Only the first ten mismatches are kept, in row order."""
        rows = [(f"good {i}", "negative") for i in range(15)]
        report = evaluate(rows)

        assert report.total == 15
        assert len(report.mismatches) == 10
        assert [m.index for m in report.mismatches] == list(range(10))

    def test_comment_truncated(self):
        report = evaluate([("good " * 100, "negative")])
        assert len(report.mismatches[0].comment) == 200

    def test_scoring_failure_isolated(self):
        """A failing row is skipped and counted, the rest still score."""
        def flaky(text):
            if text == "boom":
                raise RuntimeError("scorer exploded")
            return detect_sentiment(text)

        report = evaluate([("good", "positive"), ("boom", "neutral"), ("bad", "negative")], scorer=flaky)

        assert report.total == 2
        assert report.correct == 2
        assert report.errors == 1

    def test_malformed_row_isolated(self):
        """A row with a non-string comment does not abort the batch."""
        report = evaluate([(None, "neutral"), ("good", "positive")])

        assert report.total == 1
        assert report.errors == 1

    def test_empty_rows_raise(self):
        with pytest.raises(EmptyCorpusError):
            evaluate([])

    def test_all_rows_failing_raise(self):
        def broken(text):
            raise ValueError("no")

        with pytest.raises(EmptyCorpusError):
            evaluate([("good", "positive")], scorer=broken)

    def test_custom_scorer(self):
        report = evaluate(
            [("anything", "negative")],
            scorer=lambda text: SentimentResult("negative", 0.7),
        )
        assert report.correct == 1


class TestReportFormatting:
    """Tests for report text output."""

    def test_summary_line(self, labeled_rows):
        """The summary line is emitted even with no mismatches."""
        text = format_report(evaluate(labeled_rows))

        assert text == "Evaluated 3 rows. Accuracy: 100.00% (3/3)"

    def test_mismatch_blocks(self):
        report = evaluate([("I love this!", "negative"), ("!!!", "positive")])
        lines = format_report(report).split("\n")

        assert lines[0] == "Evaluated 2 rows. Accuracy: 0.00% (0/2)"
        assert "Sample mismatches:" in lines
        assert "1) label=negative pred=positive conf=80.2%" in lines
        assert "I love this!" in lines
        assert "2) label=positive pred=neutral conf=0.0%" in lines

    def test_empty_report_accuracy_raises(self):
        with pytest.raises(EmptyCorpusError):
            EvaluationReport().accuracy

    def test_to_dict(self):
        report = EvaluationReport(
            total=2,
            correct=1,
            mismatches=[Mismatch(1, "bad", "positive", "negative", 0.8)],
        )
        data = report.to_dict()

        assert data["accuracy"] == 50.0
        assert data["mismatches"][0]["pred"] == "negative"


class TestClassMetrics:
    """Tests for per-class metrics."""

    def test_confusion_matrix(self, labeled_rows):
        metrics = compute_class_metrics(evaluate(labeled_rows))

        assert metrics["labels"] == ["positive", "neutral", "negative"]
        assert metrics["confusion_matrix"] == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
        assert metrics["classification_report"]["positive"]["recall"] == pytest.approx(1.0)

    def test_unknown_labels_added(self):
        """Labels outside the sentiment set get their own rows."""
        metrics = compute_class_metrics(evaluate([("good", "1"), ("bad", "0")]))

        assert metrics["labels"] == ["positive", "neutral", "negative", "0", "1"]
        assert metrics["confusion_matrix"][3] == [0, 0, 1, 0, 0]
        assert metrics["confusion_matrix"][4] == [1, 0, 0, 0, 0]

    def test_prediction_counts(self):
        metrics = compute_class_metrics(evaluate([("good", "negative"), ("great", "positive")]))
        assert metrics["prediction_counts"] == {"positive": 2}


class TestMain:
    """Tests for the command line entry point."""

    def test_main_prints_report(self, corpus_file, capsys):
        assert main(["--data-path", str(corpus_file)]) == 0

        out = capsys.readouterr().out
        assert "Evaluated 3 rows. Accuracy: 100.00% (3/3)" in out

    def test_main_header_only_fails(self, header_only_file, capsys):
        """A corpus with no data rows is a fatal error, not NaN%."""
        assert main(["--data-path", str(header_only_file)]) == 1

        out = capsys.readouterr().out
        assert "No data found in CSV" in out
        assert "NaN" not in out
        assert "Evaluated" not in out

    def test_main_missing_file_fails(self, tmp_path):
        assert main(["--data-path", str(tmp_path / "missing.csv")]) == 1

    def test_main_without_corpus_fails(self):
        assert main([]) == 2

    def test_main_writes_metrics(self, corpus_file, tmp_path):
        output = tmp_path / "out" / "metrics.json"
        assert main(["--data-path", str(corpus_file), "--output", str(output), "--verbose"]) == 0

        metrics = json.loads(output.read_text(encoding="utf-8"))
        assert metrics["total"] == 3
        assert metrics["accuracy"] == 100.0
        assert metrics["confusion_matrix"][0][0] == 1

        run_config = load_config(str(output.with_name("metrics.config.yaml")))
        assert run_config["data"]["corpus_path"] == str(corpus_file)
        assert run_config["evaluation"]["max_mismatches"] == 10

    @pytest.mark.parametrize("extra_args", [[], ["--verbose"]])
    def test_main_unknown_labels(self, tmp_path, capsys, extra_args):
        """Numeric labels count as mismatches and do not abort the run."""
        corpus = tmp_path / "numeric.csv"
        corpus.write_text("Comment,Label\ngood,1\nbad,0\n", encoding="utf-8")

        assert main(["--data-path", str(corpus)] + extra_args) == 0

        out = capsys.readouterr().out
        assert "Evaluated 2 rows. Accuracy: 0.00% (0/2)" in out
        assert "1) label=1 pred=positive" in out
        assert "2) label=0 pred=negative" in out

    def test_main_reads_config(self, tmp_path, capsys):
        corpus = tmp_path / "corpus.csv"
        corpus.write_text(
            "Comment,Label\n" + "".join(f"good {i},negative\n" for i in range(5)),
            encoding="utf-8",
        )
        config_path = tmp_path / "eval.yaml"
        save_config(
            {
                "data": {"corpus_path": str(corpus)},
                "evaluation": {"max_mismatches": 2, "excerpt_length": 4},
                "logging": {"level": "WARNING"},
            },
            str(config_path),
        )

        assert main(["--config", str(config_path)]) == 0

        out = capsys.readouterr().out
        assert "Evaluated 5 rows. Accuracy: 0.00% (0/5)" in out
        assert "2) label=negative" in out
        assert "3) label=negative" not in out
