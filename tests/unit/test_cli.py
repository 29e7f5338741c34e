"""Tests for the histocr command-line interface."""

import json

import pytest

from histocr.cli import main


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestEnhanceCommand:
    """Tests for `histocr enhance`."""

    def test_report(self, tmp_path, capsys):
        source = write(tmp_path / "page.txt", "Jno Smith was a Majr in the Genl's army")

        assert main(["enhance", source]) == 0

        out = capsys.readouterr().out
        assert "John Smith was a Major in the General's army" in out

    def test_json(self, tmp_path, capsys):
        source = write(tmp_path / "page.txt", "thc deed")

        assert main(["enhance", source, "--confidence", "0.5", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["text"] == "the deed"
        assert data["correction_count"] == 1

    def test_missing_file(self, tmp_path, capsys):
        assert main(["enhance", str(tmp_path / "nope.txt")]) == 1
        assert "Error" in capsys.readouterr().err


class TestCompareCommand:
    """Tests for `histocr compare`."""

    def test_json_and_training_dir(self, tmp_path, capsys):
        system = write(tmp_path / "system.txt", "the slave owner sold")
        truth = write(tmp_path / "truth.txt", "the slave owner sold six negroes")
        training_dir = tmp_path / "training"

        code = main(
            [
                "compare",
                system,
                truth,
                "--document-type",
                "bill_of_sale",
                "--training-dir",
                str(training_dir),
                "--json",
            ]
        )

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["document_type"] == "bill_of_sale"
        assert data["discrepancies"]["missing_words"] == ["six", "negroes"]
        assert len(list(training_dir.glob("training_*.json"))) == 1

    def test_logs_to_database(self, tmp_path, db_url, capsys):
        system = write(tmp_path / "system.txt", "the deed")
        truth = write(tmp_path / "truth.txt", "the deed")

        assert main(["--db", db_url, "compare", system, truth]) == 0
        capsys.readouterr()

        assert main(["--db", db_url, "stats", "--training-dir", str(tmp_path / "t")]) == 0
        out = capsys.readouterr().out
        assert "unknown" in out
        assert "Training examples" in out


class TestLearnCommand:
    """Tests for `histocr learn`."""

    def test_requires_database(self, capsys):
        assert main(["learn", "Hopweli", "Hopewell"]) == 1
        assert "requires a database" in capsys.readouterr().err

    def test_learned_correction_applied(self, tmp_path, db_url, capsys):
        learn = ["--db", db_url, "learn", "Hopweli", "Hopewell"]
        assert main(learn) == 0
        assert main([*learn, "--context", "at Hopweli"]) == 0
        capsys.readouterr()

        source = write(tmp_path / "page.txt", "Hopweli Plantation")
        assert main(["--db", db_url, "enhance", source, "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["corrections"][0]["type"] == "learned"
        assert "Hopewell" in data["text"]


class TestOtherCommands:
    """Tests for stats, alternatives and global options."""

    def test_stats_json_without_database(self, tmp_path, capsys):
        assert main(["stats", "--training-dir", str(tmp_path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["training"]["total_training_examples"] == 0
        assert data["performance"] == []

    def test_alternatives(self, capsys):
        assert main(["alternatives", "m"]) == 0
        assert capsys.readouterr().out.split() == ["n", "in", "w", "rn", "nn"]

    def test_alternatives_unknown(self, capsys):
        assert main(["alternatives", "~"]) == 0
        assert "No known confusions" in capsys.readouterr().out

    def test_config_file(self, tmp_path, capsys):
        config = write(tmp_path / "histocr.yaml", "enhancer:\n  high_confidence_threshold: 0.3\n")
        source = write(tmp_path / "page.txt", "thc deed")

        assert main(["--config", config, "enhance", source, "--json"]) == 0

        # Cursive fixes are skipped above the configured threshold
        assert json.loads(capsys.readouterr().out)["text"] == "thc deed"

    def test_invalid_config(self, tmp_path, capsys):
        config = write(tmp_path / "histocr.yaml", "enhancer:\n  colour: red\n")
        assert main(["--config", config, "alternatives", "m"]) == 1
        assert "colour" in capsys.readouterr().err

    def test_stats_skips_undecodable_example(self, tmp_path, capsys):
        training_dir = tmp_path / "training"
        training_dir.mkdir()
        write(training_dir / "training_good.json", '{"similarity": 0.5}')
        (training_dir / "training_bad.json").write_bytes(b"\xff\xfe")

        assert main(["stats", "--training-dir", str(training_dir), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["training"]["total_training_examples"] == 1
