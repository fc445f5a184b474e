"""CLI tests using Typer's CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from keyword_opportunity.cli import app

runner = CliRunner()


@pytest.fixture()
def records_file(tmp_path, sample_records):
    path = tmp_path / "records.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


@pytest.fixture()
def missing_config(tmp_path):
    return str(tmp_path / "no-settings.yaml")


@pytest.fixture()
def unparsable_config(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("keyword_opportunity: [unclosed\n", encoding="utf-8")
    return str(path)


# ===========================================================================
# 1. Help output
# ===========================================================================
class TestHelp:

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Keyword opportunity analysis" in result.output

    @pytest.mark.parametrize("cmd", ["analyze", "score", "status"])
    def test_command_help(self, cmd):
        result = runner.invoke(app, [cmd, "--help"])
        assert result.exit_code == 0, (
            cmd + " --help failed: " + result.output
        )


# ===========================================================================
# 2. analyze
# ===========================================================================
class TestAnalyzeCommand:

    def test_tables(self, records_file, missing_config):
        result = runner.invoke(app, ["analyze", str(records_file), "--config", missing_config])
        assert result.exit_code == 0, result.output
        assert "Analysis complete." in result.output
        assert "Quick Wins" in result.output

    def test_text_report(self, records_file, missing_config):
        result = runner.invoke(
            app,
            ["analyze", str(records_file), "--text", "--config", missing_config, "-b", "Retail"],
        )
        assert result.exit_code == 0, result.output
        assert "SEO KEYWORD OPPORTUNITY REPORT" in result.output
        assert "Retail" in result.output

    def test_exports(self, records_file, missing_config, tmp_path):
        json_out = tmp_path / "out" / "report.json"
        csv_out = tmp_path / "out" / "keywords.csv"
        result = runner.invoke(app, [
            "analyze", str(records_file),
            "--config", missing_config,
            "--json-out", str(json_out),
            "--csv-out", str(csv_out),
            "--website", "shop.example.com",
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(json_out.read_text(encoding="utf-8"))
        assert data["summary"]["total_keywords"] == 7
        assert data["summary"]["source_website"] == "shop.example.com"
        assert csv_out.read_text(encoding="utf-8").startswith("cluster_id,")

    def test_missing_records_file(self, tmp_path, missing_config):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.json"), "--config", missing_config])
        assert result.exit_code == 1

    def test_invalid_config(self, records_file, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("keyword_opportunity:\n  similarity_threshold: 7\n", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(records_file), "--config", str(config)])
        assert result.exit_code == 1

    def test_unparsable_config(self, records_file, unparsable_config):
        result = runner.invoke(app, ["analyze", str(records_file), "--config", unparsable_config])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output


# ===========================================================================
# 3. score / status
# ===========================================================================
class TestScoreCommand:

    def test_score(self, missing_config):
        result = runner.invoke(app, [
            "score", "buy running shoes", "--volume", "1000", "--cpc", "1.2", "--competition", "0.5",
            "--config", missing_config,
        ])
        assert result.exit_code == 0, result.output
        assert "4500" in result.output
        assert "53/100" in result.output
        assert "Purchase Intent" in result.output

    def test_zero_volume(self):
        result = runner.invoke(app, ["score", "buy running shoes", "--volume", "0"])
        assert result.exit_code == 1

    def test_default_cpc_from_config(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("keyword_opportunity:\n  default_cpc: 2.0\n", encoding="utf-8")
        result = runner.invoke(app, ["score", "buy running shoes", "--volume", "1000", "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "$2.00" in result.output

    def test_min_search_volume_from_config(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("keyword_opportunity:\n  min_search_volume: 500\n", encoding="utf-8")
        result = runner.invoke(app, ["score", "buy running shoes", "--volume", "100", "--config", str(config)])
        assert result.exit_code == 1
        assert "at least 500" in result.output

    def test_unparsable_config(self, unparsable_config):
        result = runner.invoke(app, ["score", "buy running shoes", "--volume", "100", "--config", unparsable_config])
        assert result.exit_code == 1


class TestStatusCommand:

    def test_status(self, missing_config):
        result = runner.invoke(app, ["status", "--config", missing_config])
        assert result.exit_code == 0, result.output
        assert "config" in result.output
        assert "engine" in result.output

    def test_unparsable_config(self, unparsable_config):
        result = runner.invoke(app, ["status", "--config", unparsable_config])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output
