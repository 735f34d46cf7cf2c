"""Tests for the marketlens CLI."""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from marketlens.cli.main import main
from marketlens.errors import UpstreamError


@pytest.fixture
def db_args(temp_db: Path) -> list[str]:
    return ["--db", str(temp_db)]


class TestNormalizeCommand:
    """Tests for the normalize subcommand."""

    def test_competitor_from_file(self, tmp_path: Path, acme_fenced_payload: str, capsys) -> None:
        payload = tmp_path / "payload.txt"
        payload.write_text(acme_fenced_payload, encoding="utf-8")
        main(["normalize", "--input", str(payload)])
        out = json.loads(capsys.readouterr().out)
        assert out[0]["name"] == "Acme"
        assert out[0]["pricing"] == "฿100, ฿200"

    def test_analysis_from_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"strengths": ["Trust",],}'))
        main(["normalize", "--kind", "analysis"])
        out = json.loads(capsys.readouterr().out)
        assert out["strengths"] == ["Trust"]
        assert out["error"] is None


class TestExitCodes:
    """Tests for error to exit code mapping."""

    def test_missing_field_exits_2(self, db_args: list[str], monkeypatch) -> None:
        monkeypatch.setenv("MARKETLENS_COMPETITOR_WEBHOOK_URL", "https://workflows.example.com/webhook/x")
        with pytest.raises(SystemExit) as exc_info:
            main([*db_args, "research", "--client", "Siam Clinic", "--no-store"])
        assert exc_info.value.code == 2

    def test_not_found_exits_1(self, db_args: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([*db_args, "summary", "--run-id", "missing-run"])
        assert exc_info.value.code == 1

    def test_analyze_upstream_failure_prints_fallback(self, db_args: list[str], capsys) -> None:
        with patch(
            "marketlens.research.analyze_market",
            side_effect=UpstreamError("gemini", "down", upstream_status=503),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main([*db_args, "analyze", "--client", "Siam Clinic", "--product-focus", "Botox"])
        assert exc_info.value.code == 1
        out = json.loads(capsys.readouterr().out)
        assert out["error"] == "gemini error: 503 - down"
        assert out["summary"] == "No competitor data available due to server error."


class TestStoreCommand:
    """Tests for the store subcommand."""

    def test_runs_empty(self, db_args: list[str], capsys) -> None:
        main([*db_args, "store", "runs"])
        assert json.loads(capsys.readouterr().out) == []

    def test_competitors_requires_filter(self, db_args: list[str]) -> None:
        with pytest.raises(SystemExit):
            main([*db_args, "store", "competitors"])

    def test_show_run(self, temp_db: Path, db_args: list[str], capsys) -> None:
        from marketlens.models.request import ResearchRequest
        from marketlens.store import ResearchRepository, RowStore

        run = ResearchRepository(RowStore(temp_db)).save_analysis_run(
            ResearchRequest(client_name="Siam Clinic", market="Thailand")
        )
        main([*db_args, "store", "run", "--run-id", run["id"]])
        assert json.loads(capsys.readouterr().out)["clientName"] == "Siam Clinic"

    def test_missing_run_exits_1(self, db_args: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([*db_args, "store", "run", "--run-id", "missing"])
        assert exc_info.value.code == 1


class TestAnalyzeCommand:
    """Tests for the analyze subcommand."""

    def test_product_focus_defaults_to_stored_run(self, temp_db: Path, db_args: list[str], capsys) -> None:
        from marketlens.models.analysis import StrategicAnalysis
        from marketlens.models.request import ResearchRequest
        from marketlens.store import ResearchRepository, RowStore

        ResearchRepository(RowStore(temp_db)).save_analysis_run(
            ResearchRequest(client_name="Siam Clinic", market="Thailand", product_focus="Botox")
        )
        with patch("marketlens.research.analyze_market", return_value=StrategicAnalysis(summary="ok")) as analyze:
            main([*db_args, "analyze", "--client", "Siam Clinic"])
        assert analyze.call_args.args[1] == "Botox"
        assert json.loads(capsys.readouterr().out)["summary"] == "ok"

    def test_no_product_focus_anywhere_exits_2(self, db_args: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([*db_args, "analyze", "--client", "Nobody"])
        assert exc_info.value.code == 2
