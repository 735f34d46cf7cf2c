"""End-to-end tests for raw payload -> normalized records."""

import json

from marketlens.models.raw import RawProviderPayload
from marketlens.research import (
    process_analysis_payload,
    process_competitor_payload,
    process_research_payload,
    run_pipeline,
)


class TestRunPipeline:
    """Tests for run_pipeline."""

    def test_fenced_array_wrapped_acme(self, acme_fenced_payload: str) -> None:
        """Fenced, array-wrapped record with array pricing comes out canonical."""
        competitors = run_pipeline(acme_fenced_payload)
        assert len(competitors) == 1
        acme = competitors[0]
        assert acme.name == "Acme"
        assert acme.pricing == "฿100, ฿200"
        assert acme.services == []
        assert acme.website is None
        assert acme.error is None

    def test_research_envelope(self, research_envelope: dict) -> None:
        competitors = run_pipeline(json.dumps(research_envelope), client_name="Siam Clinic")
        assert [c.name for c in competitors] == ["Bangkok Beauty Co", "Glow Aesthetic"]
        assert competitors[0].facebook_url == "https://facebook.com/bkkbeauty"
        assert competitors[1].website == "https://glowaesthetic.com"

    def test_raw_provider_payload_body(self, research_envelope: dict) -> None:
        raw = RawProviderPayload(provider="webhook", body=[research_envelope])
        assert len(run_pipeline(raw)) == 3

    def test_nameless_record_left_out(self) -> None:
        """A single record with no usable name yields no competitors."""
        assert run_pipeline('```json\n[{"pricing": ["a", "b"]}]\n```') == []

    def test_error_record_kept_as_fallback(self) -> None:
        competitors = run_pipeline('{"error": "Workflow quota exceeded"}')
        assert [c.error for c in competitors] == ["Workflow quota exceeded"]

    def test_unusable_payload_yields_fallback(self) -> None:
        competitors = run_pipeline("The workflow timed out, please retry")
        assert len(competitors) == 1
        assert competitors[0].error == "Invalid JSON"
        assert competitors[0].is_placeholder


class TestProcessPayloads:
    """Tests for the single-record helpers."""

    def test_competitor_payload_with_trailing_commas(self) -> None:
        comp = process_competitor_payload('{"name": "Acme", "services": ["Web",],}')
        assert comp.name == "Acme"
        assert comp.services == ["Web"]

    def test_competitor_payload_invalid(self) -> None:
        assert process_competitor_payload("{not json").error == "Invalid JSON"

    def test_analysis_payload(self) -> None:
        analysis = process_analysis_payload('```json\n{"strengths": ["Trust"], "summary": "ok",}\n```')
        assert analysis.strengths == ["Trust"]
        assert analysis.summary == "ok"

    def test_analysis_payload_invalid(self) -> None:
        assert process_analysis_payload("nope").is_fallback


class TestProcessResearchPayload:
    """Tests for the research envelope."""

    def test_envelope(self, research_envelope: dict) -> None:
        payload = process_research_payload(research_envelope, client_name="Siam Clinic")
        assert payload.has_competitor_list
        assert payload.summary == "Three clinics compete mostly on price."
        assert [c.name for c in payload.competitors] == ["Bangkok Beauty Co", "Glow Aesthetic"]
        assert payload.error is None

    def test_missing_competitors_list(self) -> None:
        payload = process_research_payload({"summary_competitor": ""})
        assert not payload.has_competitor_list
        assert payload.summary is None
        assert payload.competitors == []

    def test_invalid_text(self) -> None:
        assert process_research_payload("<html>502 Bad Gateway</html>").error == "Invalid JSON"

    def test_unexpected_shape(self) -> None:
        assert process_research_payload('"just a string"').error == "Unexpected response shape"
