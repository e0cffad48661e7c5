import json
import pytest
import requests
from etl import pipeline
from etl.pipeline import load_records, parse_records, run as run_pipeline


@pytest.fixture
def sample_payload():
    """Raw teacherData.json entries as exported from the spreadsheet."""
    return [
        {
            "Name of the teacher": "Dr. K. Rao",
            "Section": " cse - 1 ",
            "Name of the subject": "Operating Systems",
            "Academic Year": "2023-2024",
            "B. Tech. Year": 3,
            "Sem": 1,
            "% of Pass": "91.25",
        },
        {
            "Name of the teacher": "S. Iyer",
            "Section": "AI & ML",
            "Name of the subject": "Deep Learning",
            "Academic Year": "2022-2023",
            "B. Tech. Year": "4",
            "Sem": "2",
            "% of Pass": 78,
            "Remarks": "ignored",
        },
    ]


@pytest.fixture
def data_file(tmp_path, sample_payload):
    path = tmp_path / "teacherData.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path


class TestParseRecords:
    """Test record validation and section canonicalisation."""

    def test_source_keys_mapped(self, sample_payload):
        """Test that the spreadsheet column names map onto record fields."""
        records = parse_records(sample_payload)
        assert len(records) == 2
        first = records[0]
        assert first.teacher_name == "Dr. K. Rao"
        assert first.subject_name == "Operating Systems"
        assert first.academic_year == "2023-2024"
        assert first.btech_year == 3
        assert first.pass_percentage == "91.25"

    def test_sections_normalised_with_provenance(self, sample_payload):
        """Test that sections are canonicalised and the source label is kept."""
        records = parse_records(sample_payload)
        assert [r.section for r in records] == ["CSE-1", "AIML"]
        assert [r.raw_section for r in records] == [" cse - 1 ", "AI & ML"]

    def test_odd_year_and_semester_values_kept(self):
        """Test that fractional, boolean and list values load as text instead of dropping the record."""
        records = parse_records([
            {"Sem": 1.5, "Section": "CSE"},
            {"B. Tech. Year": True},
            {"Sem": [1, 2], "% of Pass": {"value": 80}},
            {"B. Tech. Year": 3.0},
        ])
        assert len(records) == 4
        assert records[0].semester == "1.5"
        assert records[1].btech_year == "true"
        assert records[2].semester == "[1, 2]"
        assert records[2].pass_percentage == "{'value': 80}"
        assert records[3].btech_year == 3

    def test_non_object_entries_skipped(self, sample_payload):
        """Test that entries that are not objects are skipped."""
        payload = ["not a record", 42, None, *sample_payload]
        records = parse_records(payload)
        assert [r.teacher_name for r in records] == ["Dr. K. Rao", "S. Iyer"]

    def test_non_array_payload_rejected(self):
        """Test that a payload that is not a list is an error."""
        with pytest.raises(ValueError):
            parse_records({"records": []})

    def test_records_are_immutable(self, sample_payload):
        """Test that loaded records cannot be modified."""
        record = parse_records(sample_payload)[0]
        with pytest.raises(Exception):
            record.section = "ECE"


class TestLoad:
    """Test loading from files and URLs."""

    def test_load_from_file(self, data_file):
        """Test that records load from a local JSON file."""
        records = load_records(data_file)
        assert len(records) == 2

    def test_run_missing_file_returns_empty(self, tmp_path):
        """Test that a missing file gives an empty collection."""
        assert run_pipeline(tmp_path / "missing.json") == []

    def test_run_bad_json_returns_empty(self, tmp_path):
        """Test that malformed JSON gives an empty collection."""
        path = tmp_path / "teacherData.json"
        path.write_text("{not json", encoding="utf-8")
        assert run_pipeline(path) == []

    def test_run_uses_configured_source(self, data_file, monkeypatch):
        """Test that run() reads TEACHER_DATA_SOURCE when no source is given."""
        monkeypatch.setenv("TEACHER_DATA_SOURCE", str(data_file))
        assert len(run_pipeline()) == 2

    def test_load_from_url(self, sample_payload, monkeypatch):
        """Test that http(s) sources are fetched with a timeout."""
        calls = []

        class FakeResponse:
            def raise_for_status(self):
                pass

            def json(self):
                return sample_payload

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse()

        monkeypatch.setattr(pipeline.requests, "get", fake_get)
        records = load_records("https://example.org/teacherData.json")
        assert len(records) == 2
        assert calls == [("https://example.org/teacherData.json", pipeline.FETCH_TIMEOUT)]

    def test_run_network_failure_returns_empty(self, monkeypatch):
        """Test that a failed fetch gives an empty collection."""
        def fake_get(url, timeout):
            raise requests.ConnectionError("unreachable")

        monkeypatch.setattr(pipeline.requests, "get", fake_get)
        assert run_pipeline("http://localhost:1/teacherData.json") == []
