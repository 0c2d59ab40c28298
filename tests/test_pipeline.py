"""
End-to-end tests for the orchestrator and the CLI.
"""

import json
import os
from collections import Counter
from unittest.mock import Mock

import pytest

import config.settings as settings
from conftest import IVIS_HEADERS, ivis_row
from hobbytags.agents.aggregation import recount_areas
from hobbytags.orchestrator import PipelineOrchestrator, run_clustering
from main import main


def read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def survey_path(ivis_csv):
    return ivis_csv([
        ivis_row(
            timestamp="2023/09/01 10:00:00 AM GMT+2",
            alias="Nintendo65",
            hobby="I love playing video games and reading sci-fi novels",
        ),
        [""] * len(IVIS_HEADERS),
        ivis_row(timestamp="2023/09/02 11:00:00 AM GMT+2", alias="nobody", hobby="none",
                 information_visualization="11"),
        ivis_row(timestamp="2023/09/03 12:00:00 PM GMT+2", alias="outdoorsy",
                 hobby="Hiking, cooking and photography"),
    ])


@pytest.fixture
def canon_path(tmp_path):
    path = tmp_path / "canon.json"
    path.write_text(json.dumps({
        "gaming": ["video games", "computer games"],
        "reading": ["books", "reading books"],
        "hiking": ["hikes"],
    }), encoding="utf-8")
    return path


class TestRuleBasedRun:

    def test_writes_all_artifacts(self, survey_path, tmp_path):
        output_dir = tmp_path / "output"
        written = PipelineOrchestrator().run(str(survey_path), str(output_dir))

        assert set(written) == {"records", "area_counts", "area_rules", "hobby_counts", "area_ratings"}
        for path in written.values():
            assert os.path.dirname(path) == str(output_dir)
            assert os.path.exists(path)

    def test_records(self, survey_path, tmp_path):
        written = PipelineOrchestrator().run(str(survey_path), str(tmp_path / "output"))
        records = read(written["records"])

        assert [r["id"] for r in records] == [1, 2, 3]
        assert records[0]["alias"] == "Nintendo65"
        assert records[0]["time_year"] == "2023"
        assert records[0]["hobby"] == ["videogame", "reading", "novel"]
        assert records[0]["hobby_area"] == ["games", "reading_writing"]
        assert records[1]["hobby"] == []
        assert records[1]["hobby_area"] == ["other"]
        assert records[1]["ratings"]["information_visualization"] is None
        assert records[1]["ratings"]["programming"] == 7.0
        assert records[2]["hobby_area"] == ["sports_outdoors", "arts_media", "food"]

    def test_area_counts_agree_with_records(self, survey_path, tmp_path):
        written = PipelineOrchestrator().run(str(survey_path), str(tmp_path / "output"))
        records = read(written["records"])
        table = read(written["area_counts"])

        assert table == [
            {"hobby_area": "games", "count": 1},
            {"hobby_area": "reading_writing", "count": 1},
            {"hobby_area": "other", "count": 1},
            {"hobby_area": "sports_outdoors", "count": 1},
            {"hobby_area": "arts_media", "count": 1},
            {"hobby_area": "food", "count": 1},
        ]
        assert Counter({row["hobby_area"]: row["count"] for row in table}) == recount_areas(records)

    def test_rule_snapshot_and_ratings(self, survey_path, tmp_path):
        written = PipelineOrchestrator().run(str(survey_path), str(tmp_path / "output"))

        rules = read(written["area_rules"])
        assert rules[0]["hobby_area"] == "sports_outdoors"
        assert "hiking" in rules[0]["keywords"]

        ratings = read(written["area_ratings"])
        other = next(row for row in ratings if row["hobby_area"] == "other")
        assert other["respondents"] == 1
        assert other["averages"]["information_visualization"] is None
        assert other["averages"]["programming"] == 7.0
        assert other["label"] == "Other"
        assert other["display_averages"]["programming"] == 3.5
        assert other["display_averages"]["information_visualization"] is None

    def test_tokenizer_strategy_gives_same_keywords(self, survey_path, tmp_path):
        default = PipelineOrchestrator().run(str(survey_path), str(tmp_path / "a"))
        tokenizer = PipelineOrchestrator(phrase_strategy="tokenizer").run(str(survey_path), str(tmp_path / "b"))

        assert read(default["records"]) == read(tokenizer["records"])

    def test_missing_column_is_fatal(self, ivis_csv, tmp_path):
        headers = [h for h in IVIS_HEADERS if h != settings.COL_HOBBY_RAW]
        path = ivis_csv([["x"] * len(headers)], headers=headers)

        with pytest.raises(ValueError, match="Missing required column"):
            PipelineOrchestrator().run(str(path), str(tmp_path / "output"))
        assert not (tmp_path / "output").exists()

    def test_header_only_file_is_fatal(self, ivis_csv, tmp_path):
        path = ivis_csv([])
        with pytest.raises(ValueError, match="no data rows"):
            PipelineOrchestrator().run(str(path), str(tmp_path / "output"))


class TestCanonRun:

    def test_writes_document_and_unknown_report(self, ivis_csv, canon_path, tmp_path):
        headers = [
            settings.COL_ALIAS,
            settings.COL_HOBBY_RAW,
            "How would you rate your programming skills?",
        ]
        path = ivis_csv([
            ["ada", "I like video games, pottery", "9"],
            ["bob", "books & pottery; hikes", "n/a"],
        ], headers=headers)
        output = tmp_path / "out" / "cleaned.json"
        unknown = tmp_path / "out" / "unknown.json"

        orchestrator = PipelineOrchestrator(
            tagger_variant="canon",
            canon_path=str(canon_path),
            include_unknown_as_tags=False,
        )
        written = orchestrator.run(str(path), str(output), str(unknown))

        document = read(output)
        assert document["totalRecords"] == 2
        assert document["hobbyConfig"] == {
            "canonFile": str(canon_path),
            "unknownFile": str(unknown),
            "includeUnknownAsTags": False,
        }
        assert document["ratingFields"] == [
            {"original": "How would you rate your programming skills?", "key": "programming"},
        ]
        assert document["records"][0]["hobbies"] == ["gaming"]
        assert document["records"][0]["ratings"] == {"programming": 9.0}
        assert document["records"][1]["hobbies"] == ["hiking", "reading"]
        assert document["records"][1]["ratings"] == {}

        assert read(unknown) == [{"term": "pottery", "count": 2}]

        assert written["hobby_counts"] == str(tmp_path / "out" / settings.HOBBY_COUNTS_FILENAME)
        assert read(written["hobby_counts"]) == [
            {"hobby": "gaming", "count": 1},
            {"hobby": "hiking", "count": 1},
            {"hobby": "reading", "count": 1},
        ]

    def test_include_unknown_as_tags(self, ivis_csv, canon_path, tmp_path):
        headers = [settings.COL_ALIAS, settings.COL_HOBBY_RAW]
        path = ivis_csv([["ada", "video games and pottery"]], headers=headers)

        orchestrator = PipelineOrchestrator(
            tagger_variant="canon",
            canon_path=str(canon_path),
            include_unknown_as_tags=True,
        )
        orchestrator.run(str(path), str(tmp_path / "cleaned.json"), str(tmp_path / "unknown.json"))

        record = read(tmp_path / "cleaned.json")["records"][0]
        assert record["hobbies"] == ["gaming", "pottery"]

    def test_missing_canon_file_is_fatal(self, tmp_path):
        with pytest.raises(OSError):
            PipelineOrchestrator(tagger_variant="canon", canon_path=str(tmp_path / "missing.json"))


def test_invalid_variant():
    with pytest.raises(ValueError, match="Invalid tagger variant"):
        PipelineOrchestrator(tagger_variant="neural")


def test_run_clustering_writes_reports(tmp_path):
    records_path = tmp_path / "records.json"
    records_path.write_text(json.dumps([
        {"id": 1, "alias": "a", "hobby": ["chess"]},
        {"id": 2, "alias": "b", "hobby": ["hiking"]},
        {"id": 3, "alias": "c", "hobby": []},
    ]), encoding="utf-8")

    generator = Mock()
    generator.model_name = "test-model"
    generator.embedding_dimensions = 2
    generator.generate_batch.return_value = [[1.0, 0.0], [0.0, 1.0]]

    written = run_clustering(str(records_path), str(tmp_path / "clusters"), k=2,
                             embedding_generator=generator)

    report = read(written["report"])
    assert report["input_rows"] == 2
    assert [c["size"] for c in report["clusters"]] == [1, 1]
    assert read(written["simple"]) == [
        {"cluster": 0, "members": [{"id": 1, "alias": "a"}]},
        {"cluster": 1, "members": [{"id": 2, "alias": "b"}]},
    ]


def test_run_clustering_without_hobby_rows(tmp_path):
    records_path = tmp_path / "records.json"
    records_path.write_text(json.dumps([{"id": 1, "hobby": []}]), encoding="utf-8")

    assert run_clustering(str(records_path), str(tmp_path), embedding_generator=Mock()) is None


class TestCli:

    @pytest.fixture(autouse=True)
    def in_tmp_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

    def test_tag_command(self, survey_path, tmp_path, capsys):
        exit_code = main(["tag", str(survey_path), str(tmp_path / "output")])

        assert exit_code == 0
        assert (tmp_path / "output" / settings.RECORDS_FILENAME).exists()
        assert "Wrote:" in capsys.readouterr().out

    def test_tag_command_failure(self, ivis_csv, tmp_path, capsys):
        path = ivis_csv([], name="empty.csv")

        exit_code = main(["tag", str(path), str(tmp_path / "output")])

        assert exit_code == 1
        assert "Error: CSV has no data rows" in capsys.readouterr().err

    def test_cluster_requires_api_key(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "")

        exit_code = main(["cluster", str(tmp_path / "records.json")])

        assert exit_code == 1
        assert "GOOGLE_API_KEY" in capsys.readouterr().err

    def test_tag_command_rejects_zero_keyword_cap(self, survey_path, tmp_path, capsys):
        exit_code = main(["tag", str(survey_path), str(tmp_path / "output"), "--max-keywords", "0"])

        assert exit_code == 1
        assert "Invalid max_keywords" in capsys.readouterr().err
        assert not (tmp_path / "output").exists()
