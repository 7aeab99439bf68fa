"""Tests for the JSON summary report."""

import pytest

from conftest import make_image, ts
from hubtags.report import ReportError, build_report, validate_report
from hubtags.summary.ordering import summarize


class TestBuildReport:
    def test_report_content(self):
        records = [
            make_image("1.25", digest="sha256:new", pushed=ts("2024-02-01T00:00:00Z")),
            make_image("latest", digest="sha256:new"),
            make_image("nightly", digest="sha256:tmp"),
        ]
        summaries = summarize([r.tag for r in records], architecture="amd64")

        report = build_report("library/nginx", summaries, architecture="amd64")
        validate_report(report)

        assert report["repository"] == "library/nginx"
        assert report["architecture"] == "amd64"
        assert report["os"] is None
        (platform,) = report["platforms"]
        assert platform["display"] == "linux/amd64"
        assert platform["platform"]["architecture"] == "amd64"
        # Lexical comparison puts "nightly" above "1.25".
        assert [i["digest"] for i in platform["images"]] == ["sha256:tmp", "sha256:new"]
        assert platform["images"][1] == {
            "digest": "sha256:new",
            "last_updated": "2024-02-01T00:00:00+00:00",
            "dominant_tag": "1.25",
            "tags": ["1.25", "latest"],
        }
        assert platform["images"][0]["dominant_tag"] == "nightly"

    def test_empty_summary(self):
        report = build_report("library/nginx", [])
        validate_report(report)
        assert report["platforms"] == []


class TestValidateReport:
    def test_invalid_report(self):
        with pytest.raises(ReportError, match="schema validation"):
            validate_report({"repository": "library/nginx"})

    def test_wrong_type(self):
        report = build_report("library/nginx", [])
        report["platforms"] = "none"
        with pytest.raises(ReportError):
            validate_report(report)
