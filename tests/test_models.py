"""Tests for raw Hub records."""

import logging
from datetime import datetime, timezone

import pytest

from hubtags.registry.models import EPOCH, HubTag, parse_timestamp
from hubtags.summary.platform import Platform

TAG_JSON = {
    "name": "1.25-alpine",
    "last_updated": "2024-02-14T22:10:11.123456Z",
    "tag_status": "active",
    "images": [
        {
            "architecture": "amd64",
            "features": "",
            "variant": None,
            "digest": "sha256:aaa",
            "os": "linux",
            "os_features": "",
            "os_version": None,
            "status": "active",
            "last_pushed": "2024-02-14T22:09:00Z",
        },
        {
            "architecture": "arm",
            "variant": "v7",
            "digest": "sha256:bbb",
            "os": "linux",
            "status": "inactive",
        },
    ],
}


class TestParseTimestamp:
    def test_zulu(self):
        assert parse_timestamp("2020-01-01T00:00:00Z") == datetime(
            2020, 1, 1, tzinfo=timezone.utc
        )

    def test_offset(self):
        parsed = parse_timestamp("2020-01-01T02:00:00+02:00")
        assert parsed == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        assert parse_timestamp("2020-01-01T00:00:00").tzinfo is not None

    @pytest.mark.parametrize("value", [None, "", "not a date"])
    def test_defaults_to_epoch(self, value):
        assert parse_timestamp(value) == EPOCH

    def test_malformed_value_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hubtags.registry.models"):
            assert parse_timestamp("2024-13-45T99:00:00Z") == EPOCH
        assert "Unparseable timestamp" in caplog.text

    def test_missing_value_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hubtags.registry.models"):
            assert parse_timestamp(None) == EPOCH
        assert caplog.text == ""


class TestHubTagFromJson:
    """Test building records from a ``results`` entry."""

    def test_fields(self):
        tag = HubTag.from_json(TAG_JSON)

        assert tag.name == "1.25-alpine"
        assert tag.status == "active"
        assert tag.last_updated == datetime(2024, 2, 14, 22, 10, 11, 123456, tzinfo=timezone.utc)
        assert [i.digest for i in tag.images] == ["sha256:aaa", "sha256:bbb"]

    def test_images_point_back_to_tag(self):
        tag = HubTag.from_json(TAG_JSON)
        assert all(image.tag is tag for image in tag.images)

    def test_image_timestamps(self):
        tag = HubTag.from_json(TAG_JSON)
        first, second = tag.images

        assert first.last_updated == datetime(2024, 2, 14, 22, 9, tzinfo=timezone.utc)
        assert second.last_updated == EPOCH
        assert second.pushed_or_updated == tag.last_updated

    def test_platform(self):
        tag = HubTag.from_json(TAG_JSON)
        assert tag.images[0].platform == Platform(
            architecture="amd64", features="", os="linux", os_features=""
        )
        assert tag.images[1].platform == Platform(architecture="arm", variant="v7", os="linux")

    def test_missing_last_updated(self):
        tag = HubTag.from_json({"name": "edge", "images": []})
        assert tag.last_updated == EPOCH
        assert tag.images == []

    def test_null_images(self):
        assert HubTag.from_json({"name": "edge", "images": None}).images == []

    def test_image_without_digest_skipped(self):
        data = {"name": "edge", "images": [{"architecture": "amd64", "os": "linux"}]}
        assert HubTag.from_json(data).images == []

    def test_list_features_are_hashable(self):
        data = {
            "name": "edge",
            "images": [{"digest": "sha256:a", "os_features": ["win32k", "x"]}],
        }
        image = HubTag.from_json(data).images[0]
        assert image.os_features == "win32k,x"
        assert hash(image.platform)


class TestPlatform:
    def test_of_image_record(self):
        tag = HubTag.from_json(TAG_JSON)
        assert Platform.of(tag.images[1]) == Platform(architecture="arm", variant="v7", os="linux")

    def test_str(self):
        assert str(Platform(architecture="arm", variant="v7", os="linux")) == "linux/arm/v7"
        assert (
            str(Platform(architecture="amd64", os="windows", os_version="10.0.17763.5458"))
            == "windows/amd64 (10.0.17763.5458)"
        )
        assert str(Platform()) == "unknown/unknown"

    def test_to_dict(self):
        assert Platform(architecture="amd64").to_dict() == {
            "architecture": "amd64",
            "features": None,
            "variant": None,
            "os": None,
            "os_features": None,
            "os_version": None,
        }
