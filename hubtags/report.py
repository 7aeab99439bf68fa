"""JSON report for a tag summary, validated against a packaged schema."""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

import jsonschema

from hubtags.summary.ordering import PlatformSummary

SCHEMA_FILE = "summary.schema.json"


class ReportError(Exception):
    """Raised when a report does not conform to its JSON Schema."""


def build_report(
    repository: str,
    summaries: list[PlatformSummary],
    architecture: str | None = None,
    os: str | None = None,
) -> dict[str, Any]:
    """Build the JSON-serializable report of *summaries*."""
    return {
        "repository": repository,
        "architecture": architecture,
        "os": os,
        "platforms": [
            {
                "platform": summary.platform.to_dict(),
                "display": str(summary.platform),
                "images": [
                    {
                        "digest": image.digest,
                        "last_updated": image.last_updated.isoformat(),
                        "dominant_tag": image.dominant_tag.name
                        if image.dominant_tag
                        else None,
                        "tags": image.tag_names,
                    }
                    for image in summary.images
                ],
            }
            for summary in summaries
        ],
    }


def validate_report(report: dict[str, Any]) -> None:
    """Validate *report* against the summary JSON Schema.

    Raises:
        ReportError: If the report does not conform to the schema.
    """
    try:
        jsonschema.validate(instance=report, schema=_load_schema())
    except jsonschema.ValidationError as exc:
        raise ReportError(f"Summary report failed schema validation: {exc.message}") from exc


def _load_schema() -> dict[str, Any]:
    """Load the JSON Schema file from the ``hubtags.schemas`` package."""
    schema_ref = resources.files("hubtags.schemas").joinpath(SCHEMA_FILE)
    schema_text = schema_ref.read_text(encoding="utf-8")
    return json.loads(schema_text)  # type: ignore[no-any-return]
