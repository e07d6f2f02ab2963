"""Parsing and filtering of in-toto attestation statements in JSON Lines files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

STATEMENT_TYPE_V1 = "https://in-toto.io/Statement/v1"

PREDICATE_URI_TYPE = {
    "https://slsa.dev/provenance/": "provenance",
    "https://in-toto.io/attestation/vulns": "vuln",
    "https://slsa.dev/verification_summary/v1": "vsa",
    "https://in-toto.io/attestation/test-result/": "test-result",
    "https://spdx.dev/Document": "spdx",
    "https://spdx.github.io/spdx-spec": "spdx",
    "https://in-toto.io/attestation/scai/attribute-report": "scai",
    "https://in-toto.io/attestation/runtime-trace/": "runtime-trace",
    "https://in-toto.io/attestation/release": "release",
    "https://in-toto.io/attestation/link": "link",
    "https://cyclonedx.org/bom": "cdx",
    "https://cyclonedx.org/specification/overview/": "cdx",
}


class AttestationError(ValueError):
    """Raised when an attestation file or statement is invalid."""


@dataclass
class Subject:
    """An artifact an attestation is about."""

    name: str = ""
    digest: dict[str, str] = field(default_factory=dict)


@dataclass
class Statement:
    """An in-toto statement: a typed predicate about a list of subjects."""

    type: str = ""
    predicate_type: str = ""
    subject: list[Subject] = field(default_factory=list)
    predicate: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the statement in its JSON wire form."""
        return {
            "_type": self.type,
            "predicateType": self.predicate_type,
            "subject": [{"name": s.name, "digest": dict(s.digest)} for s in self.subject],
            "predicate": self.predicate,
        }


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise AttestationError(f"invalid JSON: field {key} must be a string")
    return value


def _subject_from_dict(data: Any) -> Subject:
    if data is None:
        return Subject()
    if not isinstance(data, dict):
        raise AttestationError("invalid JSON: subject entries must be objects")
    digest = data.get("digest") or {}
    if not isinstance(digest, dict) or not all(
        isinstance(value, str) for value in digest.values()
    ):
        raise AttestationError("invalid JSON: digest must map algorithms to strings")
    return Subject(name=_string_field(data, "name"), digest=dict(digest))


def statement_from_dict(data: Any) -> Statement:
    """Build a Statement from decoded JSON; raise AttestationError on bad shapes."""
    if data is None:
        return Statement()
    if not isinstance(data, dict):
        raise AttestationError("invalid JSON: statement must be an object")
    subjects = data.get("subject") or []
    if not isinstance(subjects, list):
        raise AttestationError("invalid JSON: subject must be a list")
    return Statement(
        type=_string_field(data, "_type"),
        predicate_type=_string_field(data, "predicateType"),
        subject=[_subject_from_dict(item) for item in subjects],
        predicate=data.get("predicate"),
    )


def get_predicate_type(statement_type: str, predicate_type: str) -> str:
    """Map a statement's predicate URI to its short name."""
    if statement_type not in STATEMENT_TYPE_V1:
        raise AttestationError(f"invalid _type: {statement_type}")
    if not predicate_type:
        raise AttestationError("predicateType is empty")
    for uri, short_name in PREDICATE_URI_TYPE.items():
        if uri in predicate_type:
            return short_name
    raise AttestationError(f"predicateType {predicate_type} is invalid")


def validate_in_toto_statement(data: str | bytes) -> dict[str, list[Statement]]:
    """Validate every line as an in-toto statement and group them by predicate type."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    grouped: dict[str, list[Statement]] = {}
    for raw_line in lines:
        line = raw_line.removesuffix("\r")
        try:
            decoded = json.loads(line)
        except json.JSONDecodeError as exc:
            raise AttestationError(f"invalid JSON: {exc}") from exc
        statement = statement_from_dict(decoded)

        short_name = get_predicate_type(statement.type, statement.predicate_type)
        if not statement.subject:
            raise AttestationError("subject is empty")
        if any(not subject.name for subject in statement.subject):
            raise AttestationError("subject name is empty")
        grouped.setdefault(short_name, []).append(statement)
    return grouped


def get_relevant_statements(
    ps_map: dict[str, list[Statement]], pred_type: str, subject: str
) -> list[Statement]:
    """Return statements of a predicate type, optionally only those naming a subject."""
    all_statements = ps_map.get(pred_type, [])
    if not subject:
        return list(all_statements)
    return [
        statement
        for statement in all_statements
        for subj in statement.subject
        if subj.name == subject
    ]