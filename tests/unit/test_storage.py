"""Unit tests for the JSON key-value store."""

import json

import pytest

from tailor.utils.storage import LocalStore


@pytest.mark.unit
def test_set_get_remove(tmp_path):
    store = LocalStore(tmp_path / "nested" / "store.json")

    assert store.get("resumeLatex") is None
    assert store.get("resumeLatex", "default") == "default"

    store.set(resumeLatex="\\section{A}", resumeType="latex")
    assert store.get("resumeLatex") == "\\section{A}"
    assert store.get_many(["resumeLatex", "resumeType", "jobDescription"]) == {
        "resumeLatex": "\\section{A}",
        "resumeType": "latex",
    }

    store.remove("resumeLatex", "notStored")
    assert store.get_many(["resumeLatex", "resumeType"]) == {"resumeType": "latex"}


@pytest.mark.unit
def test_store_file_is_plain_json(tmp_path):
    path = tmp_path / "store.json"
    LocalStore(path).set(jobDescription="Café engineer")

    assert json.loads(path.read_text(encoding="utf-8")) == {"jobDescription": "Café engineer"}
