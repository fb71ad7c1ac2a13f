from unittest.mock import MagicMock

import pytest

from sorter.labels import (
    candidate_labels,
    detect_labels,
    parse_label_list,
    resolve_labels,
    validate_label,
)

LABELS = ("Work", "Personal")


@pytest.mark.parametrize("raw", [None, "", "   ", "\n"])
def test_validate_label_empty_input(raw):
    assert validate_label(raw, LABELS) is None


def test_validate_label_trims_whitespace():
    assert validate_label("  Work\n", LABELS) == "Work"


@pytest.mark.parametrize("raw", ["work", "WORK", "Unknown", "Wor", "Work folder"])
def test_validate_label_rejects_non_members_when_case_sensitive(raw):
    assert validate_label(raw, LABELS) is None


def test_validate_label_case_insensitive_returns_canonical_spelling():
    assert validate_label(" personal ", LABELS, case_sensitive=False) == "Personal"
    assert validate_label("Unknown", LABELS, case_sensitive=False) is None


def test_candidate_labels_dedupes_and_preserves_order():
    assert candidate_labels(["B", " A ", "", "B", None, "C"]) == ("B", "A", "C")


def test_parse_label_list():
    assert parse_label_list("Algorithmique, Maths ,, TP, Maths") == (
        "Algorithmique",
        "Maths",
        "TP",
    )


def test_detect_labels_uses_store_locations():
    store = MagicMock()
    store.list_locations.return_value = ["Personal", "Work"]

    assert detect_labels(store) == ("Personal", "Work")


def test_resolve_labels_auto_detect(settings):
    store = MagicMock()
    store.list_locations.return_value = ["Maths"]
    settings.AUTO_DETECT_FOLDERS = True
    settings.TARGET_FOLDERS = ["Ignored"]

    assert resolve_labels(settings, store) == ("Maths",)


def test_resolve_labels_explicit_list(settings):
    store = MagicMock()
    settings.AUTO_DETECT_FOLDERS = False
    settings.TARGET_FOLDERS = ["Work", "Personal"]

    assert resolve_labels(settings, store) == ("Work", "Personal")
    store.list_locations.assert_not_called()


def test_resolve_labels_auto_detect_empty_store(settings):
    store = MagicMock()
    store.list_locations.return_value = []
    settings.AUTO_DETECT_FOLDERS = True

    assert resolve_labels(settings, store) == ()
