import itertools

from sorter.models import Document, Outcome, RunSummary, SkipReason
from sorter.summary import summarize


def _outcomes():
    return [
        Outcome.moved(Document("a.md"), "Work"),
        Outcome.moved(Document("b.md"), "Personal"),
        Outcome.skipped(Document("c.md"), SkipReason.INVALID_LABEL, label="Unknown"),
        Outcome.skipped(Document("d.md"), SkipReason.EMPTY_CONTENT),
        Outcome.failed(Document("e.md"), "HTTP 500"),
    ]


def test_summarize_counts_each_status():
    summary = summarize(_outcomes())

    assert summary == RunSummary(moved=2, skipped=2, failed=1)
    assert summary.total == 5
    assert str(summary) == "Moved: 2, Skipped: 2, Errors: 1"


def test_summarize_is_order_independent():
    expected = summarize(_outcomes())

    for permutation in itertools.permutations(_outcomes()):
        assert summarize(permutation) == expected


def test_summarize_empty():
    assert summarize([]) == RunSummary()
