from __future__ import annotations

from collections import Counter
from typing import Iterable

from .models import Outcome, OutcomeStatus, RunSummary


def summarize(outcomes: Iterable[Outcome]) -> RunSummary:
    """Count outcomes per status. The result does not depend on outcome order."""
    counts = Counter(outcome.status for outcome in outcomes)
    return RunSummary(
        moved=counts[OutcomeStatus.MOVED],
        skipped=counts[OutcomeStatus.SKIPPED],
        failed=counts[OutcomeStatus.FAILED],
    )
