"""Selector construction and evaluation over stored records."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator

from personledger.core.person.models import PersonField
from personledger.core.query.models import Selector


def employment_selector(is_employed: bool) -> Selector:
    """Selector for records whose employment flag equals is_employed.

    Args:
        is_employed: Flag value to match.

    Returns:
        Single-condition Selector on isEmployed.
    """
    return Selector().where(PersonField.IS_EMPLOYED, is_employed)


def matching_pairs(
    selector: Selector,
    pairs: Iterable[tuple[str, bytes]],
) -> Iterator[tuple[str, bytes]]:
    """Filter raw (key, value) pairs by a selector.

    Values are decoded as JSON objects only for evaluation; pairs whose value
    is not a JSON object are skipped, as a document store would not index them.

    Args:
        selector: Conditions to test.
        pairs: Stored (key, value) pairs, in the order they should be yielded.

    Yields:
        Each pair whose decoded document satisfies the selector.
    """
    for key, value in pairs:
        try:
            document = json.loads(value.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            continue
        if isinstance(document, dict) and selector.matches(document):
            yield key, value
