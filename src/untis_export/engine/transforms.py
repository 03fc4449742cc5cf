"""Transform stages applied to parsed substitutions before upload."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from untis_export.models import EXAM_ID, Substitution

logger = logging.getLogger(__name__)


def replace_substitution_types(
    substitutions: list[Substitution],
    replacements: Mapping[str, str] | None,
) -> list[Substitution]:
    """Rewrite the type label of every substitution in place.

    Rules are applied in mapping order, each against the result of the
    previous one, so ``{"A": "B", "B": "C"}`` turns ``"A"`` into ``"C"``.

    Args:
        substitutions: Parsed substitutions, modified in place.
        replacements: Ordered mapping of substring to replacement.

    Returns:
        The same list.

    Raises:
        ValueError: If a rule has an empty search string.
    """
    logger.debug("Replace substitution types.")

    if not replacements:
        logger.debug("No type replacements given. Skipping.")
        return substitutions

    if "" in replacements:
        raise ValueError("Type replacement keys must not be empty")

    for substitution in substitutions:
        if substitution.type is None:
            continue
        for old, new in replacements.items():
            substitution.type = substitution.type.replace(old, new)

    return substitutions


def remove_exams(substitutions: list[Substitution], enabled: bool) -> list[Substitution]:
    """Remove exam rows (id 0) in place, keeping the order of the rest.

    Args:
        substitutions: Parsed substitutions, modified in place.
        enabled: Whether exams should be removed at all.

    Returns:
        The same list.
    """
    if not enabled:
        logger.debug("No need to remove exams.")
        return substitutions

    logger.debug("Removing exams.")

    # Scanning from the back yields descending positions, so deleting one
    # never shifts a position still to be deleted.
    delete_idx = [
        idx
        for idx in range(len(substitutions) - 1, -1, -1)
        if substitutions[idx].id == EXAM_ID
    ]

    for idx in delete_idx:
        del substitutions[idx]

    logger.debug(f"Removed {len(delete_idx)} exams.")
    return substitutions
