"""
Single Choice Resolution.

Maps the answer of a single-choice input back to the edge of the selected
item. Deterministic: items are scanned in the order the step lists them and
the first exact content match wins.
"""

import logging
from typing import Mapping, Optional

from ..domain.models import ChoiceInputOptions, ChoiceItem, Step

logger = logging.getLogger(__name__)


def get_single_choice_edge_id(
    step: Step,
    choice_items: Mapping[str, ChoiceItem],
    selected_content: Optional[str],
) -> Optional[str]:
    """
    Resolve the outgoing edge of a single-choice input step.

    Args:
        step: The choice input step that was answered.
        choice_items: Choice items of the script, indexed by id.
        selected_content: The content of the button the user picked.

    Returns:
        The selected item's edge, the step's own edge when the item has none,
        or None when no item matches the answer.
    """
    options = step.options
    item_ids = options.item_ids if isinstance(options, ChoiceInputOptions) else []

    for item_id in item_ids:
        item = choice_items.get(item_id)
        if item is None or item.content != selected_content:
            continue
        return item.edge_id or step.edge_id

    logger.info(f"No choice item of step {step.id} matches answer {selected_content!r}")
    return None
