from bot_engine.domain.models import ChoiceInputOptions, ChoiceItem, InputStepType, Step
from bot_engine.execution.choice import get_single_choice_edge_id


def _choice_step(item_ids, edge_id=None):
    return Step(
        id="choice",
        block_id="block_1",
        type=InputStepType.CHOICE,
        options=ChoiceInputOptions(item_ids=item_ids),
        edge_id=edge_id,
    )


ITEMS = {
    "yes": ChoiceItem(id="yes", step_id="choice", content="Yes", edge_id="E_yes"),
    "no": ChoiceItem(id="no", step_id="choice", content="No", edge_id="E_no"),
    "yes_again": ChoiceItem(id="yes_again", step_id="choice", content="Yes", edge_id="E_dup"),
    "later": ChoiceItem(id="later", step_id="choice", content="Later"),
}


def test_matching_item_edge_is_returned():
    step = _choice_step(["yes", "no"])

    assert get_single_choice_edge_id(step, ITEMS, "Yes") == "E_yes"
    assert get_single_choice_edge_id(step, ITEMS, "No") == "E_no"


def test_no_match_returns_none():
    step = _choice_step(["yes", "no"], edge_id="E_step")

    assert get_single_choice_edge_id(step, ITEMS, "Maybe") is None
    assert get_single_choice_edge_id(step, ITEMS, None) is None


def test_first_match_in_step_order_wins():
    assert get_single_choice_edge_id(_choice_step(["yes_again", "yes"]), ITEMS, "Yes") == "E_dup"
    assert get_single_choice_edge_id(_choice_step(["yes", "yes_again"]), ITEMS, "Yes") == "E_yes"


def test_item_without_edge_falls_back_to_step_edge():
    step = _choice_step(["later"], edge_id="E_step")

    assert get_single_choice_edge_id(step, ITEMS, "Later") == "E_step"


def test_items_of_other_steps_are_ignored():
    step = _choice_step(["no"])

    assert get_single_choice_edge_id(step, ITEMS, "Yes") is None
