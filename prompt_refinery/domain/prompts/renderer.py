"""Rendering of instruction templates and the conversation history log."""

import re
from collections.abc import Mapping

from prompt_refinery.domain.models.conversation import QUESTION_ROUNDS, Conversation
from prompt_refinery.domain.prompts.templates import TEMPLATES, TemplateId

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def render_template(template_id: TemplateId, values: Mapping[str, str]) -> str:
    """Fill the named placeholders of a template.

    Every occurrence of each placeholder in ``values`` is replaced in a single
    pass, so text inserted for one placeholder is never scanned again.
    Placeholders without a value are left verbatim.

    Raises:
        KeyError: If ``template_id`` names no template
    """
    template = TEMPLATES[template_id]

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        return values[name] if name in values else match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


def build_history_log(conversation: Conversation) -> str:
    """Concatenate the recorded question/answer pairs in round order.

    Rounds whose questions were never recorded are skipped.
    """
    history = ""
    for round_number in QUESTION_ROUNDS:
        questions = conversation.questions.get(round_number)
        if not questions:
            continue
        answers = conversation.answers.get(round_number, "")
        history += f"\nROUND {round_number} Q&A:\nQ: {questions}\nA: {answers}\n"
    return history
