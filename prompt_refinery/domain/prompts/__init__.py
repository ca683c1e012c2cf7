"""Instruction templates for the refinement rounds."""

from prompt_refinery.domain.prompts.renderer import build_history_log, render_template
from prompt_refinery.domain.prompts.templates import TemplateId

__all__ = ["TemplateId", "build_history_log", "render_template"]
