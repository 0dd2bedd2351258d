"""Prompt templates for note generation."""

from .note_templates import (
    NoteType,
    TYPE_INSTRUCTIONS,
    build_enhance_prompt,
    build_qa_prompt,
    build_topic_summary_prompt,
)

__all__ = [
    "NoteType",
    "TYPE_INSTRUCTIONS",
    "build_enhance_prompt",
    "build_qa_prompt",
    "build_topic_summary_prompt",
]
