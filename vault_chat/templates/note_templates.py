"""Prompt templates for note generation commands."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class NoteType(str, Enum):
    SUMMARY = "summary"
    ANALYSIS = "analysis"
    OUTLINE = "outline"
    STUDY_GUIDE = "study-guide"
    ACTION_ITEMS = "action-items"


TYPE_INSTRUCTIONS: Dict[NoteType, str] = {
    NoteType.SUMMARY: """Create a comprehensive summary with:
- Key points and main ideas
- Important details and examples
- Connections between concepts
- A brief conclusion""",
    NoteType.ANALYSIS: """Provide an analytical note with:
- Critical examination of the content
- Strengths and weaknesses of arguments or ideas
- Your interpretations and insights
- Questions for further exploration
- Connections to broader themes""",
    NoteType.OUTLINE: """Create a structured outline with:
- Hierarchical organization (headers, sub-points)
- Logical flow of ideas
- Key terms and definitions
- Bullet points for easy scanning
- Action items or next steps if applicable""",
    NoteType.STUDY_GUIDE: """Create a study guide with:
- Key concepts to understand
- Important terms and definitions
- Review questions (with brief answers)
- Summary of main takeaways
- Suggested areas for deeper study""",
    NoteType.ACTION_ITEMS: """Extract and organize action items with:
- Clear task descriptions
- Checkboxes for tracking (using - [ ] format)
- Assignees if mentioned
- Due dates if mentioned
- Priority indicators if apparent
- Grouped by project or category if applicable""",
}


def build_enhance_prompt(topic: str, note_type: NoteType | str, source_content: str) -> str:
    """Prompt asking for an enhanced note of ``note_type`` built from ``source_content``.

    Raises ``ValueError`` for an unknown note type.
    """
    kind = NoteType(note_type)
    return f"""Based on the following source material from my notes, create an enhanced {kind.value} note about "{topic}".

## Source Material

{source_content}

## Instructions

{TYPE_INSTRUCTIONS[kind]}

## Output Format

Format the output as a complete Markdown note ready to save. Include:
1. A clear title as H1 (# Title)
2. Frontmatter with:
   - tags relevant to the content
   - source links using [[Note Name]] format
   - date created
3. Well-organized sections with appropriate headers
4. Wiki-links to source notes where relevant using [[Note Name]] format

Begin the note now:"""


def build_topic_summary_prompt(topic: str) -> str:
    return f"""Summarize everything you know about "{topic}" based on the provided context from my notes vault.

Structure your response as:
1. **Overview**: A brief 2-3 sentence overview
2. **Key Points**: The most important information about this topic
3. **Details**: Relevant details and examples
4. **Connections**: How this topic relates to other topics in the notes
5. **Sources**: List the notes you referenced using [[Note Name]] format

Be concise but thorough. If the context doesn't contain much information about this topic, say so."""


def build_qa_prompt(question: str) -> str:
    return f"""Answer the following question based on my notes vault:

"{question}"

Instructions:
- Answer based on the provided context
- Cite sources using [[Note Name]] format
- If the answer isn't in the context, say so clearly
- Be concise and direct"""


__all__ = [
    "NoteType",
    "TYPE_INSTRUCTIONS",
    "build_enhance_prompt",
    "build_topic_summary_prompt",
    "build_qa_prompt",
]
