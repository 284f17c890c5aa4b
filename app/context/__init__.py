"""Section context module for listing document generation.

This module provides:
- Context aggregation across issuer, listing and document records, uploads and memory
- Field mode classification and missing-data detection
- Deterministic mode-specific prompt composition
"""

from app.context.prompt_composer import compose_prompt, create_system_message, render_template
from app.context.section_context import ContextAggregator

__all__ = [
    "ContextAggregator",
    "compose_prompt",
    "create_system_message",
    "render_template",
]
