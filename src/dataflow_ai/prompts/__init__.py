"""Prompt builders for dataflow-ai."""

from dataflow_ai.prompts.generation import (
    PromptBuildError,
    PromptBundle,
    build_api_documentation_prompt,
    build_dfd_diagram_prompt,
    build_dfd_documentation_prompt,
    build_er_diagram_prompt,
    build_er_document_prompt,
)

__all__ = [
    "PromptBuildError",
    "PromptBundle",
    "build_api_documentation_prompt",
    "build_dfd_diagram_prompt",
    "build_dfd_documentation_prompt",
    "build_er_diagram_prompt",
    "build_er_document_prompt",
]
