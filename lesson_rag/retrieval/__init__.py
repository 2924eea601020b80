"""Retrieval of grounding context at query time."""

from lesson_rag.retrieval.prompt import build_system_prompt
from lesson_rag.retrieval.service import RetrievalService, format_context

__all__ = ["RetrievalService", "build_system_prompt", "format_context"]
