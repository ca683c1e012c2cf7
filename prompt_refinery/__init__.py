"""Prompt Refinery: conversational prompt-refinement service."""
