"""Contextual knowledge retrieval and maintenance engine."""
