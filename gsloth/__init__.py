"""Gaunt Sloth: an LLM assistant for reviews, questions and chat in the terminal."""

__version__ = "0.1.0"
