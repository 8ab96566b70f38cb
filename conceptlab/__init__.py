"""conceptlab - generative concept studio backed by Google GenAI."""

__version__ = "0.1.0"
