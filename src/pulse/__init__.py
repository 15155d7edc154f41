"""pulse - one-shot host metrics dashboard with heavy-process triage."""

__version__ = "0.1.0"
