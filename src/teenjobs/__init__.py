"""Teen job marketplace services: filtering, application lifecycle and profiles."""

__version__ = "0.1.0"
