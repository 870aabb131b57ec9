"""Resource model, status handling and end-to-end helpers for a NATS cluster operator."""

__version__ = "0.1.0"