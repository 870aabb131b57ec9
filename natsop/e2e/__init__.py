"""Retry, logging and fixture helpers for end-to-end checks of a NATS deployment."""