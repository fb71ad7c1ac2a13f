"""
Common building blocks used by the note sorter.

This package contains reusable, domain-agnostic code:

- configuration loading (environment variables)
- retry/backoff helpers
- a windowed threadpool batch loop
- logging configuration
- the OpenAI-compatible chat completion call
"""
