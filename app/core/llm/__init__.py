"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (messages carry user-written canvas text).
- Configurable via environment variables, with a per-request key override.
- Treated as a pure/stateless function by callers.
"""
