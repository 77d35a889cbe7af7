"""LLM integration layer.

This package is intentionally small:
- One provider (Gemini `generateContent`), one call per request.
- Configurable via environment variables.
- Treated as a pure/stateless function by callers.
"""
