"""
Interview Coach Chat Gateway
Grounded interview-prep chat on top of a job-application tracker.

Architecture:
- PostgreSQL: tracked applications (read-only here)
- Groq LLM: chat completions through the OpenAI-compatible API
"""

__version__ = "1.0.0"
