"""
Lesson Assistant core for the "Art of the Prompt" micro-learning player.

Provides the non-UI pieces of the course player:
- Resilient text-generation client (Gemini generateContent) with
  bounded exponential-backoff retry, jitter and cancellation
- Prompt composition from canned prompts, lesson titles and learner notes
- Per-learner course progress on top of a pluggable key-value store

Architecture: asyncio + httpx client, tagged call results, Redis/in-memory persistence
"""

__version__ = "0.1.0"
