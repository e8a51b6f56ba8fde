"""
Unit tests for the Lesson Assistant.

Test individual components in isolation:
- Retry policy and cancellation token
- Envelope codec and attempt classifier
- Resilient request client (httpx MockTransport)
- Prompt builder and study assistant
- Course progress and key-value stores
"""
