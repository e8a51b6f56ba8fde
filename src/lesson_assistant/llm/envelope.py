"""
Wire envelope for the Gemini generateContent API.

Request body:
{
    "contents": [
        {"role": "user", "parts": [{"text": "<payload>"}]}
    ]
}

Response body (only the fields we read):
{
    "candidates": [
        {"content": {"parts": [{"text": "<result>"}], "role": "model"}}
    ]
}
"""

from typing import Any, Dict, Optional


def encode_request(payload: str) -> Dict[str, Any]:
    """Wrap a prompt as a single-turn user message."""
    return {"contents": [{"role": "user", "parts": [{"text": payload}]}]}


def decode_request(body: Dict[str, Any]) -> str:
    """
    Recover the prompt from an envelope built by ``encode_request``.

    Multi-part user turns are joined in order.

    Raises:
        ValueError: If the body is not a single-turn text envelope
    """
    try:
        contents = body["contents"]
        parts = contents[0]["parts"]
        texts = [part["text"] for part in parts]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Malformed generateContent envelope: {e!r}") from e

    if len(contents) != 1 or not texts or not all(isinstance(t, str) for t in texts):
        raise ValueError("Expected exactly one user turn with text parts")
    return "".join(texts)


def extract_text(response_data: Any) -> Optional[str]:
    """
    Pull ``candidates[0].content.parts[0].text`` out of a response.

    Returns None when any level is missing, has the wrong type, or the text
    is blank. Never raises: a malformed success body is the caller's
    "no content" case, not an error.
    """
    if not isinstance(response_data, dict):
        return None

    candidates = response_data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None

    text = parts[0].get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    return text
