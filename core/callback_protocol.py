"""
callback_data protocol for inline buttons.

Format: {service_id}:{action}:{payload}
Examples:
  - "cs:skip": skip an optional form field
  - "cs:start": start the test
  - "cs:answer:12:3": answer question 12 with value 3
  - "cs:submit": submit all answers

Telegram limits callback_data to 64 bytes.
"""

SERVICE_ID = "cs"

ACTION_SKIP = "skip"
ACTION_START = "start"
ACTION_ANSWER = "answer"
ACTION_SUBMIT = "submit"


def encode(service_id: str, action: str, payload: str = "") -> str:
    """Build callback_data.

    Args:
        service_id: service prefix ("cs")
        action: action ("skip", "answer", ...)
        payload: extra data (ids, values)
    """
    if payload:
        return f"{service_id}:{action}:{payload}"
    return f"{service_id}:{action}"


def decode(callback_data: str) -> tuple[str, str, str]:
    """Split callback_data.

    Returns:
        (service_id, action, payload).
        If the format does not match, returns ("", "", callback_data).
    """
    parts = callback_data.split(":", 2)
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    if len(parts) == 2:
        return parts[0], parts[1], ""
    return "", "", callback_data


def matches(callback_data: str, service_id: str = SERVICE_ID) -> bool:
    """Does the callback belong to the given service?"""
    decoded_service, _, _ = decode(callback_data)
    return decoded_service == service_id


def encode_answer(question_id: int, value: int) -> str:
    return encode(SERVICE_ID, ACTION_ANSWER, f"{question_id}:{value}")


def decode_answer(payload: str) -> tuple[int, int]:
    """Parse the payload of an answer callback.

    Raises:
        ValueError: payload is not "{question_id}:{value}"
    """
    question_id, _, value = payload.partition(":")
    return int(question_id), int(value)
