"""Form submission over HTTP.

Sends converted form data with httpx and decodes the server's JSON reply.
A reply is either a success payload (optionally with ``redirect``) or
``{"validationErrors": {field: [messages], "base": [messages]}}``.
"""

import logging
from typing import Any, Callable

import httpx

from formguard.errors import SubmissionError
from formguard.forms.data import MultipartBody

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def _request_kwargs(options: dict[str, Any], data: Any) -> dict[str, Any]:
    method = options["method"].upper()
    send_type = options.get("sendType", "serialize")
    kwargs: dict[str, Any] = {"headers": {}}

    if method == "GET":
        if isinstance(data, str) and data:
            separator = "&" if "?" in options["url"] else "?"
            kwargs["url"] = f"{options['url']}{separator}{data}"
        return kwargs

    if isinstance(data, MultipartBody):
        kwargs["data"] = dict_of_lists(data.fields)
        kwargs["files"] = data.files
    elif send_type == "json":
        kwargs["content"] = data
        kwargs["headers"]["Content-Type"] = JSON_CONTENT_TYPE
    else:
        kwargs["content"] = data
        kwargs["headers"]["Content-Type"] = options.get(
            "enctype", "application/x-www-form-urlencoded"
        )
    return kwargs


def dict_of_lists(pairs: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group repeated multipart field names the way httpx expects them."""
    grouped: dict[str, list[str]] = {}
    for key, value in pairs:
        grouped.setdefault(key, []).append(value)
    return grouped


def send(
    options: dict[str, Any],
    data: Any,
    translate: Callable[[str], str] = lambda text: text,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Submit form data.

    Args:
        options: ``ajax`` options (url, method, enctype, sendType)
        data: Output of ``convert_data`` for ``options["sendType"]``
        translate: Translation for transport-level messages
        client: httpx client to use; a short-lived one is created if omitted

    Returns:
        Decoded JSON reply. An unparsable 200 reply becomes a ``base``
        validation error.

    Raises:
        SubmissionError: For non-200 statuses and transport failures
    """
    method = options["method"].upper()
    url = options["url"]
    kwargs = _request_kwargs(options, data)
    target = kwargs.pop("url", url)

    owns_client = client is None
    http = client or httpx.Client()
    try:
        response = http.request(method, target, **kwargs)
    except httpx.HTTPError as e:
        raise SubmissionError(method, url, 0, str(e)) from e
    finally:
        if owns_client:
            http.close()

    if response.status_code != 200:
        raise SubmissionError(method, url, response.status_code, response.reason_phrase)

    try:
        payload = response.json()
    except ValueError:
        logger.warning("%s %s returned a body that is not JSON", method, url)
        return {"validationErrors": {"base": [translate("JSON parsing error")]}}

    if not isinstance(payload, dict):
        return {"data": payload}
    return payload
