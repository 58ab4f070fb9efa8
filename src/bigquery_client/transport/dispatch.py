"""Request dispatch: performs the HTTP call described by a resource method.

``create_api_request`` is the single collaborator every resource method
forwards to. It returns a ``concurrent.futures.Future`` immediately; the HTTP
exchange runs on the client's worker pool and the optional callback receives
``(error, body)`` exactly once from that worker thread.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Mapping, Protocol

import requests

from bigquery_client.config import ClientSettings
from bigquery_client.errors import ApiError, TransportError
from bigquery_client.transport.media import DEFAULT_MEDIA_TYPE, encode_multipart_related, read_media

logger = logging.getLogger(__name__)

Callback = Callable[[BaseException | None, Any], None]


class ClientContext(Protocol):
    settings: ClientSettings
    session: requests.Session

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future: ...


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    return value


def build_http_kwargs(
    settings: ClientSettings,
    params: Mapping[str, Any],
    options: Mapping[str, str],
    is_media: bool,
) -> dict[str, Any]:
    """Translate forwarded params into keyword arguments for ``Session.request``."""
    params = dict(params)
    resource = params.pop("resource", None)
    media = params.pop("media", None)

    headers = {"User-Agent": settings.user_agent}
    if settings.access_token:
        headers["Authorization"] = f"Bearer {settings.access_token}"
    if settings.api_key and "key" not in params:
        params["key"] = settings.api_key

    kwargs: dict[str, Any] = {
        "method": options["method"],
        "url": options["url"],
        "headers": headers,
        "timeout": settings.timeout_seconds,
    }

    if is_media and media is not None:
        if resource is not None:
            params["uploadType"] = "multipart"
            body, content_type = encode_multipart_related(resource, media)
        else:
            params["uploadType"] = "media"
            body, content_type = read_media(media), DEFAULT_MEDIA_TYPE
        headers["Content-Type"] = content_type
        kwargs["data"] = body
    elif resource is not None:
        kwargs["json"] = resource

    kwargs["params"] = {name: _query_value(value) for name, value in params.items() if value is not None}
    return kwargs


def parse_response(response: requests.Response) -> Any:
    """Return the decoded body, raising ApiError for error statuses."""
    body: Any = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = response.text

    if response.status_code >= 400:
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            message = error.get("message") or response.reason or ""
            errors = error.get("errors") or []
        else:
            message = body if isinstance(body, str) and body else (response.reason or "")
            errors = []
        raise ApiError(response.status_code, message, errors=errors, body=body)
    return body


def _perform(
    client: ClientContext,
    params: dict[str, Any],
    options: Mapping[str, str],
    is_media: bool,
    callback: Callback | None,
) -> Any:
    method, url = options["method"], options["url"]
    error: Exception | None = None
    body: Any = None
    try:
        kwargs = build_http_kwargs(client.settings, params, options, is_media)
        response = client.session.request(**kwargs)
        body = parse_response(response)
    except ApiError as e:
        logger.warning("%s %s failed: %s", method, url, e)
        error = e
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, url, e)
        error = TransportError(str(e))
        error.__cause__ = e
    except Exception as e:
        logger.warning("%s %s could not be sent: %s", method, url, e)
        error = e

    if callback is not None:
        try:
            callback(error, body)
        except Exception:
            logger.exception("Callback for %s %s raised", method, url)

    if error is not None:
        raise error
    return body


def create_api_request(
    client: ClientContext,
    params: Mapping[str, Any],
    options: Mapping[str, str],
    is_media: bool,
    callback: Callback | None = None,
) -> Future:
    """Send the request on the client's worker pool.

    ``options`` holds ``url`` and ``method``. Encoding, the HTTP exchange and
    response parsing all run on the worker; the returned future resolves to
    the parsed response body or raises the same error the callback receives.
    """
    logger.debug("Dispatching %s %s", options["method"], options["url"])
    return client.submit(_perform, client, dict(params), dict(options), is_media, callback)
