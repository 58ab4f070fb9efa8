"""Turns a MethodSpec and caller parameters into a PreparedRequest."""

import logging
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from bigquery_client.errors import MissingParameterError
from bigquery_client.request.base import MethodSpec, PreparedRequest, RequestDescriptor
from bigquery_client.request.params import Params, as_mapping

logger = logging.getLogger(__name__)

DEFAULT_ROOT_URL = "https://www.googleapis.com/bigquery/v2/"
DEFAULT_UPLOAD_ROOT_URL = "https://www.googleapis.com/upload/bigquery/v2/"


def check_required(params: Mapping[str, Any], required: Iterable[str]) -> None:
    """Raise MissingParameterError naming every required key that is absent or None."""
    missing = [name for name in required if params.get(name) is None]
    if missing:
        raise MissingParameterError(missing)


def _path_value(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def build_url(
    spec: MethodSpec,
    params: Mapping[str, Any],
    root_url: str = DEFAULT_ROOT_URL,
    upload_root_url: str = DEFAULT_UPLOAD_ROOT_URL,
) -> str:
    """Substitute path parameters into the spec's relative path."""
    root = upload_root_url if spec.supports_media_upload else root_url
    path = spec.relative_path.format(**{name: _path_value(params[name]) for name in spec.path_params})
    return root.rstrip("/") + "/" + path


def prepare_request(
    spec: MethodSpec,
    params: Params | Mapping[str, Any] | None = None,
    root_url: str = DEFAULT_ROOT_URL,
    upload_root_url: str = DEFAULT_UPLOAD_ROOT_URL,
) -> PreparedRequest:
    """Validate, build the url and strip path parameters.

    The caller's mapping is copied first and never modified.
    """
    remaining = as_mapping(params)
    check_required(remaining, spec.required_params)

    url = build_url(spec, remaining, root_url=root_url, upload_root_url=upload_root_url)
    for name in spec.path_params:
        remaining.pop(name, None)

    logger.debug("Prepared %s %s %s", spec.method_id, spec.http_method, url)
    return PreparedRequest(
        descriptor=RequestDescriptor(url=url, method=spec.http_method),
        params=remaining,
        is_media=spec.supports_media_upload,
    )
