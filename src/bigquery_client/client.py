"""BigQuery API v2 client.

Each resource group (datasets, jobs, projects, tabledata, tables) is built
from the method table; every action runs the same prepare-then-dispatch path.
"""

import logging
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterator

import requests

from bigquery_client.config import ClientSettings
from bigquery_client.request.base import MethodSpec, PreparedRequest
from bigquery_client.request.builder import prepare_request
from bigquery_client.request.params import Params
from bigquery_client.request.table import METHOD_TABLE
from bigquery_client.transport.dispatch import Callback, create_api_request

logger = logging.getLogger(__name__)

ParamsArg = Params | Mapping[str, Any] | None


class ApiMethod:
    """A callable bound to one MethodSpec and one client."""

    def __init__(self, client: "Bigquery", spec: MethodSpec):
        self.client = client
        self.spec = spec
        self.__name__ = spec.action
        self.__doc__ = spec.description

    def prepare(self, params: ParamsArg = None) -> PreparedRequest:
        """Build the request without sending it."""
        return prepare_request(
            self.spec,
            params,
            root_url=self.client.settings.root_url,
            upload_root_url=self.client.settings.upload_root_url,
        )

    def __call__(self, params: ParamsArg = None, callback: Callback | None = None) -> Future:
        prepared = self.prepare(params)
        return self.client.dispatch(
            self.client,
            prepared.params,
            prepared.descriptor.model_dump(),
            prepared.is_media,
            callback,
        )

    def __repr__(self) -> str:
        return f"<ApiMethod {self.spec.method_id}>"


class Resource:
    """A group of actions, reachable as attributes or by item lookup.

    Not a Mapping subclass: ``get`` is an action name, not dict.get.
    """

    def __init__(self, client: "Bigquery", name: str, specs: Mapping[str, MethodSpec]):
        self.name = name
        self._methods = {action: ApiMethod(client, spec) for action, spec in specs.items()}
        for action, method in self._methods.items():
            setattr(self, action, method)

    def __getitem__(self, action: str) -> ApiMethod:
        return self._methods[action]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __contains__(self, action: object) -> bool:
        return action in self._methods

    def __repr__(self) -> str:
        return f"<Resource {self.name}: {', '.join(self._methods)}>"


class Bigquery:
    """Client for the BigQuery API v2.

    ``options`` and keyword overrides are merged into ClientSettings; values
    not given fall back to BIGQUERY_* environment variables.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        session: requests.Session | None = None,
        dispatch: Callable[..., Future] = create_api_request,
        **overrides: Any,
    ):
        merged = {**(options or {}), **overrides}
        self.settings = ClientSettings(**merged)
        self.session = session or requests.Session()
        self.dispatch = dispatch
        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="bigquery",
        )

        self.datasets = Resource(self, "datasets", METHOD_TABLE["datasets"])
        self.jobs = Resource(self, "jobs", METHOD_TABLE["jobs"])
        self.projects = Resource(self, "projects", METHOD_TABLE["projects"])
        self.tabledata = Resource(self, "tabledata", METHOD_TABLE["tabledata"])
        self.tables = Resource(self, "tables", METHOD_TABLE["tables"])
        logger.debug("Created client for %s", self.settings.root_url)

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        return self._executor.submit(fn, *args)

    def resource(self, name: str) -> Resource:
        if name not in METHOD_TABLE:
            raise KeyError(name)
        return getattr(self, name)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self) -> "Bigquery":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
