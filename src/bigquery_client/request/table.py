"""Resource method table for BigQuery API v2.

Each (resource, action) pair maps to one immutable MethodSpec. The table is
built once at import time and never modified.
"""

from types import MappingProxyType
from typing import Iterator, Mapping

from bigquery_client.errors import UnknownMethodError
from bigquery_client.request.base import HttpMethod, MethodSpec

_DATASET = "projects/{projectId}/datasets/{datasetId}"
_TABLE = _DATASET + "/tables/{tableId}"
_PAGING = ("maxResults", "pageToken")


def _method(
    method_id: str,
    http_method: HttpMethod,
    relative_path: str,
    path_params: tuple[str, ...] = (),
    query_params: tuple[str, ...] = (),
    request_field: str = "",
    supports_media_upload: bool = False,
    description: str = "",
) -> MethodSpec:
    return MethodSpec(
        method_id=method_id,
        http_method=http_method,
        relative_path=relative_path,
        path_params=path_params,
        query_params=query_params,
        required_params=path_params,
        request_field=request_field,
        supports_media_upload=supports_media_upload,
        description=description,
    )


_SPECS = [
    # datasets
    _method(
        "bigquery.datasets.delete", "DELETE", _DATASET,
        path_params=("projectId", "datasetId"),
        query_params=("deleteContents",),
        description="Deletes the dataset specified by the datasetId value.",
    ),
    _method(
        "bigquery.datasets.get", "GET", _DATASET,
        path_params=("projectId", "datasetId"),
        description="Returns the dataset specified by datasetId.",
    ),
    _method(
        "bigquery.datasets.insert", "POST", "projects/{projectId}/datasets",
        path_params=("projectId",),
        request_field="resource",
        description="Creates a new empty dataset.",
    ),
    _method(
        "bigquery.datasets.list", "GET", "projects/{projectId}/datasets",
        path_params=("projectId",),
        query_params=("all",) + _PAGING,
        description="Lists the datasets in the specified project to which the caller has read access.",
    ),
    _method(
        "bigquery.datasets.patch", "PATCH", _DATASET,
        path_params=("projectId", "datasetId"),
        request_field="resource",
        description="Updates only the fields provided in the submitted dataset resource.",
    ),
    _method(
        "bigquery.datasets.update", "PUT", _DATASET,
        path_params=("projectId", "datasetId"),
        request_field="resource",
        description="Replaces the entire dataset resource.",
    ),
    # jobs
    _method(
        "bigquery.jobs.get", "GET", "projects/{projectId}/jobs/{jobId}",
        path_params=("projectId", "jobId"),
        description="Retrieves the specified job by ID.",
    ),
    _method(
        "bigquery.jobs.getQueryResults", "GET", "projects/{projectId}/queries/{jobId}",
        path_params=("projectId", "jobId"),
        query_params=_PAGING + ("startIndex", "timeoutMs"),
        description="Retrieves the results of a query job.",
    ),
    _method(
        "bigquery.jobs.insert", "POST", "projects/{projectId}/jobs",
        path_params=("projectId",),
        request_field="resource",
        supports_media_upload=True,
        description="Starts a new asynchronous job.",
    ),
    _method(
        "bigquery.jobs.list", "GET", "projects/{projectId}/jobs",
        path_params=("projectId",),
        query_params=("allUsers",) + _PAGING + ("projection", "stateFilter"),
        description="Lists the jobs in the specified project that were started by the user.",
    ),
    _method(
        "bigquery.jobs.query", "POST", "projects/{projectId}/queries",
        path_params=("projectId",),
        request_field="resource",
        description="Runs a SQL query synchronously and returns results if it completes within the timeout.",
    ),
    # projects
    _method(
        "bigquery.projects.list", "GET", "projects",
        query_params=_PAGING,
        description="Lists the projects to which the caller has at least read access.",
    ),
    # tabledata
    _method(
        "bigquery.tabledata.insertAll", "POST", _TABLE + "/insertAll",
        path_params=("projectId", "datasetId", "tableId"),
        request_field="resource",
        description="Streams rows into a table without running a load job.",
    ),
    _method(
        "bigquery.tabledata.list", "GET", _TABLE + "/data",
        path_params=("projectId", "datasetId", "tableId"),
        query_params=_PAGING + ("startIndex",),
        description="Retrieves table data from a specified set of rows.",
    ),
    # tables
    _method(
        "bigquery.tables.delete", "DELETE", _TABLE,
        path_params=("projectId", "datasetId", "tableId"),
        description="Deletes the table and all of its data.",
    ),
    _method(
        "bigquery.tables.get", "GET", _TABLE,
        path_params=("projectId", "datasetId", "tableId"),
        description="Gets the table resource, which describes the structure of the table.",
    ),
    _method(
        "bigquery.tables.insert", "POST", _DATASET + "/tables",
        path_params=("projectId", "datasetId"),
        request_field="resource",
        description="Creates a new, empty table in the dataset.",
    ),
    _method(
        "bigquery.tables.list", "GET", _DATASET + "/tables",
        path_params=("projectId", "datasetId"),
        query_params=_PAGING,
        description="Lists all tables in the specified dataset.",
    ),
    _method(
        "bigquery.tables.patch", "PATCH", _TABLE,
        path_params=("projectId", "datasetId", "tableId"),
        request_field="resource",
        description="Updates only the fields provided in the submitted table resource.",
    ),
    _method(
        "bigquery.tables.update", "PUT", _TABLE,
        path_params=("projectId", "datasetId", "tableId"),
        request_field="resource",
        description="Replaces the entire table resource.",
    ),
]


def _build_table(specs: list[MethodSpec]) -> Mapping[str, Mapping[str, MethodSpec]]:
    groups: dict[str, dict[str, MethodSpec]] = {}
    for spec in specs:
        groups.setdefault(spec.resource, {})[spec.action] = spec
    return MappingProxyType({name: MappingProxyType(group) for name, group in groups.items()})


METHOD_TABLE = _build_table(_SPECS)

RESOURCES = tuple(METHOD_TABLE)


def get_method_spec(resource: str, action: str) -> MethodSpec:
    """Look up the MethodSpec for ``resource.action``."""
    try:
        return METHOD_TABLE[resource][action]
    except KeyError:
        raise UnknownMethodError(f"{resource}.{action}") from None


def parse_method_name(name: str) -> MethodSpec:
    """Resolve ``datasets.get`` or ``bigquery.datasets.get`` to its MethodSpec."""
    parts = name.split(".")
    if len(parts) == 3 and parts[0] == "bigquery":
        parts = parts[1:]
    if len(parts) != 2:
        raise UnknownMethodError(name)
    return get_method_spec(parts[0], parts[1])


def iter_method_specs() -> Iterator[MethodSpec]:
    for group in METHOD_TABLE.values():
        yield from group.values()
