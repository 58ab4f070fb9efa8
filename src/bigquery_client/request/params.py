"""Typed parameter sets, one model per API method.

Field names follow the wire names of the API. Unknown keys are kept so that
standard query parameters (fields, quotaUser, prettyPrint, ...) pass through.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


class Params(BaseModel):
    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    def to_mapping(self) -> dict[str, Any]:
        # media is forwarded as the caller's object; dumping would wrap file-likes
        data = self.model_dump(exclude_none=True, exclude={"media"})
        media = getattr(self, "media", None)
        if media is not None:
            data["media"] = media
        return data


class _Paged(Params):
    maxResults: int | None = None
    pageToken: str | None = None


class _WithBody(Params):
    resource: dict[str, Any] | None = None


# datasets

class DatasetsDeleteParams(Params):
    projectId: str | None = None
    datasetId: str | None = None
    deleteContents: bool | None = None


class DatasetsGetParams(Params):
    projectId: str | None = None
    datasetId: str | None = None


class DatasetsInsertParams(_WithBody):
    projectId: str | None = None


class DatasetsListParams(_Paged):
    projectId: str | None = None
    all: bool | None = None


class DatasetsPatchParams(_WithBody):
    projectId: str | None = None
    datasetId: str | None = None


class DatasetsUpdateParams(DatasetsPatchParams):
    pass


# jobs

class JobsGetParams(Params):
    projectId: str | None = None
    jobId: str | None = None


class JobsGetQueryResultsParams(_Paged):
    projectId: str | None = None
    jobId: str | None = None
    startIndex: int | None = None
    timeoutMs: int | None = None


class JobsInsertParams(_WithBody):
    projectId: str | None = None
    media: Any = None


class JobsListParams(_Paged):
    projectId: str | None = None
    allUsers: bool | None = None
    projection: str | None = None  # full / minimal
    stateFilter: str | list[str] | None = None  # done / pending / running


class JobsQueryParams(_WithBody):
    projectId: str | None = None


# projects

class ProjectsListParams(_Paged):
    pass


# tabledata

class TabledataInsertAllParams(_WithBody):
    projectId: str | None = None
    datasetId: str | None = None
    tableId: str | None = None


class TabledataListParams(_Paged):
    projectId: str | None = None
    datasetId: str | None = None
    tableId: str | None = None
    startIndex: int | None = None


# tables

class TablesDeleteParams(Params):
    projectId: str | None = None
    datasetId: str | None = None
    tableId: str | None = None


class TablesGetParams(TablesDeleteParams):
    pass


class TablesInsertParams(_WithBody):
    projectId: str | None = None
    datasetId: str | None = None


class TablesListParams(_Paged):
    projectId: str | None = None
    datasetId: str | None = None


class TablesPatchParams(_WithBody):
    projectId: str | None = None
    datasetId: str | None = None
    tableId: str | None = None


class TablesUpdateParams(TablesPatchParams):
    pass


PARAMS_MODELS: dict[str, type[Params]] = {
    "datasets.delete": DatasetsDeleteParams,
    "datasets.get": DatasetsGetParams,
    "datasets.insert": DatasetsInsertParams,
    "datasets.list": DatasetsListParams,
    "datasets.patch": DatasetsPatchParams,
    "datasets.update": DatasetsUpdateParams,
    "jobs.get": JobsGetParams,
    "jobs.getQueryResults": JobsGetQueryResultsParams,
    "jobs.insert": JobsInsertParams,
    "jobs.list": JobsListParams,
    "jobs.query": JobsQueryParams,
    "projects.list": ProjectsListParams,
    "tabledata.insertAll": TabledataInsertAllParams,
    "tabledata.list": TabledataListParams,
    "tables.delete": TablesDeleteParams,
    "tables.get": TablesGetParams,
    "tables.insert": TablesInsertParams,
    "tables.list": TablesListParams,
    "tables.patch": TablesPatchParams,
    "tables.update": TablesUpdateParams,
}


def as_mapping(params: Params | Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a shallow copy of the caller's parameters as a plain dict."""
    if params is None:
        return {}
    if isinstance(params, Params):
        return params.to_mapping()
    return dict(params)
