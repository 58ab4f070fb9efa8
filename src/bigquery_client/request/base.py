"""Descriptor models for BigQuery API methods and the requests built from them.

Every entry in the method table is a MethodSpec; calling a resource method
turns a MethodSpec plus caller parameters into a PreparedRequest.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class MethodSpec(BaseModel):
    """Static description of a single API method."""

    model_config = ConfigDict(frozen=True)

    method_id: str  # bigquery.datasets.get
    http_method: HttpMethod
    relative_path: str  # projects/{projectId}/datasets/{datasetId}
    path_params: tuple[str, ...] = ()
    query_params: tuple[str, ...] = ()
    required_params: tuple[str, ...] = ()
    request_field: str = ""  # "resource" when the method takes a JSON body
    supports_media_upload: bool = False
    description: str = ""

    @property
    def resource(self) -> str:
        return self.method_id.split(".")[1]

    @property
    def action(self) -> str:
        return self.method_id.split(".")[2]


class RequestDescriptor(BaseModel):
    """The url + HTTP method pair handed to the dispatcher."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod


class PreparedRequest(BaseModel):
    """A descriptor together with the parameters left after path substitution."""

    descriptor: RequestDescriptor
    params: dict[str, Any]
    is_media: bool = False
