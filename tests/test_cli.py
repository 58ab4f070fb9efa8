import json
from unittest.mock import patch, MagicMock

import yaml
from click.testing import CliRunner

from bigquery_client.cli import main, _parse_params
from bigquery_client.client import Bigquery


def _client_factory(session):
    def make(options=None):
        return Bigquery(options, session=session, _env_file=None)
    return make


def _json_response(body, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = "OK"
    resp.content = b"{}"
    resp.json.return_value = body
    return resp


class TestParseParams:
    def test_pairs(self):
        assert _parse_params(("projectId=p1", "pageToken=a=b")) == {"projectId": "p1", "pageToken": "a=b"}

    def test_bad_pair(self):
        runner = CliRunner()
        result = runner.invoke(main, ["describe", "datasets.get", "-p", "projectId"])
        assert result.exit_code != 0
        assert "key=value" in result.output


class TestCliMethods:
    def test_lists_all_methods(self):
        result = CliRunner().invoke(main, ["methods"])
        assert result.exit_code == 0
        assert "datasets.delete" in result.output
        assert "jobs.insert" in result.output
        assert "(media upload)" in result.output
        assert len(result.output.strip().splitlines()) == 20

    def test_filter_by_resource(self):
        result = CliRunner().invoke(main, ["methods", "--resource", "tabledata"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 2
        assert all(line.startswith("tabledata.") for line in lines)


class TestCliDescribe:
    def test_describe_yaml(self):
        result = CliRunner().invoke(main, [
            "describe", "datasets.delete", "-p", "projectId=p1", "-p", "datasetId=d1",
        ])
        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["url"] == "https://www.googleapis.com/bigquery/v2/projects/p1/datasets/d1"
        assert data["method"] == "DELETE"
        assert data["params"] == {}

    def test_describe_json_with_body(self, tmp_path):
        body = tmp_path / "table.json"
        body.write_text(json.dumps({"tableReference": {"tableId": "t1"}}))
        result = CliRunner().invoke(main, [
            "describe", "bigquery.tables.insert", "-p", "projectId=p1", "-p", "datasetId=d1",
            "--body", str(body), "--format", "json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["method"] == "POST"
        assert data["params"]["resource"] == {"tableReference": {"tableId": "t1"}}

    def test_describe_missing_params(self):
        result = CliRunner().invoke(main, ["describe", "tables.get", "-p", "projectId=p1"])
        assert result.exit_code == 1
        assert "datasetId, tableId" in result.output

    def test_describe_unknown_method(self):
        result = CliRunner().invoke(main, ["describe", "tables.explode"])
        assert result.exit_code == 1
        assert "Unknown method: tables.explode" in result.output


class TestCliCall:
    def test_call_prints_response(self):
        session = MagicMock()
        session.request.return_value = _json_response({"kind": "bigquery#projectList", "totalItems": 0})

        with patch("bigquery_client.cli.Bigquery", side_effect=_client_factory(session)):
            result = CliRunner().invoke(main, ["call", "projects.list", "-p", "maxResults=5"])

        assert result.exit_code == 0
        assert json.loads(result.output)["kind"] == "bigquery#projectList"
        assert session.request.call_args.kwargs["params"] == {"maxResults": "5"}

    def test_call_api_error(self):
        session = MagicMock()
        session.request.return_value = _json_response(
            {"error": {"code": 404, "message": "Not found: Dataset p1:nope"}}, status_code=404,
        )

        with patch("bigquery_client.cli.Bigquery", side_effect=_client_factory(session)):
            result = CliRunner().invoke(main, ["call", "datasets.get", "-p", "projectId=p1", "-p", "datasetId=nope"])

        assert result.exit_code == 1
        assert "Not found: Dataset p1:nope" in result.output

    def test_call_with_options_and_media(self, tmp_path):
        options = tmp_path / "options.yaml"
        options.write_text("access_token: tok\n")
        media = tmp_path / "rows.csv"
        media.write_bytes(b"1,a\n2,b\n")
        body = tmp_path / "job.json"
        body.write_text(json.dumps({"configuration": {"load": {}}}))

        session = MagicMock()
        session.request.return_value = _json_response({"kind": "bigquery#job"})

        with patch("bigquery_client.cli.Bigquery", side_effect=_client_factory(session)):
            result = CliRunner().invoke(main, [
                "call", "jobs.insert", "-p", "projectId=p1",
                "--body", str(body), "--media", str(media), "--options", str(options),
            ])

        assert result.exit_code == 0
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == "https://www.googleapis.com/upload/bigquery/v2/projects/p1/jobs"
        assert kwargs["params"]["uploadType"] == "multipart"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert b"1,a\n2,b\n" in kwargs["data"]

    def test_call_invalid_json_body(self, tmp_path):
        body = tmp_path / "job.json"
        body.write_text("{not json")
        result = CliRunner().invoke(main, ["call", "jobs.query", "-p", "projectId=p1", "--body", str(body)])
        assert result.exit_code == 1
        assert "invalid JSON body" in result.output

    def test_call_options_not_a_mapping(self, tmp_path):
        options = tmp_path / "options.yaml"
        options.write_text("- a\n- b\n")
        result = CliRunner().invoke(main, ["call", "projects.list", "--options", str(options)])
        assert result.exit_code == 1
        assert "Invalid client options" in result.output

    def test_call_options_invalid_value(self, tmp_path):
        options = tmp_path / "options.yaml"
        options.write_text("timeout_seconds: 0\n")
        session = MagicMock()
        with patch("bigquery_client.cli.Bigquery", side_effect=_client_factory(session)):
            result = CliRunner().invoke(main, ["call", "projects.list", "--options", str(options)])
        assert result.exit_code == 1
        assert "Invalid client options" in result.output
        session.request.assert_not_called()
