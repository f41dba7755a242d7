"""Tests for the resource dispatcher."""

import pytest
from unittest.mock import Mock, patch

from checkmk_actions.api_client import CheckmkClient
from checkmk_actions.config import AdapterConfig
from checkmk_actions.dispatcher import ItemResult, ResourceDispatcher, run_action
from checkmk_actions.exceptions import (
    CheckmkError,
    NotFoundError,
    ParameterValidationError,
    UnsupportedActionError,
)
from checkmk_actions.parameters import ItemParameters


@pytest.fixture
def dispatcher(credentials):
    return ResourceDispatcher(credentials, default_limit=2)


@patch("checkmk_actions.transport.requests.Session.request")
class TestResourceDispatcher:

    def test_one_result_per_item(self, mock_request, dispatcher, make_response):
        mock_request.side_effect = [
            make_response(json_data={"id": "web01"}),
            make_response(json_data={"id": "web02"}),
        ]
        source = ItemParameters([{"hostName": "web01"}, {"hostName": "web02"}])

        results = dispatcher.execute("host", "get", source)

        assert [r.item_index for r in results] == [0, 1]
        assert [r.data["id"] for r in results] == ["web01", "web02"]

    def test_list_results_are_split(self, mock_request, dispatcher, make_response):
        mock_request.return_value = make_response(json_data={"value": [{"id": "a"}, {"id": "b"}, {"id": "c"}]})

        results = dispatcher.execute("hostGroup", "getMany", ItemParameters([{}]))

        # default_limit of the dispatcher applies
        assert [r.data["id"] for r in results] == ["a", "b"]
        assert all(r.item_index == 0 for r in results)

    def test_explicit_limit(self, mock_request, dispatcher, make_response):
        mock_request.return_value = make_response(json_data={"value": [{"id": "a"}, {"id": "b"}, {"id": "c"}]})

        results = dispatcher.execute("hostGroup", "getMany", ItemParameters([{"limit": 1}]))

        assert len(results) == 1

    def test_validation_happens_before_network(self, mock_request, dispatcher):
        with pytest.raises(ParameterValidationError) as exc_info:
            dispatcher.execute("host", "create", ItemParameters([{"hostName": "bad host!"}]))

        assert mock_request.call_count == 0
        assert exc_info.value.resource == "host"
        assert exc_info.value.operation == "create"
        assert "hostName" in str(exc_info.value) or "host_name" in str(exc_info.value)

    def test_missing_required_parameter(self, mock_request, dispatcher):
        with pytest.raises(ParameterValidationError):
            dispatcher.execute("host", "get", ItemParameters([{}]))

        assert mock_request.call_count == 0

    def test_unsupported_action(self, mock_request, dispatcher):
        with pytest.raises(UnsupportedActionError) as exc_info:
            dispatcher.execute("host", "explode", ItemParameters([{}]))

        assert "Supported operations" in str(exc_info.value)
        assert mock_request.call_count == 0

    def test_failure_aborts_without_continue_on_fail(self, mock_request, dispatcher, make_response):
        mock_request.return_value = make_response(status_code=404, json_data={"title": "Not Found"})

        with pytest.raises(NotFoundError):
            dispatcher.execute("host", "get", ItemParameters([{"hostName": "ghost"}, {"hostName": "web01"}]))

        assert mock_request.call_count == 1

    def test_continue_on_fail_records_errors(self, mock_request, dispatcher, make_response):
        mock_request.side_effect = [
            make_response(status_code=404, json_data={"title": "Not Found"}),
            make_response(json_data={"id": "web01"}),
        ]
        source = ItemParameters(
            [{"hostName": "ghost"}, {}, {"hostName": "web01"}],
            continue_on_fail=True,
        )

        results = dispatcher.execute("host", "get", source)

        assert [r.item_index for r in results] == [0, 1, 2]
        assert "Not Found" in results[0].error
        assert results[1].error is not None
        assert results[2].data == {"id": "web01"}
        assert mock_request.call_count == 2

    def test_unexpected_error_recorded_with_continue_on_fail(self, mock_request, dispatcher, make_response):
        mock_request.return_value = make_response(json_data={"id": "web01"})
        source = ItemParameters([{"hostName": "web01"}, {"hostName": "web01"}], continue_on_fail=True)
        read = source.get_parameter

        def flaky_read(name, item_index, default):
            if item_index == 0:
                raise RuntimeError("parameter store offline")
            return read(name, item_index, default)

        source.get_parameter = flaky_read

        results = dispatcher.execute("host", "get", source)

        assert [r.item_index for r in results] == [0, 1]
        assert "parameter store offline" in results[0].error
        assert results[1].data == {"id": "web01"}

    def test_unexpected_error_is_wrapped(self, mock_request, dispatcher):
        source = ItemParameters([{"hostName": "web01"}])
        source.get_parameter = Mock(side_effect=RuntimeError("parameter store offline"))

        with pytest.raises(CheckmkError) as exc_info:
            dispatcher.execute("host", "get", source)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "host.get" in str(exc_info.value)
        mock_request.assert_not_called()

    def test_new_client_per_execution(self, mock_request, dispatcher, make_response):
        mock_request.return_value = make_response(json_data={"id": "web01"})

        with patch("checkmk_actions.dispatcher.CheckmkClient", wraps=CheckmkClient) as client_cls:
            dispatcher.execute("host", "get", ItemParameters([{"hostName": "web01"}]))
            dispatcher.execute("host", "get", ItemParameters([{"hostName": "web01"}]))

        assert client_cls.call_count == 2


def test_item_result_to_dict():
    assert ItemResult(3, data={"id": "x"}).to_dict() == {"json": {"id": "x"}, "pairedItem": {"item": 3}}
    assert ItemResult(1, error="boom").to_dict() == {"json": {"error": "boom"}, "pairedItem": {"item": 1}}


@patch("checkmk_actions.transport.requests.Session.request")
def test_run_action(mock_request, credentials, make_response):
    mock_request.return_value = make_response(json_data={"versions": {}, "id": "main"})
    config = AdapterConfig(credentials=credentials, continue_on_fail=True)

    results = run_action(config, "site", "get", [{"siteName": "main"}])

    assert results == [{"json": {"versions": {}, "id": "main"}, "pairedItem": {"item": 0}}]
    assert mock_request.call_args.kwargs["url"].endswith("/objects/site/main")
