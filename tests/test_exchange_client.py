"""Tests for the requests based exchange client."""

import json
from unittest.mock import Mock

import pytest
import requests

import exchange_client
from exchange_client import ExchangeClient


def make_response(status_code, payload=None, text=""):
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = text.encode("utf-8")
    response.url = "http://test"
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ExchangeClient(base_url="http://test/", session=session)


class TestExchangeClient:
    """Test ExchangeClient requests and error handling."""

    def test_create_exchange(self, client, session):
        session.request.return_value = make_response(201, {"id": 1, "secret": "RarityBoopsDerpy"})

        data, error = client.create_exchange("Books", user_max=3)

        assert error is None
        assert data["secret"] == "RarityBoopsDerpy"
        session.request.assert_called_once_with(
            method="POST",
            url="http://test/api/v1/exchanges/",
            params=None,
            json={"title": "Books", "user_max": 3},
            headers={},
            timeout=15,
        )

    def test_secret_is_sent_as_bearer_token(self, client, session):
        session.request.return_value = make_response(200, {"detail": "Stage updated", "stage": "Voting"})

        data, error = client.change_stage(1, "RarityBoopsDerpy", "Voting")

        assert error is None
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PATCH"
        assert kwargs["url"] == "http://test/api/v1/exchanges/1/stage"
        assert kwargs["json"] == {"stage": "Voting"}
        assert kwargs["headers"] == {"Authorization": "Bearer RarityBoopsDerpy"}

    def test_cast_votes_body(self, client, session):
        session.request.return_value = make_response(200, {"detail": "Votes accepted", "votes": 1})

        client.cast_votes(1, "bob", [(1, ["A", "B"])])

        assert session.request.call_args.kwargs["json"] == {
            "name": "bob",
            "votes": [{"priority": 1, "entry": {"stories": ["A", "B"]}}],
        }

    def test_get_exchange_with_name(self, client, session):
        session.request.return_value = make_response(200, {"id": 1})

        client.get_exchange(1, name="alice")

        assert session.request.call_args.kwargs["params"] == {"name": "alice"}

    def test_voter_name_is_escaped_in_path(self, client, session):
        session.request.return_value = make_response(200, {"detail": "Votes deleted"})

        client.delete_votes(1, "RarityBoopsDerpy", "a/b?c")

        assert session.request.call_args.kwargs["url"] == "http://test/api/v1/exchanges/1/votes/a%2Fb%3Fc"

    def test_empty_response(self, client, session):
        session.request.return_value = make_response(204)

        assert client.delete_exchange(1, "RarityBoopsDerpy") == (None, None)

    def test_api_error(self, client, session):
        session.request.return_value = make_response(
            423, {"detail": "This exchange is frozen and cannot be modified", "code": "locked"}
        )

        data, error = client.add_submission(1, "alice", [["A"]])

        assert data is None
        assert error == {
            "status_code": 423,
            "code": "locked",
            "message": "This exchange is frozen and cannot be modified",
        }

    def test_non_json_error(self, client, session):
        session.request.return_value = make_response(502, text="Bad Gateway")

        data, error = client.get_exchange(1)

        assert error["status_code"] == 502
        assert error["code"] is None
        assert error["message"] == "Bad Gateway"

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        data, error = client.get_exchange(1)

        assert data is None
        assert error == {"status_code": None, "code": None, "message": "refused"}


class TestCommandLine:
    """Test the command line entry point."""

    def test_parse_stories(self):
        assert exchange_client._parse_stories(["A, B", "C"]) == [["A", "B"], ["C"]]

    def test_main_prints_result(self, monkeypatch, capsys):
        calls = []

        def fake_add(self, exchange_id, name, stories):
            calls.append((exchange_id, name, stories))
            return {"name": name, "entries": []}, None

        monkeypatch.setattr(ExchangeClient, "add_submission", fake_add)

        assert exchange_client.main(["submit", "1", "alice", "A,B"]) == 0
        assert calls == [(1, "alice", [["A", "B"]])]
        assert '"name": "alice"' in capsys.readouterr().out

    def test_main_reports_errors(self, monkeypatch, capsys):
        monkeypatch.setattr(
            ExchangeClient,
            "get_exchange",
            lambda self, exchange_id, name=None: (None, {"status_code": 404, "code": "not_found", "message": "Exchange not found"}),
        )

        assert exchange_client.main(["get", "7"]) == 1
        assert "Exchange not found (404)" in capsys.readouterr().err
