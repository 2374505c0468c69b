# Copyright (c) Goodcatch.
# Licensed under the MIT license.

from unittest.mock import Mock

import pytest
import requests

from fxk import FxkClient, FxkConfig
from fxk.core.cache import MemoryTokenCache
from fxk.core.errors import ServiceError
from fxk.core.results import FxkResult, ResponseModel
from fxk.core.token import CACHE_KEY

USERS = {
    "errorCode": 0,
    "errorMessage": "success",
    "userList": [
        {"openUserId": "FSUID_1", "name": "Li Lei", "mobile": "13800000001"},
        {"openUserId": "FSUID_2", "name": "Han Meimei", "mobile": "13800000002"},
    ],
}


class TestConstruction:
    def test_accepts_mapping(self):
        client = FxkClient(
            {"appId": "a", "appSecret": "s", "permanentCode": "p", "url": "https://u/", "timeout": 4}
        )
        assert client.config == FxkConfig(app_id="a", app_secret="s", permanent_code="p", url="https://u/", timeout=4)
        assert client.pipeline.http.default_timeout == 4

    def test_shared_token_cache(self, config, http, token_payload):
        cache = MemoryTokenCache()
        first = FxkClient(config, token_cache=cache)
        second = FxkClient(config, token_cache=cache)
        first.pipeline._http = http
        second.pipeline._http = http
        http.queue((200, token_payload), (200, {"errorCode": 0}), (200, {"errorCode": 0}))

        first.get_departments()
        second.get_departments()

        assert http.urls().count(config.url + "corpAccessToken/get/V2") == 1

    def test_shared_token_manager(self, config, client):
        other = FxkClient(config, token_manager=client.tokens)
        assert other.tokens is client.tokens


class TestDepartments:
    def test_round_trip(self, client, http, token_payload):
        http.queue((200, token_payload), (200, {"errorCode": 0, "departments": [{"id": 1, "name": "Sales"}]}))

        result = client.get_departments()

        assert isinstance(result, FxkResult)
        assert result.error_code == 0
        assert result.data == [{"id": 1, "name": "Sales"}]
        assert result.exception is None
        assert http.urls()[1] == "https://open.example.com/cgi/department/list"
        assert http.bodies()[1] == {"corpId": "FSCID_1", "corpAccessToken": "TOKEN_1"}

    def test_token_reused_across_calls(self, client, http, token_payload):
        http.queue(
            (200, token_payload),
            (200, {"errorCode": 0, "departments": []}),
            (200, {"errorCode": 0, "departments": []}),
        )

        client.get_departments()
        client.departments.list()

        assert len(http.calls) == 3

    def test_business_error_yields_empty_data(self, client, http, token_payload):
        http.queue((200, token_payload), (200, {"errorCode": 20016, "errorMessage": "token expired"}))

        result = client.get_departments()

        assert result.data == []
        assert result.error_code == 20016
        assert not result.ok
        with pytest.raises(ServiceError):
            result.raise_for_error()


class TestUsers:
    def test_get_users_sends_criteria_and_token(self, client, http, token_payload):
        http.queue((200, token_payload), (200, USERS))

        result = client.get_users(5, True)

        assert [u["openUserId"] for u in result.data] == ["FSUID_1", "FSUID_2"]
        assert http.urls()[1] == "https://open.example.com/cgi/user/list"
        assert http.bodies()[1] == {
            "fetchChild": True,
            "departmentId": 5,
            "corpId": "FSCID_1",
            "corpAccessToken": "TOKEN_1",
        }

    def test_get_users_transport_failure(self, client, http, token_payload):
        http.queue((200, token_payload), requests.exceptions.ConnectionError("reset"))

        result = client.get_users(5, True)

        assert result.exception
        assert all(isinstance(line, str) for line in result.exception)
        assert result.data == []
        assert result.error_code is None

    def test_get_user_returns_raw_model(self, client, http, token_payload):
        http.queue((200, token_payload), (200, {"errorCode": 0, "openUserId": "FSUID_1", "name": "Li Lei"}))

        model = client.get_user("FSUID_1")

        assert isinstance(model, ResponseModel)
        assert model["name"] == "Li Lei"
        assert http.urls()[1] == "https://open.example.com/cgi/user/get"
        assert http.bodies()[1] == {"corpId": "FSCID_1", "corpAccessToken": "TOKEN_1", "openUserId": "FSUID_1"}

    def test_dep_user_by_mobile_match(self, client, http, token_payload):
        http.queue((200, token_payload), (200, USERS))

        user = client.get_dep_user_by_mobile(0, "13800000002")

        assert user == USERS["userList"][1]
        assert http.bodies()[1]["departmentId"] == 0
        assert http.bodies()[1]["fetchChild"] is False

    def test_dep_user_by_mobile_no_match(self, client, http, token_payload):
        http.queue((200, token_payload), (200, USERS))
        assert client.get_dep_user_by_mobile(0, "13900000000") is None

    def test_dep_user_by_mobile_empty(self, client, http, token_payload):
        http.queue((200, token_payload), (200, {"errorCode": 0, "userList": []}))
        assert client.get_dep_user_by_mobile(0, "13800000001") is None

    def test_dep_user_by_mobile_on_error(self, client, http, token_payload):
        http.queue((200, token_payload), (500, "error"))
        assert client.users.find_by_mobile(0, "13800000001") is None


class TestTokenUnavailable:
    def test_rejected_token_call_proceeds_without_credentials(self, client, http):
        http.queue(
            (200, {"errorCode": 1, "errorMessage": "invalid permanentCode"}),
            (200, {"errorCode": 20016, "errorMessage": "corpAccessToken missing"}),
        )

        result = client.get_departments()

        assert not client.tokens.cache.has(CACHE_KEY)
        assert http.bodies()[1] == {}
        assert result.error_code == 20016
        assert result.error_message == "corpAccessToken missing"
        assert result.data == []
        assert client.tokens.last_error.error_code == 1

    def test_unreachable_token_endpoint(self, client, http):
        http.queue(
            requests.exceptions.ConnectTimeout("slow"),
            (200, {"errorCode": 20016}),
        )

        result = client.get_users(1)

        assert "corpAccessToken" not in http.bodies()[1]
        assert result.error_code == 20016


class TestSessionLifecycle:
    def test_context_manager_opens_and_closes_session(self, config):
        client = FxkClient(config)
        with client as c:
            assert c is client
            session = client.pipeline.http.session
            assert isinstance(session, requests.Session)
        assert client.pipeline.http.session is None

    def test_supplied_session_not_closed(self, config):
        session = Mock(spec=requests.Session)
        with FxkClient(config, session=session) as client:
            assert client.pipeline.http.session is session
        session.close.assert_not_called()

    def test_set_http_session(self, config):
        session = Mock(spec=requests.Session)
        client = FxkClient(config)
        client.__enter__()
        owned = client.pipeline.http.session

        assert client.set_http_session(session) is client
        assert client.pipeline.http.session is session
        client.close()
        session.close.assert_not_called()
        assert owned is not session


class TestCriteriaScopeIsolation:
    def test_open_scope_does_not_survive_an_operation(self, client, http, token_payload):
        http.queue((200, token_payload), (200, {"errorCode": 0, "departments": []}))
        client.pipeline.query().criteria("departmentId", 1)

        client.get_departments()

        assert client.pipeline.pending_criteria == {}
        assert "departmentId" not in http.bodies()[1]
