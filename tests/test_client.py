import httpx
import pytest

from whmcs_mattermost.mattermost.client import MattermostClient, dump_request
from whmcs_mattermost.mattermost.errors import (
    ApiClientError,
    ApiConnectError,
    ApiInvalidResponse,
    ApiServerError,
    ApiTooManyRedirects,
)


def test_request_uses_base_url_and_bearer_token(connection, fake):
    fake.add("GET", "users/username/whmcs", httpx.Response(200, json={"id": "bot1"}))

    with MattermostClient(connection, transport=fake.transport) as client:
        user = client.get_user_by_username("whmcs")

    assert user == {"id": "bot1"}
    request = fake.requests[0]
    assert str(request.url) == "https://chat.example.com/api/v4/users/username/whmcs"
    assert request.headers["Authorization"] == "Bearer tok"


def test_username_is_path_quoted(connection, fake):
    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiClientError):
            client.get_user_by_username("a/b")

    assert fake.requests[0].url.raw_path == b"/api/v4/users/username/a%2Fb"


def test_client_error_keeps_raw_body(connection, fake):
    body = '{"id":"app.user.missing_account.const","status_code":404}'
    fake.add("GET", "users/username/whmcs", httpx.Response(404, text=body))

    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiClientError) as excinfo:
            client.request("GET", "users/username/whmcs")

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == body


def test_server_error_dumps_request_without_token(connection, fake):
    fake.add("POST", "posts", httpx.Response(503, text="Service Unavailable"))

    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiServerError) as excinfo:
            client.create_post({"channel_id": "ch9", "message": "hi"})

    dump = excinfo.value.request_dump
    assert excinfo.value.status_code == 503
    assert dump.startswith("POST /api/v4/posts HTTP/1.1\r\n")
    assert "chat.example.com" in dump
    assert "Bearer ********" in dump
    assert "Bearer tok" not in dump
    assert '"channel_id"' in dump


@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout])
def test_transport_failures_are_connect_errors(connection, exc_type):
    def handler(request):
        raise exc_type("unreachable", request=request)

    with MattermostClient(connection, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ApiConnectError):
            client.request("GET", "users/username/whmcs")


def test_redirect_loop(connection):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(302, headers={"Location": str(request.url)})

    with MattermostClient(connection, max_redirects=3, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ApiTooManyRedirects):
            client.request("GET", "users/username/whmcs")

    assert len(calls) == 4


def test_redirect_is_followed(connection, fake):
    fake.add(
        "GET",
        "users/username/whmcs",
        httpx.Response(301, headers={"Location": "https://chat.example.com/api/v4/users/username/bot"}),
    )
    fake.add("GET", "users/username/bot", httpx.Response(200, json={"id": "bot1"}))

    with MattermostClient(connection, transport=fake.transport) as client:
        assert client.request("GET", "users/username/whmcs") == {"id": "bot1"}


def test_empty_body_is_none(connection, fake):
    fake.add("POST", "posts", httpx.Response(201))

    with MattermostClient(connection, transport=fake.transport) as client:
        assert client.create_post({}) is None


def test_non_json_success_is_invalid_response(connection, fake):
    fake.add("GET", "users/username/whmcs", httpx.Response(200, text="<html>login</html>"))

    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiInvalidResponse) as excinfo:
            client.get_user_by_username("whmcs")

    assert excinfo.value.body == "<html>login</html>"


def test_channels_must_be_a_list(connection, fake):
    fake.add("GET", "users/bot1/channels", httpx.Response(200, json={"id": "x"}))

    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiInvalidResponse):
            client.get_user_channels("bot1")


def test_dump_request_includes_query_and_body():
    request = httpx.Request(
        "POST",
        "https://chat.example.com/api/v4/posts?set_online=false",
        headers={"Authorization": "Bearer secret"},
        json={"a": 1},
    )
    dump = dump_request(request)
    assert dump.splitlines()[0] == "POST /api/v4/posts?set_online=false HTTP/1.1"
    assert "secret" not in dump
    assert dump.endswith("\r\n\r\n" + request.content.decode())


def test_bad_content_encoding_is_invalid_response(connection, fake):
    fake.add(
        "POST",
        "posts",
        httpx.Response(201, headers={"Content-Encoding": "gzip"}, content=b"notgzip"),
    )

    with MattermostClient(connection, transport=fake.transport) as client:
        with pytest.raises(ApiInvalidResponse):
            client.create_post({"channel_id": "ch9"})
