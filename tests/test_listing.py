import json

import pytest

from rulerun.core.listing import ListingClient
from rulerun.protocol.enums import Phase
from rulerun.protocol.errors import (
    HttpStatusError,
    ListError,
    ListHttpStatusError,
    ListParseError,
    ParseError,
    TransportError,
    ValidationError,
)

URL = "https://rules.example.com"

ONE_RULE = {
    "rules": [
        {
            "id": "rule-1",
            "name": "Null check",
            "description": "orders.customer_id is never null",
            "status": "ACTIVE",
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-02-01T00:00:00Z",
            "owner": "data-team",
        }
    ],
    "totalCount": 1,
    "pageSize": 100,
    "pageNumber": 1,
    "nextCursor": "ignored",
}


@pytest.fixture
def client(gateway):
    return ListingClient(gateway)


def test_one_rule_page(client, gateway):
    gateway.enqueue(200, ONE_RULE)

    listing = client.list_rules(URL, "tok", page_size=100, page_number=1)

    assert len(listing.rules) == 1
    assert listing.total_count == 1
    assert listing.page_size == 100
    assert listing.page_number == 1
    rule = listing.rules[0]
    assert rule.id == "rule-1"
    assert rule.created_at == "2024-01-01T00:00:00Z"
    assert rule.updated_at == "2024-02-01T00:00:00Z"


def test_request_shape(client, gateway):
    gateway.enqueue(200, ONE_RULE)

    client.list_rules(URL + "/", "tok", page_size=25, page_number=3)

    req = gateway.requests[0]
    assert req["method"] == "GET"
    assert req["url"] == URL + "/api/v1/rules?pageSize=25&pageNumber=3"
    assert req["headers"]["Authorization"] == "Bearer tok"
    assert req["headers"]["Content-Type"] == "application/json"


def test_defaults(client, gateway):
    gateway.enqueue(200, {"rules": []})

    client.list_rules(URL, "tok")

    assert gateway.requests[0]["url"].endswith("?pageSize=100&pageNumber=1")


def test_missing_fields_stay_unset(client, gateway):
    gateway.enqueue(200, {"rules": [{"id": "r"}]})

    listing = client.list_rules(URL, "tok")

    assert listing.total_count is None
    assert listing.page_size is None
    assert listing.page_number is None
    assert listing.rules[0].name is None
    assert listing.rules[0].status is None


def test_identical_calls_give_identical_results(client, gateway):
    gateway.enqueue(200, ONE_RULE)
    gateway.enqueue(200, ONE_RULE)

    first = client.list_rules(URL, "tok")
    second = client.list_rules(URL, "tok")

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_http_error(client, gateway):
    gateway.enqueue(403, "forbidden")

    with pytest.raises(ListHttpStatusError) as info:
        client.list_rules(URL, "tok")

    err = info.value
    assert isinstance(err, ListError)
    assert isinstance(err, HttpStatusError)
    assert not isinstance(err, ParseError)
    assert err.status_code == 403
    assert err.body == "forbidden"
    assert err.phase == Phase.LIST


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "[]",
        '{"rules": {"id": "r"}}',
        '{"rules": ["r"]}',
        '{"rules": [], "totalCount": "many"}',
    ],
)
def test_parse_error(client, gateway, body):
    gateway.enqueue(200, body)

    with pytest.raises(ListParseError) as info:
        client.list_rules(URL, "tok")

    assert isinstance(info.value, ListError)
    assert not isinstance(info.value, HttpStatusError)


def test_transport_error_tagged_with_phase(client, gateway):
    gateway.enqueue_error(TransportError("dns failure"))

    with pytest.raises(TransportError) as info:
        client.list_rules(URL, "tok")

    assert info.value.phase == Phase.LIST


@pytest.mark.parametrize(
    "url,credential,page_size,page_number",
    [(None, "tok", 100, 1), (URL, "", 100, 1), (URL, "tok", 0, 1), (URL, "tok", 100, -2)],
)
def test_validation_before_request(client, gateway, url, credential, page_size, page_number):
    with pytest.raises(ValidationError):
        client.list_rules(url, credential, page_size, page_number)
    assert gateway.requests == []


def test_scalar_rule_fields_become_strings(client, gateway):
    gateway.enqueue(200, {"rules": [{"id": 123, "name": "n", "status": True}], "totalCount": 1})

    listing = client.list_rules(URL, "tok")

    rule = listing.rules[0]
    assert rule.id == "123"
    assert rule.status == "True"
    assert rule.description is None


@pytest.mark.parametrize("value", [{"nested": 1}, ["a", "b"]])
def test_object_valued_rule_field_is_parse_error(client, gateway, value):
    body = '{"rules": [{"id": "r", "name": %s}]}' % json.dumps(value)
    gateway.enqueue(200, body)

    with pytest.raises(ListParseError, match="name") as info:
        client.list_rules(URL, "tok")

    assert info.value.phase == Phase.LIST
    assert info.value.body == body


def test_missing_rules_key_stays_unset(client, gateway):
    gateway.enqueue(200, {"totalCount": 0})

    listing = client.list_rules(URL, "tok")

    assert listing.rules is None
    assert listing.total_count == 0
    assert listing.to_dict()["rules"] is None
