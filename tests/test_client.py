"""Tests for the HTTP client against a mocked transport."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json

import httpx
import pytest

from data.client import InventoryClient, unwrap_envelope
from data.errors import AssignmentError, DataLoadError


def envelope(data, success=True, message="", status=200):
    return {"success": success, "message": message, "statusCode": status, "data": data}


ROUTES = {
    "/api/Tower/1": envelope({"id": 1, "englishName": "North Tower"}),
    "/api/Tower/1/blocks": envelope([
        {"id": 10, "blockCode": "A", "blockArabicName": "أ", "blockNumber": "1"},
        {"id": 11, "blockCode": None, "blockArabicName": "", "blockEnglishName": "East", "blockNumber": "2"},
        {"id": 12, "blockNumber": "3"},
    ]),
    "/api/Block/10/floors": envelope({"data": [
        {"id": 100, "floorNumber": 1, "floorCode": "1"},
        {"id": 101, "floorNumber": 0, "floorCode": "G"},
    ], "totalCount": 2}),
    "/api/Floor/100/units": envelope([
        {"id": 1, "unitNumber": "101", "unitCode": "A-1-01", "floorNumber": 1, "unitDesignId": 3},
        {"id": 2, "unitNumber": "102", "unitCode": None, "floorNumber": 1,
         "unitDesign": {"id": 4, "englishName": "Penthouse"}},
    ]),
    "/api/UnitDesign": envelope([{"id": 3, "englishName": "Studio", "arabicName": "استوديو"}]),
}


def make_client(handler=None):
    requests = []

    def default_handler(request):
        requests.append(request)
        if request.url.path in ROUTES:
            return httpx.Response(200, json=ROUTES[request.url.path])
        return httpx.Response(404, json=envelope(None, False, "Not found", 404))

    transport = httpx.MockTransport(handler or default_handler)
    client = InventoryClient(base_url="https://store.test/api", token="secret", transport=transport)
    return client, requests


def run(coro_factory):
    async def scenario():
        client, requests = make_client()
        async with client:
            return await coro_factory(client), requests
    return asyncio.run(scenario())


class TestUnwrapEnvelope:
    def test_plain_data(self):
        assert unwrap_envelope(envelope([1, 2])) == [1, 2]

    def test_paginated_data(self):
        assert unwrap_envelope(envelope({"data": [1], "totalCount": 1})) == [1]

    def test_bare_list(self):
        assert unwrap_envelope([1]) == [1]

    def test_failure_raises_given_error(self):
        with pytest.raises(AssignmentError) as exc:
            unwrap_envelope(envelope(None, False, "Nope", 400), AssignmentError)
        assert exc.value.status_code == 400
        assert str(exc.value) == "Nope"


class TestReads:
    def test_tower(self):
        tower, requests = run(lambda c: c.get_tower(1))
        assert tower.name == "North Tower"
        assert requests[0].headers["Authorization"] == "Bearer secret"
        assert requests[0].url.params["lang"] == "en"

    def test_block_label_precedence(self):
        blocks, _ = run(lambda c: c.get_blocks(1))
        assert [b.label for b in blocks] == ["A", "East", "3"]
        assert blocks[0].block_number == "1"
        assert all(b.tower_id == 1 for b in blocks)

    def test_paginated_floors(self):
        floors, _ = run(lambda c: c.get_floors(10))
        assert [(f.floor_id, f.floor_number, f.floor_code) for f in floors] == [(100, 1, "1"), (101, 0, "G")]
        assert all(f.block_id == 10 for f in floors)

    def test_units_and_design_ids(self):
        units, _ = run(lambda c: c.get_units(100))
        assert [(u.unit_id, u.unit_number, u.design_id) for u in units] == [(1, "101", 3), (2, "102", 4)]
        assert units[1].unit_code is None

    def test_designs_only_active(self):
        designs, requests = run(lambda c: c.get_designs())
        assert designs[0].display_name == "Studio"
        assert requests[0].url.params["onlyActive"] == "true"

    def test_missing_resource_raises(self):
        with pytest.raises(DataLoadError) as exc:
            run(lambda c: c.get_floors(999))
        assert exc.value.status_code == 404

    def test_unsuccessful_envelope_raises(self):
        def handler(request):
            return httpx.Response(200, json=envelope(None, False, "Tower archived", 409))

        async def scenario():
            client, _ = make_client(handler)
            async with client:
                await client.get_blocks(1)

        with pytest.raises(DataLoadError, match="Tower archived"):
            asyncio.run(scenario())

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def scenario():
            client, _ = make_client(handler)
            async with client:
                await client.get_units(100)

        with pytest.raises(DataLoadError):
            asyncio.run(scenario())


class TestAssignDesign:
    def test_posts_sorted_ids(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=envelope(None, True, "3 units updated"))

        async def scenario():
            client, _ = make_client(handler)
            async with client:
                return await client.assign_design({9, 2, 5}, 7)

        message = asyncio.run(scenario())
        assert message == "3 units updated"
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/Unit/assign-design"
        assert json.loads(seen[0].content) == {"unitIds": [2, 5, 9], "unitDesignId": 7}

    def test_http_error_raises_assignment_error(self):
        def handler(request):
            return httpx.Response(400, json=envelope(None, False, "Design inactive", 400))

        async def scenario():
            client, _ = make_client(handler)
            async with client:
                await client.assign_design([1], 7)

        with pytest.raises(AssignmentError) as exc:
            asyncio.run(scenario())
        assert exc.value.status_code == 400
        assert "Design inactive" in str(exc.value)

    def test_unsuccessful_envelope_raises(self):
        def handler(request):
            return httpx.Response(200, json=envelope(None, False, "Unit locked", 423))

        async def scenario():
            client, _ = make_client(handler)
            async with client:
                await client.assign_design([1], 7)

        with pytest.raises(AssignmentError, match="Unit locked"):
            asyncio.run(scenario())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
