"""
Tests for asset endpoints.
"""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, data: dict, headers: dict) -> int:
    response = await client.post("/api/v1/assets", json=data, headers=headers)
    assert response.status_code == 201
    return response.json()["assetId"]


@pytest.mark.asyncio
async def test_register_asset(client: AsyncClient, sample_asset_data: dict, alice: dict):
    """Test registering a new asset."""
    response = await client.post("/api/v1/assets", json=sample_asset_data, headers=alice)

    assert response.status_code == 201
    assert response.json() == {"assetId": 1}


@pytest.mark.asyncio
async def test_register_assigns_sequential_ids(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """Ids increase by one per registration, whoever registers."""
    first = await _create(client, sample_asset_data, alice)
    second = await _create(client, sample_asset_data, bob)

    assert second == first + 1


@pytest.mark.asyncio
async def test_get_asset_round_trip(client: AsyncClient, sample_asset_data: dict, alice: dict):
    """A registered asset reads back exactly as registered."""
    metrics = (await client.get("/api/v1/registry/metrics")).json()
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.get(f"/api/v1/assets/{asset_id}", headers=alice)

    assert response.status_code == 200
    assert response.json() == {
        "assetId": asset_id,
        "name": sample_asset_data["name"],
        "owner": "alice",
        "payloadSize": sample_asset_data["payloadSize"],
        "registeredAt": metrics["blockHeight"] + 1,
        "attributeSchema": sample_asset_data["attributeSchema"],
        "tags": sample_asset_data["tags"],
    }


@pytest.mark.asyncio
async def test_get_asset_not_found(client: AsyncClient, alice: dict):
    """Test getting a non-existent asset returns 404."""
    response = await client.get("/api/v1/assets/999", headers=alice)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_get_asset_access_restricted(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """A principal with neither ownership nor a grant cannot read the record."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.get(f"/api/v1/assets/{asset_id}", headers=bob)

    assert response.status_code == 403
    data = response.json()
    assert data["error"] == "access_restricted"
    assert "name" not in data


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value,error",
    [
        ("name", "", "invalid_attributes"),
        ("name", "n" * 65, "invalid_attributes"),
        ("attributeSchema", "s" * 129, "invalid_attributes"),
        ("payloadSize", 0, "capacity_threshold_violation"),
        ("payloadSize", 1_000_000_000, "capacity_threshold_violation"),
        ("tags", [], "attribute_verification_failure"),
        ("tags", [f"tag{i}" for i in range(11)], "attribute_verification_failure"),
        ("tags", ["ok", ""], "attribute_verification_failure"),
    ],
)
async def test_register_invalid_fields(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    field: str,
    value,
    error: str,
):
    """Out-of-bounds fields are rejected with their registry error and nothing is minted."""
    data = {**sample_asset_data, field: value}

    response = await client.post("/api/v1/assets", json=data, headers=alice)

    assert response.status_code == 400
    assert response.json()["error"] == error

    metrics = (await client.get("/api/v1/registry/metrics")).json()
    assert metrics["totalCount"] == 0


@pytest.mark.asyncio
async def test_register_boundary_values(client: AsyncClient, alice: dict):
    """Maximum lengths and counts are accepted."""
    data = {
        "name": "n" * 64,
        "payloadSize": 999_999_999,
        "attributeSchema": "s" * 128,
        "tags": ["t" * 32 for _ in range(10)],
    }

    response = await client.post("/api/v1/assets", json=data, headers=alice)

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_register_malformed_body(client: AsyncClient, alice: dict):
    """Missing or mistyped fields are a validation failure."""
    response = await client.post("/api/v1/assets", json={"name": "x"}, headers=alice)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


@pytest.mark.asyncio
async def test_modify_asset(client: AsyncClient, sample_asset_data: dict, alice: dict):
    """The owner can replace the revisable fields."""
    asset_id = await _create(client, sample_asset_data, alice)
    update = {
        "name": "turbine-blade-rescan",
        "payloadSize": 4096,
        "attributeSchema": "schema://mesh/v2",
        "tags": ["cad"],
    }

    response = await client.put(f"/api/v1/assets/{asset_id}", json=update, headers=alice)

    assert response.status_code == 200
    assert response.json() == {"success": True}

    record = (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).json()
    assert record["name"] == "turbine-blade-rescan"
    assert record["payloadSize"] == 4096
    assert record["attributeSchema"] == "schema://mesh/v2"
    assert record["tags"] == ["cad"]
    assert record["owner"] == "alice"
    assert record["registeredAt"] == 1


@pytest.mark.asyncio
async def test_modify_by_non_owner(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """Non-owners get ownership_conflict and the record is unchanged."""
    asset_id = await _create(client, sample_asset_data, alice)
    update = {**sample_asset_data, "name": "hijacked"}

    response = await client.put(f"/api/v1/assets/{asset_id}", json=update, headers=bob)

    assert response.status_code == 403
    assert response.json()["error"] == "ownership_conflict"

    record = (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).json()
    assert record["name"] == sample_asset_data["name"]


@pytest.mark.asyncio
async def test_modify_invalid_tags(client: AsyncClient, sample_asset_data: dict, alice: dict):
    """Invalid tags on modify are rejected and the record is unchanged."""
    asset_id = await _create(client, sample_asset_data, alice)
    update = {**sample_asset_data, "name": "renamed", "tags": ["x" * 33]}

    response = await client.put(f"/api/v1/assets/{asset_id}", json=update, headers=alice)

    assert response.status_code == 400
    assert response.json()["error"] == "attribute_verification_failure"

    record = (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).json()
    assert record["name"] == sample_asset_data["name"]


@pytest.mark.asyncio
async def test_mutations_on_missing_asset(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
):
    """modify, transfer and delete on an unknown id all return not_found."""
    responses = [
        await client.put("/api/v1/assets/77", json=sample_asset_data, headers=alice),
        await client.post("/api/v1/assets/77/transfer", json={"newOwner": "bob"}, headers=alice),
        await client.delete("/api/v1/assets/77", headers=alice),
    ]

    for response in responses:
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    metrics = (await client.get("/api/v1/registry/metrics")).json()
    assert metrics["totalCount"] == 0
    assert metrics["blockHeight"] == 0


@pytest.mark.asyncio
async def test_transfer_asset(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """After a transfer the new owner is reported and can read the record."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.post(
        f"/api/v1/assets/{asset_id}/transfer",
        json={"newOwner": "bob"},
        headers=alice,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}

    owner = await client.get(f"/api/v1/assets/{asset_id}/owner", headers=alice)
    assert owner.json() == {"assetId": asset_id, "owner": "bob"}

    record = await client.get(f"/api/v1/assets/{asset_id}", headers=bob)
    assert record.status_code == 200
    assert record.json()["owner"] == "bob"


@pytest.mark.asyncio
async def test_transfer_by_non_owner(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """Non-owners cannot transfer."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.post(
        f"/api/v1/assets/{asset_id}/transfer",
        json={"newOwner": "bob"},
        headers=bob,
    )

    assert response.status_code == 403
    assert response.json()["error"] == "ownership_conflict"

    owner = await client.get(f"/api/v1/assets/{asset_id}/owner", headers=bob)
    assert owner.json()["owner"] == "alice"


@pytest.mark.asyncio
async def test_transfer_requires_new_owner(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
):
    """An empty new owner is a malformed request."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.post(
        f"/api/v1/assets/{asset_id}/transfer",
        json={"newOwner": ""},
        headers=alice,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


@pytest.mark.asyncio
async def test_former_owner_loses_access(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
    carol: dict,
):
    """An owner who held no explicit grant loses read access once they transfer away."""
    asset_id = await _create(client, sample_asset_data, alice)
    await client.post(f"/api/v1/assets/{asset_id}/transfer", json={"newOwner": "bob"}, headers=alice)

    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=bob)).status_code == 200

    await client.post(f"/api/v1/assets/{asset_id}/transfer", json={"newOwner": "carol"}, headers=bob)

    response = await client.get(f"/api/v1/assets/{asset_id}", headers=bob)
    assert response.status_code == 403
    assert response.json()["error"] == "access_restricted"

    # alice still holds the grant made at registration
    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).status_code == 200
    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=carol)).status_code == 200


@pytest.mark.asyncio
async def test_delete_asset(client: AsyncClient, sample_asset_data: dict, alice: dict):
    """Deleted assets are gone for good and their id is not reused."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.delete(f"/api/v1/assets/{asset_id}", headers=alice)

    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).status_code == 404
    assert (await client.get(f"/api/v1/assets/{asset_id}/owner", headers=alice)).status_code == 404

    next_id = await _create(client, sample_asset_data, alice)
    assert next_id == asset_id + 1
    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).status_code == 404


@pytest.mark.asyncio
async def test_delete_by_non_owner(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """Non-owners cannot delete."""
    asset_id = await _create(client, sample_asset_data, alice)

    response = await client.delete(f"/api/v1/assets/{asset_id}", headers=bob)

    assert response.status_code == 403
    assert response.json()["error"] == "ownership_conflict"
    assert (await client.get(f"/api/v1/assets/{asset_id}", headers=alice)).status_code == 200


@pytest.mark.asyncio
async def test_get_owner_not_found(client: AsyncClient, alice: dict):
    """Owner lookup on an unknown id returns 404."""
    response = await client.get("/api/v1/assets/5/owner", headers=alice)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_authorization_analysis(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
    bob: dict,
):
    """Authorization analysis reports instead of enforcing."""
    asset_id = await _create(client, sample_asset_data, alice)

    owner_view = await client.get(
        f"/api/v1/assets/{asset_id}/authorization",
        params={"entity": "alice"},
        headers=bob,
    )
    assert owner_view.status_code == 200
    assert owner_view.json() == {
        "assetId": asset_id,
        "entity": "alice",
        "explicit": True,
        "isOwner": True,
        "canAccess": True,
    }

    stranger_view = await client.get(
        f"/api/v1/assets/{asset_id}/authorization",
        params={"entity": "bob"},
        headers=bob,
    )
    assert stranger_view.status_code == 200
    assert stranger_view.json()["canAccess"] is False
    assert stranger_view.json()["isOwner"] is False
    assert stranger_view.json()["explicit"] is False


@pytest.mark.asyncio
async def test_authorization_after_transfer(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
):
    """The registrant keeps its explicit grant after transferring away."""
    asset_id = await _create(client, sample_asset_data, alice)
    await client.post(f"/api/v1/assets/{asset_id}/transfer", json={"newOwner": "bob"}, headers=alice)

    alice_view = (
        await client.get(
            f"/api/v1/assets/{asset_id}/authorization",
            params={"entity": "alice"},
            headers=alice,
        )
    ).json()
    bob_view = (
        await client.get(
            f"/api/v1/assets/{asset_id}/authorization",
            params={"entity": "bob"},
            headers=alice,
        )
    ).json()

    assert (alice_view["explicit"], alice_view["isOwner"], alice_view["canAccess"]) == (True, False, True)
    assert (bob_view["explicit"], bob_view["isOwner"], bob_view["canAccess"]) == (False, True, True)


@pytest.mark.asyncio
async def test_authorization_not_found(client: AsyncClient, alice: dict):
    """Authorization analysis on an unknown id returns 404."""
    response = await client.get(
        "/api/v1/assets/12/authorization",
        params={"entity": "alice"},
        headers=alice,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("asset_id", [0, -1, 2**31, 2**64])
@pytest.mark.parametrize("suffix", ["", "/owner", "/authorization?entity=bob"])
async def test_out_of_range_id_is_not_found(
    client: AsyncClient,
    alice: dict,
    asset_id: int,
    suffix: str,
):
    """Ids no asset can have are reported as not_found, not as server errors."""
    response = await client.get(f"/api/v1/assets/{asset_id}{suffix}", headers=alice)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_out_of_range_id_mutations_are_not_found(
    client: AsyncClient,
    sample_asset_data: dict,
    alice: dict,
):
    """modify, transfer and delete on an oversized id return not_found and write nothing."""
    asset_id = 2**64
    responses = [
        await client.put(f"/api/v1/assets/{asset_id}", json=sample_asset_data, headers=alice),
        await client.post(
            f"/api/v1/assets/{asset_id}/transfer", json={"newOwner": "bob"}, headers=alice
        ),
        await client.delete(f"/api/v1/assets/{asset_id}", headers=alice),
    ]

    for response in responses:
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    metrics = (await client.get("/api/v1/registry/metrics")).json()
    assert metrics["blockHeight"] == 0
