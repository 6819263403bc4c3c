from __future__ import annotations

from uuid import uuid4

COW = {
    "tag_number": "C-001",
    "name": "Bessie",
    "gender": "female",
    "breed": "Holstein",
    "birth_date": "2019-04-10",
}


async def test_health_is_public(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_requests_without_token_are_rejected(client):
    resp = await client.get("/api/v1/cattle/")
    assert resp.status_code == 401
    assert resp.json()["code"] == "auth_error"

    resp = await client.get("/api/v1/cattle/", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_cattle_crud_flow(client, auth_headers):
    admin = auth_headers["admin"]
    worker = auth_headers["worker"]

    denied = await client.post("/api/v1/cattle/", json=COW, headers=worker)
    assert denied.status_code == 403

    resp = await client.post("/api/v1/cattle/", json=COW, headers=admin)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    cattle_id = body["id"]
    assert body["status"] == "active"
    assert body["is_adult"] is True
    assert body["can_milk"] is True

    dup = await client.post("/api/v1/cattle/", json={**COW, "name": "Other"}, headers=admin)
    assert dup.status_code == 409
    assert dup.json()["code"] == "conflict"

    got = await client.get(f"/api/v1/cattle/{cattle_id}", headers=worker)
    assert got.status_code == 200
    assert got.json()["tag_number"] == "C-001"

    by_tag = await client.get("/api/v1/cattle/tag/C-001", headers=worker)
    assert by_tag.json()["id"] == cattle_id
    check = await client.get("/api/v1/cattle/check-tag/C-001", headers=worker)
    assert check.json() == {"exists": True}

    patched = await client.patch(
        f"/api/v1/cattle/{cattle_id}", json={"name": "Bessie II"}, headers=admin
    )
    assert patched.status_code == 200
    assert patched.json()["name"] == "Bessie II"
    assert patched.json()["breed"] == "Holstein"

    status_resp = await client.patch(
        f"/api/v1/cattle/{cattle_id}/status", json={"status": "dry"}, headers=worker
    )
    assert status_resp.status_code == 200
    assert status_resp.json()["status"] == "dry"
    assert status_resp.json()["can_milk"] is False

    deleted = await client.delete(f"/api/v1/cattle/{cattle_id}", headers=admin)
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/cattle/{cattle_id}", headers=admin)
    assert missing.status_code == 404
    assert missing.json()["code"] == "not_found"

    # the tag is free again after deletion
    again = await client.post("/api/v1/cattle/", json=COW, headers=admin)
    assert again.status_code == 201


async def test_pedigree_validation_and_offspring(client, auth_headers):
    admin = auth_headers["admin"]
    bull = (
        await client.post(
            "/api/v1/cattle/",
            json={"tag_number": "B-1", "name": "Duke", "gender": "male"},
            headers=admin,
        )
    ).json()
    cow = (await client.post("/api/v1/cattle/", json=COW, headers=admin)).json()

    wrong = await client.post(
        "/api/v1/cattle/",
        json={"tag_number": "K-1", "name": "Calf", "gender": "female", "parent_bull_id": cow["id"]},
        headers=admin,
    )
    assert wrong.status_code == 422
    assert wrong.json()["message"] == "Parent bull must be male"

    missing = await client.post(
        "/api/v1/cattle/",
        json={
            "tag_number": "K-1",
            "name": "Calf",
            "gender": "female",
            "parent_cow_id": str(uuid4()),
        },
        headers=admin,
    )
    assert missing.status_code == 422
    assert missing.json()["message"] == "Parent cow not found"

    calf = await client.post(
        "/api/v1/cattle/",
        json={
            "tag_number": "K-1",
            "name": "Calf",
            "gender": "female",
            "parent_bull_id": bull["id"],
            "parent_cow_id": cow["id"],
        },
        headers=admin,
    )
    assert calf.status_code == 201, calf.text

    offspring = await client.get(f"/api/v1/cattle/{bull['id']}/offspring", headers=admin)
    assert offspring.status_code == 200
    assert [c["tag_number"] for c in offspring.json()] == ["K-1"]

    unknown = await client.get(f"/api/v1/cattle/{uuid4()}/offspring", headers=admin)
    assert unknown.status_code == 404


async def test_listing_milking_cows_and_statistics(client, auth_headers):
    admin = auth_headers["admin"]
    await client.post("/api/v1/cattle/", json=COW, headers=admin)
    await client.post(
        "/api/v1/cattle/",
        json={
            "tag_number": "C-002",
            "name": "Annie",
            "gender": "female",
            "birth_date": "2018-01-01",
        },
        headers=admin,
    )
    await client.post(
        "/api/v1/cattle/",
        json={"tag_number": "B-1", "name": "Duke", "gender": "male", "status": "sick"},
        headers=admin,
    )

    listed = await client.get(
        "/api/v1/cattle/?gender=female&sort_by=name&sort_order=asc&limit=1", headers=admin
    )
    assert listed.status_code == 200
    page = listed.json()
    assert page["total"] == 2
    assert page["total_pages"] == 2
    assert [c["name"] for c in page["items"]] == ["Annie"]

    search = await client.get("/api/v1/cattle/?search=bess", headers=admin)
    assert [c["tag_number"] for c in search.json()["items"]] == ["C-001"]

    milking = await client.get("/api/v1/cattle/milking-cows", headers=admin)
    assert [c["name"] for c in milking.json()] == ["Annie", "Bessie"]

    stats = await client.get("/api/v1/cattle/statistics", headers=admin)
    assert stats.status_code == 200
    data = stats.json()
    assert data["total"] == 3
    assert data["by_status"]["active"] == 2
    assert data["by_status"]["sick"] == 1
    assert data["by_status"]["quarantine"] == 0
    assert data["by_gender"] == {"male": 1, "female": 2}


async def test_invalid_payload_returns_validation_error(client, auth_headers):
    resp = await client.post(
        "/api/v1/cattle/",
        json={"tag_number": "", "name": "X", "gender": "unknown"},
        headers=auth_headers["admin"],
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == "validation_error"
    assert body["details"]["errors"]
