from conftest import ADMIN, ALICE, auth


async def test_list_categories(client):
    resp = await client.get("/categories")
    assert {c["id"] for c in resp.json()["categories"]} == {"general", "travel"}


async def test_create_category(client):
    resp = await client.post(
        "/categories", json={"name": "Food", "description": "Recipes"}, headers=auth(ALICE)
    )
    assert resp.status_code == 201
    assert resp.json()["category"] == {"id": "food", "name": "Food", "description": "Recipes"}

    resp = await client.post("/categories", json={"name": "Food"}, headers=auth(ALICE))
    assert resp.status_code == 409


async def test_create_category_without_name(client):
    resp = await client.post("/categories", json={}, headers=auth(ALICE))
    assert resp.status_code == 400


async def test_delete_category_admin_only(client):
    resp = await client.delete("/categories/travel", headers=auth(ALICE))
    assert resp.status_code == 403

    resp = await client.delete("/categories/travel", headers=auth(ADMIN))
    assert resp.json() == {"message": "Category deleted"}

    resp = await client.delete("/categories/travel", headers=auth(ADMIN))
    assert resp.status_code == 404
