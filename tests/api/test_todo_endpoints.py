"""Todo CRUD over HTTP."""


async def create_todo(client, content="buy milk"):
    response = await client.post("/api/v1/todos", json={"content": content})
    assert response.status_code == 201
    return response.json()["data"]


async def test_create_todo_returns_todo_resource(client):
    todo = await create_todo(client)

    assert todo["type"] == "todos"
    assert todo["attributes"]["content"] == "buy milk"
    assert todo["attributes"]["isDone"] is False
    assert set(todo["attributes"]) == {"content", "isDone", "createdDate", "updatedDate"}


async def test_create_todo_with_empty_content_is_bad_request(client):
    response = await client.post("/api/v1/todos", json={"content": ""})

    assert response.status_code == 400
    assert response.json()["errors"][0]["title"] == "Bad Request"


async def test_list_todos(client):
    await create_todo(client, "first")
    await create_todo(client, "second")

    response = await client.get("/api/v1/todos")

    assert response.status_code == 200
    body = response.json()
    assert [todo["attributes"]["content"] for todo in body["data"]] == ["first", "second"]
    assert body["meta"]["method"] == "GET"
    assert body["links"] == {"self": "http://test/api/v1/todos"}


async def test_list_todos_when_empty(client):
    response = await client.get("/api/v1/todos")

    assert response.json()["data"] == []


async def test_get_todo(client):
    created = await create_todo(client)

    response = await client.get(f"/api/v1/todos/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == created["id"]


async def test_get_missing_todo_is_not_found(client):
    response = await client.get("/api/v1/todos/999")

    assert response.status_code == 404
    error = response.json()["errors"][0]
    assert error["detail"] == "Todo not found"
    assert error["source"] == {"pointer": "/api/v1/todos/999"}


async def test_update_todo_marks_it_done(client):
    created = await create_todo(client)

    response = await client.put(f"/api/v1/todos/{created['id']}", json={"isDone": True})

    assert response.status_code == 200
    assert response.json()["data"]["attributes"]["isDone"] is True
    fetched = await client.get(f"/api/v1/todos/{created['id']}")
    assert fetched.json()["data"]["attributes"]["isDone"] is True


async def test_delete_todo_returns_null_data(client):
    created = await create_todo(client)

    response = await client.delete(f"/api/v1/todos/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"] is None
    assert (await client.get(f"/api/v1/todos/{created['id']}")).status_code == 404


async def test_delete_missing_todo_is_not_found(client):
    response = await client.delete("/api/v1/todos/999")

    assert response.status_code == 404


async def test_health_reports_connected_database(client):
    response = await client.get("/api/v1/system/health")

    assert response.json()["data"] == {
        "type": "system-health",
        "id": "current",
        "attributes": {"status": "healthy", "database": "connected"},
    }
