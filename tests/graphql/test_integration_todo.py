"""
Integration tests for the todo GraphQL API over HTTP with a real database
"""

import pytest

from todos.database.seed_data import DEFAULT_TODOS

pytestmark = pytest.mark.integration

TODO_FIELDS = "id text done"


def list_todos(run_graphql):
    body = run_graphql(f"{{ todoList {{ {TODO_FIELDS} }} }}")
    assert "errors" not in body, body
    return body["data"]["todoList"]


def test_seed_data_is_listed(run_graphql):
    todos = list_todos(run_graphql)

    assert [(t["id"], t["text"], t["done"]) for t in todos] == [
        (todo_id, text, False) for todo_id, text in DEFAULT_TODOS
    ]


def test_created_todo_appears_in_list(run_graphql):
    body = run_graphql(
        'mutation { createTodo(text: "buy milk") { id text done } }'
    )

    created = body["data"]["createTodo"]
    assert created["text"] == "buy milk"
    assert created["done"] is False

    todos = list_todos(run_graphql)
    assert {"id": created["id"], "text": "buy milk", "done": False} in todos


def test_repeated_creates_get_distinct_ids(run_graphql):
    ids = set()
    for n in range(3):
        body = run_graphql(
            "mutation Create($text: String!) { createTodo(text: $text) { id } }",
            {"text": f"todo {n}"},
        )
        ids.add(body["data"]["createTodo"]["id"])

    assert len(ids) == 3
    assert len(list_todos(run_graphql)) == len(DEFAULT_TODOS) + 3


def test_create_without_text_is_validation_error(run_graphql):
    before = len(list_todos(run_graphql))

    body = run_graphql("mutation { createTodo { id } }")

    assert body.get("data") is None
    assert body["errors"]
    assert "text" in body["errors"][0]["message"]
    assert len(list_todos(run_graphql)) == before


def test_get_single_todo(run_graphql):
    body = run_graphql(f"{{ todo(id: 2) {{ {TODO_FIELDS} }} }}")

    assert body["data"]["todo"] == {"id": 2, "text": DEFAULT_TODOS[1][1], "done": False}


def test_todo_without_id_returns_empty_todo(run_graphql):
    body = run_graphql(f"{{ todo {{ {TODO_FIELDS} }} }}")

    assert "errors" not in body
    assert body["data"]["todo"] == {"id": 0, "text": "", "done": False}


def test_unknown_todo_is_not_found_error(run_graphql):
    body = run_graphql(f"{{ todo(id: 999) {{ {TODO_FIELDS} }} }}")

    assert body["data"]["todo"] is None
    assert body["errors"][0]["message"] == "Todo 999 not found"
    assert body["errors"][0]["path"] == ["todo"]


def test_non_integer_id_is_validation_error(run_graphql):
    body = run_graphql(f'{{ todo(id: "abc") {{ {TODO_FIELDS} }} }}')

    assert body.get("data") is None
    assert "Int" in body["errors"][0]["message"]


def test_update_then_read_back(run_graphql):
    body = run_graphql(f"mutation {{ updateTodo(id: 1, done: true) {{ {TODO_FIELDS} }} }}")
    assert body["data"]["updateTodo"] == {"id": 1, "text": DEFAULT_TODOS[0][1], "done": True}

    body = run_graphql(f"{{ todo(id: 1) {{ {TODO_FIELDS} }} }}")
    assert body["data"]["todo"]["done"] is True


def test_update_without_done_leaves_todo_unchanged(run_graphql):
    body = run_graphql(f"mutation {{ updateTodo(id: 3) {{ {TODO_FIELDS} }} }}")

    assert body["data"]["updateTodo"] == {"id": 3, "text": DEFAULT_TODOS[2][1], "done": False}


def test_update_unknown_todo_is_not_found_error(run_graphql):
    body = run_graphql("mutation { updateTodo(id: 999, done: true) { id } }")

    assert body["data"]["updateTodo"] is None
    assert body["errors"][0]["message"] == "Todo 999 not found"


def test_update_requires_id(run_graphql):
    body = run_graphql("mutation { updateTodo(done: true) { id } }")

    assert body.get("data") is None
    assert "id" in body["errors"][0]["message"]


def test_sequential_updates_both_succeed(run_graphql):
    first = run_graphql("mutation { updateTodo(id: 2, done: true) { done } }")
    second = run_graphql("mutation { updateTodo(id: 2, done: false) { done } }")

    assert first["data"]["updateTodo"]["done"] is True
    assert second["data"]["updateTodo"]["done"] is False


class TestTransport:
    """Request decoding and routing."""

    def test_query_via_get(self, client):
        resp = client.get("/graphql", params={"query": "{ todoList { id } }"})

        assert resp.status_code == 200
        assert len(resp.json()["data"]["todoList"]) == len(DEFAULT_TODOS)

    def test_mutation_via_get_is_refused(self, client, run_graphql):
        resp = client.get(
            "/graphql", params={"query": 'mutation { createTodo(text: "nope") { id } }'}
        )

        assert resp.status_code != 200
        assert "nope" not in [todo["text"] for todo in list_todos(run_graphql)]
        assert len(list_todos(run_graphql)) == len(DEFAULT_TODOS)

    def test_malformed_body_is_transport_error(self, client):
        resp = client.post(
            "/graphql", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert resp.status_code == 400
        assert "data" not in resp.text

    def test_missing_query_is_transport_error(self, client):
        resp = client.post("/graphql", json={"variables": {}})

        assert resp.status_code == 400

    def test_root_redirects_to_explorer(self, client):
        resp = client.get("/", follow_redirects=False)

        assert resp.status_code in (302, 307)
        assert resp.headers["location"] == "/graphql"

    def test_explorer_is_served_to_browsers(self, client):
        resp = client.get("/graphql", headers={"Accept": "text/html"})

        assert resp.status_code == 200
        assert "graphiql" in resp.text.lower()

    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.json()["database"] == "ok"
