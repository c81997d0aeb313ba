from __future__ import annotations

from fastapi.testclient import TestClient

DOC = [
    {"type": "heading-one", "children": [{"text": "T"}]},
    {"type": "paragraph", "children": [{"text": "Click "}, {"text": "Save", "bold": True}]},
]


def test_step_content_round_trips(client: TestClient, tutorial_id: int):
    created = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": DOC})
    assert created.status_code == 200
    sid = created.json()["id"]

    got = client.get(f"/steps/{sid}")
    assert got.status_code == 200
    body = got.json()
    assert body["content"] == DOC
    assert body["title"] == "Intro"
    assert body["order"] == 1
    assert body["tutorial_id"] == tutorial_id
    assert body["tutorial"]["id"] == tutorial_id
    assert body["tutorial"]["project"]["name"] == "Billing"


def test_create_step_is_first_or_create(client: TestClient, tutorial_id: int):
    a = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": DOC}).json()
    b = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": DOC}).json()
    assert a["id"] == b["id"]

    # Any differing key field yields a new step.
    c = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 2, "content": DOC}).json()
    d = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": []}).json()
    assert len({a["id"], c["id"], d["id"]}) == 3


def test_create_step_requires_title(client: TestClient, tutorial_id: int):
    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"order": 1}).status_code == 422
    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"title": ""}).status_code == 422
    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "t" * 256}).status_code == 422


def test_duplicate_orders_are_allowed(client: TestClient, tutorial_id: int):
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "A", "order": 1})
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "B", "order": 1})

    steps = client.get(f"/tutorials/{tutorial_id}/steps").json()
    assert [(s["title"], s["order"]) for s in steps] == [("A", 1), ("B", 1)]


def test_list_steps_sorted_by_order_with_unordered_last(client: TestClient, tutorial_id: int):
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "none-1"})
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "ten", "order": 10})
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "two", "order": 2})
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "none-2"})
    client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "zero", "order": 0})

    r = client.get(f"/tutorials/{tutorial_id}/steps")
    assert r.status_code == 200
    steps = r.json()
    assert [s["title"] for s in steps] == ["zero", "two", "ten", "none-1", "none-2"]
    assert all(s["tutorial"]["project"]["name"] == "Billing" for s in steps)


def test_patch_order_only_leaves_other_fields(client: TestClient, tutorial_id: int):
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": DOC}).json()[
        "id"
    ]

    r = client.patch(f"/steps/{sid}", json={"order": 5})
    assert r.status_code == 200
    assert r.json()["order"] == 5

    body = client.get(f"/steps/{sid}").json()
    assert body["order"] == 5
    assert body["title"] == "Intro"
    assert body["content"] == DOC


def test_patch_skips_empty_values(client: TestClient, tutorial_id: int):
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1, "content": DOC}).json()[
        "id"
    ]

    r = client.patch(f"/steps/{sid}", json={"title": "", "order": None, "content": []})
    assert r.status_code == 200
    body = r.json()
    assert (body["title"], body["order"], body["content"]) == ("Intro", 1, DOC)


def test_patch_order_zero_is_applied(client: TestClient, tutorial_id: int):
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 3}).json()["id"]

    assert client.patch(f"/steps/{sid}", json={"order": 0}).json()["order"] == 0


def test_patch_title_and_content(client: TestClient, tutorial_id: int):
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro", "order": 1}).json()["id"]
    new_doc = [{"type": "paragraph", "children": [{"text": "New"}]}]

    body = client.patch(f"/steps/{sid}", json={"title": "Welcome", "content": new_doc}).json()
    assert body["title"] == "Welcome"
    assert body["content"] == new_doc
    assert body["order"] == 1


def test_delete_step(client: TestClient, tutorial_id: int):
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro"}).json()["id"]

    r = client.delete(f"/steps/{sid}")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get(f"/steps/{sid}").status_code == 404
    assert client.get(f"/tutorials/{tutorial_id}/steps").json() == []


def test_unknown_step_is_404(client: TestClient):
    r = client.get("/steps/999")
    assert r.status_code == 404
    assert r.json() == {"detail": "Step not found"}
    assert client.patch("/steps/999", json={"order": 1}).status_code == 404
    assert client.delete("/steps/999").status_code == 404


def test_create_step_keys_content_by_json_type(client: TestClient, tutorial_id: int):
    a = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "content": {"done": 0}}).json()
    b = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "content": {"done": False}}).json()

    assert a["id"] != b["id"]
    assert b["content"] == {"done": False}
    assert client.get(f"/steps/{b['id']}").json()["content"]["done"] is False


def test_create_step_with_same_keys_in_other_key_order_is_reused(client: TestClient, tutorial_id: int):
    a = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "content": {"x": 1, "y": 2}}).json()
    b = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "content": {"y": 2, "x": 1}}).json()

    assert a["id"] == b["id"]


def test_out_of_range_order_is_rejected(client: TestClient, tutorial_id: int):
    too_big = 2**40
    sid = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "order": 1}).json()["id"]

    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "order": too_big}).status_code == 422
    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "S", "order": -(2**31) - 1}).status_code == 422
    assert client.patch(f"/steps/{sid}", json={"order": too_big}).status_code == 422
    assert client.post(f"/tutorials/{tutorial_id}/steps-many", json=[{"order": too_big}]).status_code == 422

    assert client.get(f"/steps/{sid}").json()["order"] == 1
    assert [s["id"] for s in client.get(f"/tutorials/{tutorial_id}/steps").json()] == [sid]


def test_order_bounds_are_inclusive(client: TestClient, tutorial_id: int):
    hi = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "hi", "order": 2**31 - 1})
    lo = client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "lo", "order": -(2**31)})

    assert hi.status_code == 200
    assert lo.status_code == 200
    assert [s["title"] for s in client.get(f"/tutorials/{tutorial_id}/steps").json()] == ["lo", "hi"]


def test_create_step_locks_parent_tutorial(client: TestClient, tutorial_id: int, monkeypatch):
    from helpcenter.repositories.base import Repository

    locked = []
    real_for_update = Repository.for_update

    def spy(self, obj_id):
        locked.append((self.entity, obj_id))
        return real_for_update(self, obj_id)

    monkeypatch.setattr(Repository, "for_update", spy)

    assert client.post(f"/tutorials/{tutorial_id}/steps", json={"title": "Intro"}).status_code == 200
    assert locked == [("Tutorial", tutorial_id)]
