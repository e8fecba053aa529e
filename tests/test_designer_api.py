"""Tests for the designer HTTP endpoints"""

import json

from form_designer.views.projector import field_input_name


def _add(api_client, field_type):
    response = api_client.post("/designer/fields", json={"field_type": field_type})
    assert response.status_code == 200, response.text
    return response.json()


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_initial_state(api_client):
    response = api_client.get("/designer")

    assert response.status_code == 200
    state = response.json()
    assert state["mode"] == "edit"
    assert state["selected_field_id"] is None
    assert state["builder"]["kind"] == "empty"
    assert state["properties"]["kind"] == "empty"
    assert state["preview"] is None


def test_add_dropdown_field(api_client):
    state = _add(api_client, "dropdown")

    (row,) = state["builder"]["rows"]
    assert row["label"] == "Dropdown"
    assert row["highlighted"] is True
    assert state["selected_field_id"] == row["field_id"]
    options = state["properties"]["options_editor"]["options"]
    assert [o["value"] for o in options] == ["Option 1", "Option 2"]


def test_update_property_and_remove_field(api_client):
    field_id = _add(api_client, "text")["selected_field_id"]

    response = api_client.patch(
        f"/designer/fields/{field_id}", json={"property": "required", "value": True}
    )
    assert response.json()["properties"]["required_toggle"]["checked"] is True

    response = api_client.delete(f"/designer/fields/{field_id}")
    state = response.json()
    assert state["selected_field_id"] is None
    assert state["builder"]["kind"] == "empty"


def test_update_property_coerces_or_ignores_mistyped_values(api_client, store):
    field_id = _add(api_client, "text")["selected_field_id"]
    api_client.patch(
        f"/designer/fields/{field_id}", json={"property": "required", "value": True}
    )

    response = api_client.patch(
        f"/designer/fields/{field_id}", json={"property": "required", "value": "false"}
    )
    assert response.status_code == 200
    assert response.json()["properties"]["required_toggle"]["checked"] is False

    response = api_client.patch(
        f"/designer/fields/{field_id}", json={"property": "label", "value": True}
    )
    assert response.status_code == 200
    assert response.json()["builder"]["rows"][0]["label"] == "Text Field"
    assert json.loads(store.writes[-1][1])[0]["required"] is False

    state = api_client.post("/designer/preview").json()
    assert state["preview"]["fields"][0]["required"] is False


def test_unknown_field_is_not_an_error(api_client):
    _add(api_client, "text")

    for response in (
        api_client.delete("/designer/fields/missing"),
        api_client.post("/designer/fields/missing/select"),
        api_client.post("/designer/fields/missing/options"),
        api_client.delete("/designer/fields/missing/options/0"),
    ):
        assert response.status_code == 200
        assert len(response.json()["builder"]["rows"]) == 1


def test_option_endpoints(api_client):
    field_id = _add(api_client, "radio")["selected_field_id"]

    api_client.post(f"/designer/fields/{field_id}/options")
    state = api_client.delete(f"/designer/fields/{field_id}/options/0").json()

    options = state["properties"]["options_editor"]["options"]
    assert [o["value"] for o in options] == ["Option 2", "Option 3"]


def test_text_input_is_pending_until_selection_changes(api_client, api_designer):
    first_id = _add(api_client, "text")["selected_field_id"]
    second_id = _add(api_client, "text")["selected_field_id"]
    api_client.post(f"/designer/fields/{first_id}/select")

    state = api_client.post(
        f"/designer/fields/{first_id}/input", json={"property": "label", "value": "Name"}
    ).json()
    assert state["pending_edits"] == 1
    assert state["properties"]["label_editor"]["value"] == "Text Field"

    state = api_client.post(f"/designer/fields/{second_id}/select").json()
    assert state["pending_edits"] == 0
    assert state["builder"]["rows"][0]["label"] == "Name"


def test_option_text_input_commits_on_preview(api_client):
    field_id = _add(api_client, "dropdown")["selected_field_id"]
    api_client.put(f"/designer/fields/{field_id}/options/1", json={"value": "Blue"})

    state = api_client.post("/designer/preview").json()

    assert state["mode"] == "preview"
    choices = state["preview"]["fields"][0]["widget"]["choices"]
    assert [c["value"] for c in choices] == ["Option 1", "Blue"]


def test_preview_submit_and_back_to_edit(api_client):
    field_id = _add(api_client, "email")["selected_field_id"]
    name = field_input_name(field_id)
    api_client.post("/designer/preview")

    response = api_client.post(
        "/designer/preview/submit", json={"values": {name: "ada@example.com"}}
    )
    assert response.status_code == 200
    assert response.json()["data"] == {name: "ada@example.com"}

    state = api_client.post("/designer/edit").json()
    assert state["mode"] == "edit"
    assert state["preview"] is None


def test_submit_outside_preview_conflicts(api_client):
    response = api_client.post("/designer/preview/submit", json={"values": {}})

    assert response.status_code == 409


def test_export_download(api_client, store):
    _add(api_client, "checkbox")

    response = api_client.get("/designer/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert 'filename="form-definition.json"' in response.headers["content-disposition"]
    assert json.loads(response.content)[0]["type"] == "checkbox"
    assert json.loads(store.writes[-1][1]) == json.loads(response.content)


def test_invalid_payload_is_rejected(api_client):
    response = api_client.post("/designer/fields", json={})

    assert response.status_code == 422
