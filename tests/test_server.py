from fastapi.testclient import TestClient

from server import app

RECT = '{"type":"rectangle","id":"r1","x":0,"y":0,"width":100,"height":50}'


def test_list_tools():
    client = TestClient(app)
    response = client.get("/tools")
    assert response.status_code == 200
    assert {tool["name"] for tool in response.json()["tools"]} == {
        "excalidraw_read_me",
        "create_excalidraw_diagram",
    }


def test_unknown_tool_is_404():
    client = TestClient(app)
    response = client.post("/tools/nope", json={"arguments": {}})
    assert response.status_code == 404


def test_read_me_without_body():
    client = TestClient(app)
    response = client.post("/tools/excalidraw_read_me")
    assert response.status_code == 200
    assert response.json()["isError"] is False


def test_render_call_and_shutdown_on_exit(surfaces, tmp_path):
    target = tmp_path / "out.svg"
    with TestClient(app) as client:
        response = client.post(
            "/tools/create_excalidraw_diagram",
            json={"arguments": {"elements": f"[{RECT}]", "outputPath": str(target), "format": "svg"}},
        )
        assert response.status_code == 200
        assert response.json()["isError"] is False
        assert client.get("/health").json()["render_session"] == "live"

    assert target.exists()
    assert surfaces.last.closed


def test_render_errors_are_returned_in_body(surfaces):
    client = TestClient(app)
    response = client.post(
        "/tools/create_excalidraw_diagram",
        json={"arguments": {"elements": "not json"}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is True
    assert body["content"][0]["text"].startswith("Invalid JSON in elements:")
