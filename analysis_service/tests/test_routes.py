"""
Pruebas de los endpoints HTTP
=============================

Usa el TestClient de FastAPI sobre la app creada en `rustfront.main`.
"""

from rustfront import __version__
from rustfront.config import settings


RESPONSE_KEYS = {"success", "tokens", "parseTree", "ast", "errors"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": settings.APP_NAME, "version": __version__}


def test_analyse_raw_body(client, hello_world):
    """El editor web envía el código como cuerpo de texto plano."""
    response = client.post("/analyse", content=hello_world, headers={"Content-Type": "text/plain"})

    assert response.status_code == 200
    data = response.json()
    assert set(data) == RESPONSE_KEYS
    assert data["success"] is True
    assert data["errors"] == []
    assert data["tokens"][0] == {"type": "FN", "text": "fn", "line": 1, "column": 0}
    assert data["tokens"][-1]["type"] == "EOF"
    assert data["parseTree"]["lisp"].startswith("(crate ")
    assert data["parseTree"]["dot"].startswith("digraph CST {")
    assert "function_declaration" in data["ast"]["dot"]


def test_analyze_json(client, hello_world):
    response = client.post("/analyze", json={"code": hello_world})

    assert response.status_code == 200
    assert response.json() == client.post("/analyse", content=hello_world).json()


def test_syntax_error_is_still_200(client):
    response = client.post("/analyze", json={"code": "fn main() {"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["errors"]
    assert set(data["errors"][0]) == {"line", "column", "message"}


def test_analyze_requires_code(client):
    assert client.post("/analyze", json={}).status_code == 422


def test_reduce_external_cst(client):
    """CST estilo ANTLR: se quita el sufijo Context y la puntuación."""
    cst = {
        "kind": "rule",
        "name": "CallContext",
        "children": [
            {"kind": "terminal", "text": "f"},
            {"kind": "terminal", "text": "("},
            {"kind": "terminal", "text": "x"},
            {"kind": "terminal", "text": ")"},
        ],
    }
    response = client.post("/reduce", json={"cst": cst})

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"parseTree", "ast"}
    assert data["parseTree"]["lisp"] == "(CallContext f ( x ))"
    assert "label=CallContext" in data["parseTree"]["dot"]
    assert "[label=Call " in data["ast"]["dot"]
    assert 'label="("' not in data["ast"]["dot"]


def test_reduce_rejects_invalid_tree(client):
    response = client.post("/reduce", json={"cst": {"kind": "rule", "children": []}})
    assert response.status_code == 422


def test_debug_dump_enabled_by_settings(client, monkeypatch, tmp_path, hello_world):
    monkeypatch.setattr(settings, "DEBUG_DUMP", True)
    monkeypatch.setattr(settings, "DEBUG_DUMP_DIR", str(tmp_path))

    client.post("/analyze", json={"code": hello_world})

    assert len(list(tmp_path.glob("debug_*.json"))) == 1
    assert len(list(tmp_path.glob("analysis_result_*.json"))) == 1
