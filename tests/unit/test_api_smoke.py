"""
Module 06 - API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /tree returns the root label and shape
3. POST /proof returns a proof that POST /verify accepts
4. Errors use the {ok: false, error: {...}} envelope
5. POST /verify answers valid=false for tampered or malformed proofs
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from core.merkle import build_merkle_tree


# Create test client
client = TestClient(app)


ITEMS = ["a", "b", "c", "d", "e"]


class TestHealth:
    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "civisgrid-api", "version": "v1"}

    def test_root(self):
        assert client.get("/").json()["ok"] is True


class TestTree:
    def test_build_tree(self):
        response = client.post("/tree", json={"items": ITEMS})
        assert response.status_code == 200

        data = response.json()
        expected = build_merkle_tree([s.encode() for s in ITEMS])
        assert data["ok"] is True
        assert data["root_label"] == expected.root_label()
        assert data["leaf_count"] == 5
        assert data["node_count"] == 9
        assert data["height"] == 3

    def test_hex_items(self):
        response = client.post("/tree", json={"items": ["01", "02"], "encoding": "hex"})
        assert response.json()["root_label"] == build_merkle_tree([b"\x01", b"\x02"]).root_label()

    def test_empty_items(self):
        response = client.post("/tree", json={"items": []})
        assert response.status_code == 400

        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "EMPTY_INPUT"

    def test_bad_hex(self):
        response = client.post("/tree", json={"items": ["zz"], "encoding": "hex"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_unknown_encoding_rejected_by_schema(self):
        response = client.post("/tree", json={"items": ["a"], "encoding": "base64"})
        assert response.status_code == 422


class TestProofAndVerify:
    def test_proof_round_trip(self):
        response = client.post("/proof", json={"items": ITEMS, "item": "e"})
        assert response.status_code == 200
        proof = response.json()["proof"]
        assert len(proof["entries"]) == 1
        assert proof["entries"][0][1] == 0

        response = client.post("/verify", json={
            "item": "e",
            "entries": proof["entries"],
            "root_label": proof["root_label"],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["leaf_label"] == proof["leaf_label"]

    def test_proof_absent_item(self):
        response = client.post("/proof", json={"items": ITEMS, "item": "z"})
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "LABEL_NOT_FOUND"
        assert "label" in error["details"]

    def test_verify_wrong_item(self):
        proof = client.post("/proof", json={"items": ITEMS, "item": "a"}).json()["proof"]
        response = client.post("/verify", json={
            "item": "b",
            "entries": proof["entries"],
            "root_label": proof["root_label"],
        })
        assert response.status_code == 200
        assert response.json()["valid"] is False

    @pytest.mark.parametrize("entries", [[["zz", 0]], [["a" * 64, 3]], [1, 2], [{"side": 0}]])
    def test_verify_malformed(self, entries):
        response = client.post("/verify", json={
            "item": "a",
            "entries": entries,
            "root_label": "0" * 64,
        })
        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_verify_undecodable_item(self):
        response = client.post("/verify", json={
            "item": "xyz",
            "encoding": "hex",
            "entries": [],
            "root_label": "0" * 64,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["leaf_label"] is None


class TestUndecodableText:
    """Lone surrogates are valid JSON escapes but not encodable text."""

    HEADERS = {"Content-Type": "application/json"}

    def test_tree_rejects_lone_surrogate(self):
        response = client.post("/tree", content='{"items": ["a", "\\ud800"]}', headers=self.HEADERS)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_proof_rejects_lone_surrogate(self):
        response = client.post("/proof", content='{"items": ["a"], "item": "\\ud800"}', headers=self.HEADERS)
        assert response.status_code == 400

    def test_verify_lone_surrogate_is_invalid(self):
        body = '{"item": "\\ud800", "entries": [], "root_label": "' + "0" * 64 + '"}'
        response = client.post("/verify", content=body, headers=self.HEADERS)
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["leaf_label"] is None


class TestErrorEnvelope:
    def test_envelope_matches_error_model(self):
        from api.errors import APIError
        from core.schemas.errors import LabelNotFoundException

        exc = LabelNotFoundException("missing", label="a" * 64)
        api_error = APIError.from_exception(exc)

        assert api_error.status_code == 404
        assert api_error.to_response().error.model_dump() == (
            exc.to_error_model().model_dump(include={"code", "message", "details"})
        )
