import numpy as np
import pytest

from palette_engine.app import create_app
from palette_engine.store import PaletteStore


@pytest.fixture
def client():
    app = create_app(PaletteStore(rng=np.random.default_rng(1)))
    app.config["TESTING"] = True
    return app.test_client()


def test_generate(client):
    resp = client.get("/generate?algorithm=triadic&base=ff0000&count=3&saturation=70&lightness=50")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["algorithm"] == "triadic"
    assert data["baseColor"] == "#ff0000"
    assert len(data["colors"]) == 3


def test_generate_rejects_bad_color(client):
    resp = client.get("/generate?base=not-a-color")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_color"


def test_generate_rejects_bad_numbers(client):
    resp = client.get("/generate?saturation=abc")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_parameter"

    resp = client.get("/generate?count=50")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_count"


def test_unknown_algorithm_lists_supported(client):
    resp = client.get("/generate?algorithm=nope")
    assert resp.status_code == 400
    assert "gradient" in resp.get_json()["algorithms"]


def test_export_needs_palette(client):
    resp = client.get("/export/css")
    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "no_palette"


def test_export_download(client):
    client.get("/generate?algorithm=gradient&count=4")
    resp = client.get("/export/ase")
    assert resp.status_code == 200
    assert resp.mimetype == "application/octet-stream"
    assert resp.data[:4] == b"ASEF"
    assert 'filename="color-palette.ase"' in resp.headers["Content-Disposition"]

    resp = client.get("/export/css")
    assert b"--color-4" in resp.data

    resp = client.get("/export/bogus")
    assert resp.status_code == 400


def test_history_and_favorites(client):
    ids = [client.get("/generate").get_json()["id"] for _ in range(3)]
    history = client.get("/history").get_json()
    assert [p["id"] for p in history] == list(reversed(ids))

    favs = client.post(f"/favorites/{ids[0]}").get_json()
    assert [p["id"] for p in favs] == [ids[0]]
    assert client.post("/favorites/missing").status_code == 404
    assert client.delete(f"/favorites/{ids[0]}").get_json() == []

    assert client.delete("/history").get_json() == []


def test_random(client):
    resp = client.get("/random")
    assert resp.status_code == 200
    assert 3 <= len(resp.get_json()["colors"]) <= 8


def test_templates(client):
    pastel = client.get("/templates?category=pastel").get_json()
    assert {t["id"] for t in pastel} == {"soft-pastels", "lavender-dreams"}
    ocean = client.get("/templates?q=ocean").get_json()
    assert [t["id"] for t in ocean] == ["ocean-gradient"]


def test_template_then_accessibility(client):
    assert client.get("/accessibility").status_code == 409
    palette = client.post("/templates/rainbow").get_json()
    assert palette["colors"][0] == "#ff0000"
    report = client.get("/accessibility").get_json()
    assert report["total"] == 2 * 5 + 10
    assert report["paletteId"] == palette["id"]
    assert client.post("/templates/nope").status_code == 404


@pytest.mark.parametrize("count", ["2.5", "abc"])
def test_non_integer_count_is_a_count_error(client, count):
    resp = client.get(f"/generate?count={count}")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_count"


def test_simulate(client):
    assert len(client.get("/simulate").get_json()) == 7
    assert client.get("/simulate/protanopia").status_code == 409

    client.post("/templates/rainbow")
    data = client.get("/simulate/Protanopia").get_json()
    assert data["simulation"] == "protanopia"
    assert data["original"][0] == "#ff0000"
    assert data["colors"][0] == "#918e00"
    assert len(data["colors"]) == len(data["original"])

    resp = client.get("/simulate/x-ray")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_parameter"


def test_compare(client):
    generated = client.get("/generate?algorithm=triadic&base=ff0000").get_json()
    first = generated["id"]
    second = client.get("/generate?algorithm=analogous&base=0000ff").get_json()["id"]

    same = client.get(f"/compare?first={first}&second={first}").get_json()
    assert same["sharedColors"] == list(dict.fromkeys(generated["colors"]))
    assert same["sameAlgorithm"] is True

    result = client.get(f"/compare?first={first}").get_json()
    assert result["second"] == second
    assert result["sameAlgorithm"] is False
    assert 0 <= result["similarity"] < 100

    assert client.get("/compare").status_code == 400
    assert client.get("/compare?first=missing").status_code == 404
