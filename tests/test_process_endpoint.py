import json
from profile_processor import settings


def test_process_batch_of_profiles(client, make_profile, sample_positions):
    payload = [
        make_profile(urn="u1", headline="Go Go", positions=sample_positions),
        make_profile(urn="u2", languages=[], supportedLocales=[{"country": "FR"}]),
        {"firstName": "no urn"},
    ]
    r = client.post("/api/process-profiles", json=payload)
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["metadata"]["processed"] == 2
    assert out["metadata"]["filtered"] == 2
    assert out["metadata"]["total"] == 3
    assert out["errors"] == []

    first, second = out["items"]
    assert first["urn"] == "u1"
    assert len(first["experiences"]) == 2
    assert first["keywords"].split(" ").count("Go") == 1
    assert second["languages"] == "Français"
    assert second["years_of_experience"] == 99
    assert second["profil_details"]["urn"] == "u2"

def test_process_single_object(client, make_profile):
    r = client.post("/api/process-profiles", json=make_profile())
    assert r.status_code == 200
    out = r.json()
    assert out["metadata"]["total"] == 1
    assert out["items"][0]["linkedin_url"] == "https://linkedin.com/in/alex-chen"

def test_process_wrapped_items(client, make_profile):
    r = client.post("/api/process-profiles", json=[{"json": make_profile(urn="w1")}])
    assert r.status_code == 200
    assert [i["urn"] for i in r.json()["items"]] == ["w1"]

def test_process_rejects_scalar_body(client):
    r = client.post("/api/process-profiles", json="not a profile")
    assert r.status_code == 400
    body = r.json()
    assert body["error"].startswith("Invalid input format")
    assert body["received"] == "str"

def test_process_reports_decode_errors(client, make_profile):
    r = client.post("/api/process-profiles", json=[make_profile(urn="ok"), make_profile(urn="bad", username="%zz")])
    assert r.status_code == 200
    out = r.json()
    assert [i["urn"] for i in out["items"]] == ["ok"]
    assert out["metadata"]["failed"] == 1
    assert out["errors"][0]["urn"] == "bad"

def test_sample_run_uses_bundled_data(client):
    r = client.post("/api/test")
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["message"] == "Test completed successfully"
    assert out["processed"] == 2
    camille = out["items"][0]
    assert camille["public_linkedin_identifier"] == "camille-durand-é"
    assert camille["languages"] == "English, Français"
    assert len(camille["experiences"]) == 2
    assert camille["educations"] == [{"date": "2017 - 2019", "degree": "Master, Computer Science", "school": "INSA Lyon"}]

def test_sample_run_with_custom_file(client, tmp_path, monkeypatch, make_profile):
    path = tmp_path / "sample.json"
    path.write_text(json.dumps([{"json": make_profile(urn="t1")}]), encoding="utf-8")
    monkeypatch.setattr(settings, "TEST_DATA_PATH", path)
    r = client.post("/api/test")
    assert r.status_code == 200
    assert r.json()["items"][0]["urn"] == "t1"

def test_sample_run_missing_file(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "TEST_DATA_PATH", tmp_path / "missing.json")
    r = client.post("/api/test")
    assert r.status_code == 500
    assert r.json()["error"] == "Test failed"

def test_wrongly_typed_fields_still_return_200(client, make_profile):
    payload = [make_profile(urn="ok"), {"urn": "bad", "positions": [{"title": 123, "companyName": 42}]}]
    r = client.post("/api/process-profiles", json=payload)
    assert r.status_code == 200, r.text
    out = r.json()
    assert [i["urn"] for i in out["items"]] == ["ok", "bad"]
    assert out["items"][1]["companies"] == "Unknown Company"
    assert out["errors"] == []
