from decoder_backend import metrics


def test_counters_start_at_zero(client):
    r = client.get("/api/metrics")
    assert r.status_code == 200
    assert r.json() == {
        "decode_ok": 0,
        "decode_error": 0,
        "dbc_loaded": 0,
        "dbc_parse_error": 0,
        "dbcs_in_memory": 0,
    }


def test_metrics_count_uploads_and_decodes(client, status_dbc):
    client.post("/api/dbc/upload", files={"file": ("status.dbc", status_dbc, "text/plain")})
    client.post("/api/dbc/decode-frame", json={"can_id": 256, "data": "1027FFE001000000"})
    client.post("/api/dbc/decode-frame", json={"can_id": 0x7FF, "data": "00"})
    client.post("/api/dbc/upload", files={"file": ("broken.dbc", "BO_ abc Broken: x ECU\n", "text/plain")})

    data = client.get("/api/metrics").json()
    assert data["dbc_loaded"] == 1
    assert data["decode_ok"] == 1
    assert data["decode_error"] == 1
    assert data["dbc_parse_error"] == 1
    assert data["dbcs_in_memory"] == 1


def test_registry_is_independent():
    registry = metrics.DecoderMetrics()
    registry.inc("custom", 3)
    assert registry.snapshot()["custom"] == 3
    assert registry.snapshot()["decode_ok"] == 0
    registry.reset()
    assert "custom" not in registry.snapshot()
