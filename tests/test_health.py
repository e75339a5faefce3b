def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "service": "booking-payment-reconciler"}


def test_health_live(client):
    assert client.get("/health/live").status_code == 200


def test_health_ready_in_memory(client):
    res = client.get("/health/ready")

    assert res.status_code == 200
    assert res.json() == {"status": "ready", "checks": {"storage": "in_memory"}}
