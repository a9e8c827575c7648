import pytest
import requests

from client import EnergyClient
from errors import InternalError, MissingParameters, StoreUnavailable


class Resp:
    def __init__(self, status=200, payload=None):
        self.status_code = status
        self.payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self.payload is None:
            raise ValueError("no json")
        return self.payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


def _client(resp, calls=None):
    c = EnergyClient("http://energy.local/", timeout=5)

    def fake_request(method, url, json=None, timeout=None):
        if calls is not None:
            calls.append((method, url, json, timeout))
        return resp

    c.session.request = fake_request
    return c


def test_calculate_posts_inputs():
    calls = []
    c = _client(Resp(200, {"monthlyKwh": 150.0}), calls)
    assert c.calculate(power=1000, hoursPerDay=5) == {"monthlyKwh": 150.0}
    assert calls == [("POST", "http://energy.local/api/calculate",
                      {"power": 1000, "hoursPerDay": 5}, 5)]


def test_missing_parameters_mapped():
    c = _client(Resp(400, {"error": "Missing input parameters", "missing": ["power"]}))
    with pytest.raises(MissingParameters) as exc:
        c.calculate(hoursPerDay=1)
    assert exc.value.missing == ["power"]


def test_store_unavailable_mapped():
    c = _client(Resp(501, {"error": "Database not configured", "code": "StoreUnavailable"}))
    with pytest.raises(StoreUnavailable):
        c.simulations()


def test_internal_error_without_body():
    c = _client(Resp(500))
    with pytest.raises(InternalError) as exc:
        c.save_simulation(power=1)
    assert exc.value.message == "Internal server error"


def test_other_http_errors_propagate():
    c = _client(Resp(404))
    with pytest.raises(requests.HTTPError):
        c.simulations()


def test_history_enabled():
    assert _client(Resp(200, {"status": "ok", "persistence": True})).history_enabled()
    assert not _client(Resp(200, {"status": "ok", "persistence": False})).history_enabled()


def test_against_flask_app(bare_app, sample):
    # route the client through Flask's test client instead of the network
    tc = bare_app.test_client()
    c = EnergyClient("http://localhost/")

    def via_test_client(method, url, json=None, timeout=None):
        r = tc.open(url, method=method, json=json)
        return Resp(r.status_code, r.get_json())

    c.session.request = via_test_client
    assert c.calculate(**sample)["annualKwh"] == 1800.0
    assert not c.history_enabled()
    with pytest.raises(StoreUnavailable):
        c.simulations()
