import requests
from typing import Optional, Dict, Any, List
from urllib.parse import urljoin

from errors import InternalError, MissingParameters, StoreUnavailable

_BY_STATUS = {
    MissingParameters.status: MissingParameters,
    StoreUnavailable.status: StoreUnavailable,
    InternalError.status: InternalError,
}


class EnergyClient:
    """Talks to the /api endpoints; no retries."""

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _raise_api_error(self, r: requests.Response):
        kind = _BY_STATUS.get(r.status_code)
        if kind is None:
            r.raise_for_status()
            return
        try:
            body = r.json()
        except ValueError:
            body = {}
        if kind is MissingParameters:
            raise MissingParameters(body.get("missing") or ())
        raise kind(body.get("error"))

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = urljoin(self.base_url, path.lstrip('/'))
        r = self.session.request(method, url, json=json, timeout=self.timeout)
        if not r.ok:
            self._raise_api_error(r)
        return r.json()

    def calculate(self, **inputs) -> Dict[str, Any]:
        return self._request("POST", "api/calculate", json=inputs)

    def simulations(self) -> List[Dict[str, Any]]:
        return self._request("GET", "api/simulations")

    def save_simulation(self, **inputs) -> Dict[str, Any]:
        return self._request("POST", "api/simulations", json=inputs)

    def history_enabled(self) -> bool:
        return bool(self._request("GET", "api/health").get("persistence"))
