import requests
from postgrest.exceptions import APIError


class FakeHTTPResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


class FakeSession:
    """requests.Session stand-in; responses keyed by URL substring, exceptions raised when given."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        for fragment, outcome in self.routes.items():
            if fragment in url:
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise requests.ConnectionError(f"No route for {url}")


class FakeRPCResponse:
    def __init__(self, data):
        self.data = data


class FakeRPCRequest:
    def __init__(self, client, name, params):
        self.client = client
        self.name = name
        self.params = params
        self.single_requested = False

    def single(self):
        self.single_requested = True
        return self

    def execute(self):
        self.client.calls.append((self.name, self.params, self.single_requested))
        outcome = self.client.results.get(self.name)
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return FakeRPCResponse(outcome(self.params))
        return FakeRPCResponse(outcome)


class FakeSupabaseClient:
    """Supabase client stand-in exposing rpc(...).single().execute()."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def rpc(self, name, params=None):
        return FakeRPCRequest(self, name, params or {})


def not_found_error():
    return APIError({
        "code": "PGRST116",
        "message": "JSON object requested, multiple (or no) rows returned",
        "details": "The result contains 0 rows",
        "hint": None,
    })
