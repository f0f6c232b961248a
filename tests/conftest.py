import pytest


class FakeDB:
    """Stands in for ipdb.City: maps ip -> field dict, raises for unknown ips."""

    def __init__(self, records=None, error=None):
        self.records = records or {}
        self.error = error
        self.queries = []

    def find_map(self, ip, language):
        self.queries.append((ip, language))
        if self.error is not None:
            raise self.error
        if ip not in self.records:
            raise ValueError(f"ip not found: {ip}")
        return self.records[ip]


@pytest.fixture
def fake_db():
    return FakeDB({
        "1.2.3.4": {
            "country_name": "",
            "region_name": "Beijing",
            "city_name": "",
            "district_name": "",
            "isp_domain": "China Telecom",
        },
        "8.8.8.8": {
            "country_name": "United States",
            "region_name": " California ",
            "city_name": "Mountain View",
            "isp_domain": "Google",
        },
        "9.9.9.9": {
            "country_name": "",
            "region_name": "",
            "city_name": "",
        },
        "2001:db8::1": {
            "country_name": "Reserved",
        },
    })
