import pytest

from dashboard.guards import InFlightGuard
from dashboard.tables import NO_ROWS_CODE, RowNotFoundError

NO_ROWS_MESSAGE = "JSON object requested, multiple (or no) rows returned"


class FakeCollection:
    """In-memory stand-in for dashboard.tables.Collection; records every call."""

    def __init__(self, service, name):
        self.service = service
        self.name = name
        self.count_value = 0
        self.rows = []
        self.by_id = {}
        self.single = None
        self.errors = {}
        self.next_id = 1

    def _call(self, op, *args):
        self.service.calls.append((self.name, op) + args)
        error = self.errors.get(op)
        if error is not None:
            raise error

    def count(self):
        self._call("count")
        return self.count_value

    def list_recent(self, limit, order_by="created_at"):
        self._call("list_recent", limit)
        return list(self.rows[:limit])

    def get(self, ident):
        self._call("get", ident)
        if str(ident) not in self.by_id:
            raise RowNotFoundError(NO_ROWS_MESSAGE, NO_ROWS_CODE)
        return dict(self.by_id[str(ident)])

    def get_single(self):
        self._call("get_single")
        if self.single is None:
            raise RowNotFoundError(NO_ROWS_MESSAGE, NO_ROWS_CODE)
        return dict(self.single)

    def update(self, ident, record):
        self._call("update", ident, dict(record))
        return [dict(record, id=ident)]

    def insert(self, record):
        self._call("insert", dict(record))
        row = dict(record, id=self.next_id)
        self.next_id += 1
        return [row]


class FakeDataService:
    def __init__(self):
        self.calls = []
        self._collections = {}

    def collection(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(self, name)
        return self._collections[name]

    @property
    def posts(self):
        return self.collection("posts")

    @property
    def pages(self):
        return self.collection("pages")

    @property
    def media(self):
        return self.collection("media")

    @property
    def settings(self):
        return self.collection("settings")

    def ops(self, op):
        return [call for call in self.calls if call[1] == op]


@pytest.fixture
def data():
    return FakeDataService()


@pytest.fixture
def guard():
    return InFlightGuard()


@pytest.fixture(autouse=True)
def _plain_http(settings):
    settings.SECURE_SSL_REDIRECT = False


@pytest.fixture
def use_data(monkeypatch, data):
    monkeypatch.setattr("dashboard.views.get_data_service", lambda request: data)
    return data


@pytest.fixture
def sample_post():
    return {
        "id": 7,
        "title": "First post",
        "slug": "first-post",
        "excerpt": "Short",
        "content": "<p>Body</p>",
        "featured_image": "https://example.com/a.jpg",
        "status": "draft",
        "meta_title": "First",
        "meta_description": "About the first post",
        "created_at": "2024-03-04T10:00:00+00:00",
    }
