"""
End-to-end tests of the HTTP surface through FastAPI's TestClient.

The `client` fixture (see conftest) is bound to the `storage` fixture, so
tests seed and inspect state directly through the store.
"""

from golinks.errors import StoreUnavailable
from golinks.storage.storage import Storage
from main import create_app
from fastapi.testclient import TestClient


def test_index_lists_links_by_hits(client, storage):
    storage.create("rare", "https://rare.example")
    popular = storage.create("popular", "https://popular.example")
    storage.record_hit(popular)

    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert response.text.index("popular") < response.text.index("rare")


def test_index_prefills_name(client):
    response = client.get("/", params={"name": "newlink"})
    assert 'value="newlink"' in response.text


def test_index_escapes_html(client, storage):
    storage.create("<b>x</b>", "https://x.example")
    response = client.get("/")
    assert "<b>x</b>" not in response.text
    assert "&lt;b&gt;x&lt;/b&gt;" in response.text


def test_links_redirects_home(client):
    response = client.get("/links")
    assert response.status_code == 302
    assert response.headers["location"] == "/"


def test_create_link(client, storage):
    response = client.post("/links", data={"name": "docs", "url": "https://docs.example"})
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    link = storage.find_by_name("docs")
    assert link.url == "https://docs.example"
    assert link.hits == 0


def test_create_link_missing_url(client, storage):
    response = client.post("/links", data={"name": "docs"})
    assert response.status_code == 400
    assert response.text == "Error: url cannot be empty"
    assert storage.links == {}


def test_create_link_duplicate_name(client, storage):
    storage.create("docs", "https://one.example")
    response = client.post("/links", data={"name": "docs", "url": "https://two.example"})
    assert response.status_code == 409
    assert response.text.startswith("Error: ")
    assert storage.find_by_name("docs").url == "https://one.example"


def test_resolve_redirects_and_counts(client, storage):
    storage.create("docs", "https://docs.example")
    response = client.get("/docs")
    assert response.status_code == 302
    assert response.headers["location"] == "https://docs.example"
    assert storage.find_by_name("docs").hits == 1


def test_resolve_with_template_segments(client, storage):
    storage.create("gh", "https://github.com/%s/%s")
    response = client.get("/gh/psf/requests")
    assert response.status_code == 302
    assert response.headers["location"] == "https://github.com/psf/requests"


def test_resolve_trailing_slash_means_no_segments(client, storage):
    storage.create("gh", "https://github.com/%s")
    response = client.get("/gh/")
    assert response.status_code == 302
    assert response.headers["location"] == "https://github.com/%s"


def test_resolve_too_few_segments(client, storage):
    storage.create("gh", "https://github.com/%s/%s")
    response = client.get("/gh/psf")
    assert response.status_code == 400
    assert "expects 2 path segment" in response.text
    assert storage.find_by_name("gh").hits == 1


def test_resolve_missing_offers_creation(client, storage):
    response = client.get("/nope")
    assert response.status_code == 404
    assert 'Link "go/nope" not found!' in response.text
    assert "/?name=nope" in response.text
    assert storage.links == {}


def test_suggest(client, storage):
    storage.create("abacus", "https://math.example")
    storage.create("abalone", "https://sea.example")
    storage.create("cab", "https://taxi.example")
    response = client.get("/links/suggest", params={"q": "aba"})
    assert response.status_code == 200
    assert response.json() == ["aba", ["abacus", "abalone"]]


def test_search_exact_redirects(client, storage):
    storage.create("docs", "https://docs.example")
    response = client.get("/links/search", params={"q": "docs"})
    assert response.status_code == 302
    assert response.headers["location"] == "/docs"
    assert storage.find_by_name("docs").hits == 0


def test_search_lists_prefix_matches(client, storage):
    storage.create("docs-api", "https://api.example")
    storage.create("other", "https://docs.example")
    response = client.get("/links/search", params={"q": "docs"})
    assert response.status_code == 200
    assert "docs-api" in response.text
    assert "other" not in response.text


def test_search_no_results(client):
    response = client.get("/links/search", params={"q": "zzz"})
    assert "No results" in response.text


def test_opensearch_descriptor(client):
    response = client.get("/links/opensearch.xml")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/opensearchdescription+xml")
    assert "/links/suggest" in response.text
    assert "{searchTerms}" in response.text


def test_delete_link(client, storage):
    link = storage.create("docs", "https://docs.example")
    response = client.get(f"/links/{link.id}/delete")
    assert response.status_code == 302
    assert storage.links == {}


def test_edit_form(client, storage):
    link = storage.create("docs", "https://docs.example")
    response = client.get(f"/links/{link.id}/edit")
    assert response.status_code == 200
    assert 'name="action" value="do_edit"' in response.text
    assert "https://docs.example" in response.text


def test_edit_partial_update(client, storage):
    link = storage.create("docs", "https://docs.example")
    storage.record_hit(link)
    response = client.get(
        f"/links/{link.id}/edit", params={"action": "do_edit", "url": "https://new.example"}
    )
    assert response.status_code == 302
    updated = storage.find_by_id(link.id)
    assert updated.name == "docs"
    assert updated.url == "https://new.example"
    assert updated.hits == 1


def test_edit_rename_collision(client, storage):
    storage.create("taken", "https://a.example")
    link = storage.create("docs", "https://b.example")
    response = client.get(f"/links/{link.id}/edit", params={"action": "do_edit", "name": "taken"})
    assert response.status_code == 409
    assert storage.find_by_id(link.id).name == "docs"


def test_health_returns_ok(client):
    resp = client.get("/links/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class _DownStorage:
    """Stands in for a backend whose database cannot be reached."""

    def initialize(self):
        pass

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise StoreUnavailable("connection refused")
        return fail


def test_store_unavailable_is_server_error():
    client = TestClient(create_app(storage=_DownStorage()))
    response = client.get("/docs")
    assert response.status_code == 503
    assert response.text == "Error: link store unavailable"


def test_store_down_at_startup_does_not_break_app_creation():
    class _DownAtStartup(_DownStorage):
        def initialize(self):
            raise StoreUnavailable("connection refused")

    client = TestClient(create_app(storage=_DownAtStartup()))
    assert client.get("/links/health").json() == {"status": "ok"}
    assert client.get("/docs").status_code == 503


class _DeletedBeforeHitStorage(Storage):
    def record_hit(self, link):
        self.delete(link)
        return super().record_hit(link)


def test_resolve_link_deleted_mid_request_offers_creation():
    storage = _DeletedBeforeHitStorage()
    storage.create("docs", "https://docs.example")
    client = TestClient(create_app(storage=storage), follow_redirects=False)

    response = client.get("/docs")

    assert response.status_code == 404
    assert "/?name=docs" in response.text
