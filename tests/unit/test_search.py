"""
Unit tests for LinkSearch (suggest and search-with-redirect).
"""

from golinks.resolver.resolver import RedirectTarget
from golinks.search.search import link_path


def _seed(storage):
    storage.create("abacus", "https://math.example")
    storage.create("abalone", "https://sea.example")
    storage.create("cab", "https://taxi.example")


def test_suggest_by_name_prefix(search, storage):
    _seed(storage)
    assert search.suggest("aba") == ["aba", ["abacus", "abalone"]]


def test_suggest_also_matches_url_substring(search, storage):
    _seed(storage)
    assert search.suggest("taxi") == ["taxi", ["cab"]]


def test_suggest_missing_query_lists_everything(search, storage):
    _seed(storage)
    assert search.suggest(None) == ["", ["abacus", "abalone", "cab"]]


def test_suggest_records_no_hits(search, storage):
    _seed(storage)
    search.suggest("a")
    assert all(l.hits == 0 for l in storage.links.values())


def test_search_exact_match_redirects_to_link(search, storage):
    storage.create("docs", "https://docs.example")
    storage.create("docs2", "https://docs2.example")
    assert search.search_or_list("docs") == RedirectTarget("/docs")


def test_search_without_exact_match_lists_prefix_only(search, storage):
    _seed(storage)
    storage.create("zzz", "https://abacus.example")
    results = search.search_or_list("ab")
    assert [l.name for l in results] == ["abacus", "abalone"]


def test_search_no_match_returns_empty_listing(search, storage):
    _seed(storage)
    assert search.search_or_list("nothing") == []


def test_search_records_no_hits(search, storage):
    storage.create("docs", "https://docs.example")
    search.search_or_list("docs")
    assert storage.find_by_name("docs").hits == 0


def test_link_path_quotes_name():
    assert link_path("docs") == "/docs"
    assert link_path("a b/c") == "/a%20b%2Fc"
