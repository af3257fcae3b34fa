"""
Main API module for the go-link service.

Responsibilities:
    - Expose the browser routes: index, create, edit, delete
    - Resolve `/<name>` and `/<name>/<segments...>` to redirects, counting hits
    - Serve typeahead suggestions, search-with-redirect and the OpenSearch descriptor

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory Storage by default; Postgres when GOLINKS_STORAGE_BACKEND=postgres.
    - Resolver and LinkSearch hold the semantics; routes only translate
      between HTTP and those calls.
    - Errors from golinks.errors are mapped to plain-text responses by
      exception handlers registered here, so no route handles them inline.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse, Response
from jinja2 import Environment

from golinks.config import settings
from golinks.errors import NotFound, StoreUnavailable, TemplateError, UniquenessError, ValidationError
from golinks.models import Link
from golinks.resolver.resolver import RedirectTarget, Resolver
from golinks.resolver.template import split_path
from golinks.search.search import LinkSearch
from golinks.storage.base import BaseStorage
from golinks.storage.storage_factory import get_storage
from golinks.web.pages import build_environment, render


def create_app(storage: Optional[BaseStorage] = None, pages: Optional[Environment] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Link store to use; defaults to the
            backend selected by `get_storage()`.
        pages (Optional[Environment]): Jinja2 environment for the HTML views;
            defaults to `build_environment()` with autoescaping on.

    Returns:
        FastAPI: A fully configured application with its own store.
    """
    app = FastAPI(
        title="Go Links",
        description="Shared short-name redirect service with hit counting and search",
        docs_url="/links/docs",
        redoc_url=None,
        openapi_url="/links/openapi.json",
    )
    log = logging.getLogger("golinks")

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    storage = storage if storage is not None else get_storage()
    try:
        storage.initialize()
    except StoreUnavailable:
        # keep serving; requests answer 503 until the store is reachable
        log.error("Link store unavailable at startup; schema not ensured", exc_info=True)
    pages = pages if pages is not None else build_environment()
    resolver = Resolver(storage)
    search = LinkSearch(storage)

    # ----------------------------------------------------------------
    # Error mapping
    # ----------------------------------------------------------------
    @app.exception_handler(ValidationError)
    @app.exception_handler(TemplateError)
    def _bad_request(request: Request, exc: Exception) -> Response:
        return PlainTextResponse(f"Error: {exc}", status_code=400)

    @app.exception_handler(UniquenessError)
    def _conflict(request: Request, exc: UniquenessError) -> Response:
        return PlainTextResponse(f"Error: {exc}", status_code=409)

    @app.exception_handler(NotFound)
    def _not_found(request: Request, exc: NotFound) -> Response:
        return PlainTextResponse("link not found", status_code=400)

    @app.exception_handler(StoreUnavailable)
    def _store_unavailable(request: Request, exc: StoreUnavailable) -> Response:
        log.error("Store unavailable while serving %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse("Error: link store unavailable", status_code=503)

    # ----------------------------------------------------------------
    # Utilities
    # ----------------------------------------------------------------
    def _load(link_id: str) -> Link:
        """Fetch a link by its path id; a non-numeric id is simply not found."""
        try:
            return storage.find_by_id(int(link_id))
        except ValueError:
            raise NotFound(f"no link with id {link_id!r}") from None

    def _home() -> RedirectResponse:
        return RedirectResponse(url="/", status_code=302)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/")
    def index(name: Optional[str] = None) -> HTMLResponse:
        """All links, most used first. `name` pre-fills the create form."""
        return HTMLResponse(render(pages, "index.html", links=storage.list_all_ordered_by_hits_desc(), name=name))

    @app.get("/links/health")
    def health():
        return {"status": "ok"}

    @app.get("/links")
    def links_home() -> RedirectResponse:
        return _home()

    @app.post("/links")
    def create_link(name: Optional[str] = Form(None), url: Optional[str] = Form(None)) -> RedirectResponse:
        link = storage.create(name, url)
        log.info("Created go-link %r -> %s", link.name, link.url)
        return RedirectResponse(url="/", status_code=303)

    @app.get("/links/suggest")
    def suggest(q: Optional[str] = None) -> JSONResponse:
        return JSONResponse(search.suggest(q))

    @app.get("/links/search")
    def search_links(q: Optional[str] = None) -> Response:
        result = search.search_or_list(q)
        if isinstance(result, RedirectTarget):
            return RedirectResponse(url=result.url, status_code=302)
        return HTMLResponse(render(pages, "index.html", links=result, name=None))

    @app.get("/links/opensearch.xml")
    def opensearch() -> Response:
        body = render(pages, "opensearch.xml", host=settings.PUBLIC_HOST)
        return Response(content=body, media_type="application/opensearchdescription+xml")

    @app.get("/links/{link_id}/delete")
    def delete_link(link_id: str) -> RedirectResponse:
        link = _load(link_id)
        storage.delete(link)
        log.info("Deleted go-link %r (id=%s)", link.name, link.id)
        return _home()

    @app.get("/links/{link_id}/edit")
    def edit_link(
        link_id: str,
        action: Optional[str] = None,
        name: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Response:
        """
        Without `action=do_edit`, show the edit form. With it, apply a partial
        update of whichever of `name` / `url` were supplied.
        """
        link = _load(link_id)
        if action != "do_edit":
            return HTMLResponse(render(pages, "edit.html", link=link))
        if name is None and url is None:
            return PlainTextResponse("name or url must be specified", status_code=400)

        fields = {key: value for key, value in (("name", name), ("url", url)) if value is not None}
        updated = storage.update(link, fields)
        log.info("Edited go-link id=%s: %r -> %s", updated.id, updated.name, updated.url)
        return _home()

    def _resolve(name: str, rest: str) -> Response:
        target = resolver.resolve(name, split_path(rest))
        if isinstance(target, RedirectTarget):
            return RedirectResponse(url=target.url, status_code=302)
        # if the link doesn't exist, offer to make it
        return HTMLResponse(render(pages, "missing.html", name=target.name), status_code=404)

    @app.get("/{name}")
    def resolve_link(name: str) -> Response:
        return _resolve(name, "")

    @app.get("/{name}/{rest:path}")
    def resolve_link_with_path(name: str, rest: str) -> Response:
        return _resolve(name, rest)

    return app


# `uvicorn main:app --reload` and `from main import app` keep working.
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())
