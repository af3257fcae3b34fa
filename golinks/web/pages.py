"""
Page rendering for the go-link service.

Templates live in a DictLoader mapping so the package carries no data files.
The Jinja2 environment is built explicitly by `build_environment` and handed
to the app factory; nothing here is process-global, so tests can build an
environment with different settings side by side.
"""

from jinja2 import DictLoader, Environment

LAYOUT_HTML = """<!DOCTYPE html>
<html>
  <head>
    <style type="text/css">
      body { font: 13px 'Helvetica Neue', Helvetica, Arial, sans-serif; }
      a, a:link, a:visited, a:active { color: #000; text-decoration: none; border-bottom: 1px solid #CCC; }
      a:hover { text-decoration: underline; }
      article { display: inline-block; padding: 10px; margin: 10px; border: 5px solid #000; }
      ul { margin: 0; padding: 0; }
      li { list-style: none; margin-bottom: 5px; }
      li section { display: inline-block; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
      .name { width: 100px; }
      .url { width: 300px; }
      .actions { width: 50px; text-align: right; }
      hr { background: 0; border: 0; border-bottom: 1px solid #CCC; margin: 10px 0; }
      input { width: 100px; padding: 3px; border: 1px solid #BBB; border-radius: 3px; }
    </style>
    <link rel="search" title="Go" href="/links/opensearch.xml" type="application/opensearchdescription+xml"/>
    <title>go</title>
  </head>
  <body>
    <article>{% block content %}{% endblock %}</article>
  </body>
</html>
"""

INDEX_HTML = """{% extends 'layout.html' %}{% block content %}
<form method="post" action="/links">
  <input type="text" name="name" placeholder="Name" value="{{ name or '' }}" required>
  <input type="url" class="url" name="url" placeholder="URL" required>
  <button>Create</button>
</form>
<hr />
<ul>
{% for link in links %}
  <li>
    <section class="name"><a href="/{{ link.name | urlencode }}" target="_blank">{{ link.name }}</a></section>
    <section class="url" title="{{ link.url }}">{{ link.url }}</section>
    <section class="actions">
      <span class="hits">({{ link.hits }})</span>
      <span class="edit"><a href="/links/{{ link.id }}/edit" title="edit">e</a></span>
      <span class="delete"><a href="/links/{{ link.id }}/delete" title="delete"
        onclick="return confirm('Are you sure you want to delete this link?');">d</a></span>
    </section>
  </li>
{% endfor %}
</ul>
{% if not links %}<p>No results</p>{% endif %}
{% endblock %}"""

EDIT_HTML = """{% extends 'layout.html' %}{% block content %}
<form method="get" action="/links/{{ link.id }}/edit">
  <input type="hidden" name="action" value="do_edit">
  <input type="text" class="name" name="name" placeholder="Name" value="{{ link.name }}" required>
  <input type="url" class="url" name="url" placeholder="URL" value="{{ link.url }}" required>
  <button>Edit</button>
</form>
<hr />
<section>
  <button type="button"
    onclick="if (confirm('Are you sure you want to delete this link?')) { location = '/links/{{ link.id }}/delete'; }">Delete</button>
  <button type="button" onclick="location.href = '/';">Cancel</button>
</section>
<br>
<span>hits: {{ link.hits }} | created on: {{ link.created_at }}</span>
{% endblock %}"""

MISSING_HTML = """{% extends 'layout.html' %}{% block content %}
Link "go/{{ name }}" not found!<br><br>
<a href="/?name={{ name | urlencode }}">Create</a> it?
{% endblock %}"""

OPENSEARCH_XML = """<OpenSearchDescription xmlns="http://a9.com/-/spec/opensearch/1.1/">
  <ShortName>Go</ShortName>
  <Description>Search Go</Description>
  <InputEncoding>UTF-8</InputEncoding>
  <OutputEncoding>UTF-8</OutputEncoding>
  <Url type="application/x-suggestions+json" method="GET" template="{{ host }}/links/suggest">
    <Param name="q" value="{searchTerms}"/>
  </Url>
  <Url type="text/html" method="GET" template="{{ host }}/links/search">
    <Param name="q" value="{searchTerms}"/>
  </Url>
</OpenSearchDescription>
"""

TEMPLATES = {
    "layout.html": LAYOUT_HTML,
    "index.html": INDEX_HTML,
    "edit.html": EDIT_HTML,
    "missing.html": MISSING_HTML,
    "opensearch.xml": OPENSEARCH_XML,
}


def build_environment(autoescape: bool = True) -> Environment:
    """Jinja2 environment over the built-in page templates."""
    return Environment(loader=DictLoader(TEMPLATES), autoescape=autoescape)


def render(env: Environment, template: str, **context) -> str:
    return env.get_template(template).render(**context)
