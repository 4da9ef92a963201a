from __future__ import annotations

import bleach


TROUBLESHOOTING_URL = "https://docs.restructuredtext.net/articles/troubleshooting.html"
DIAGNOSTICS_PANEL = "OUTPUT | Esbonio Language Server"


def escape_text(text: str) -> str:
    """Escape markup in free text (paths, error messages) before embedding it."""
    return bleach.clean(text, tags=set(), strip=False)


def _more_information() -> str:
    return f"""<h4>More Information</h4>
          <p>Diagnostics information has been written to {DIAGNOSTICS_PANEL} panel.</p>
          <p>The troubleshooting guide can be found at</p>
          <pre>{TROUBLESHOOTING_URL}</pre>"""


def error_page(description: str, error: str) -> str:
    """Page shown when the preview cannot be produced.

    ``description`` is an HTML fragment written by this package; ``error`` is
    raw diagnostic text and gets escaped.
    """

    return f"""<body>
    <section>
      <article>
        <header>
          <h2>Cannot show preview page.</h2>
          <h4>Description:</h4>
          {description}
          <h4>Detailed error message</h4>
          <pre>{escape_text(error)}</pre>
          {_more_information()}
        </header>
      </article>
    </section>
  </body>"""


def wait_page() -> str:
    return f"""<body>
    <section>
      <article>
        <header>
          <h2>Esbonio is busy.</h2>
          <h4>Description:</h4>
          <p>Esbonio is still working in the background. This panel will automatically refresh when the preview page is ready.</p>
          {_more_information()}
        </header>
      </article>
    </section>
  </body>"""


def error_snippet(error: str) -> str:
    return f"<html><body>{escape_text(error)}</body></html>"
