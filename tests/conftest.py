"""Test setup for pubtoc."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SECTION_HTML = """<!DOCTYPE html>
<html>
  <head><title>Section Example</title></head>
  <body>
    <section>
      <h1>H1</h1>
      <section id="h2">
        <h2>
          <span>H2</span>
          <span>content</span>
        </h2>
        <section id="#">
          <h3>H3</h3>
          <section>
            <h1>Nested</h1>
          </section>
          <section>
            <h4>H4</h4>
            <section>
              <h5>H5</h5>
              <section>
                <h6>H6</h6>
              </section>
            </section>
          </section>
        </section>
      </section>
    </section>
    <section>
      <h2>Another H2<script>XSS</script></h2>
    </section>
  </body>
</html>
"""


def manuscript_html(title: str, body: str = "") -> str:
    """Minimal manuscript page with a title and optional body markup."""
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title}</title>"
        f"</head><body>{body}</body></html>"
    )


@pytest.fixture
def section_html() -> str:
    """Sectionized document with headings whose levels disagree with nesting."""
    return SECTION_HTML


@pytest.fixture
def write_manuscript(tmp_path: Path) -> Callable[..., Path]:
    """Write an HTML manuscript below ``tmp_path`` and return its path."""

    def _write(relative: str, html: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_page() -> Callable[..., str]:
    """Factory for minimal manuscript pages."""
    return manuscript_html
