"""
Unit tests for page rendering
"""

import pytest

from linkbudget.core.schemas.link_budget import LINK_BUDGET_FIELDS
from linkbudget.core.templates import render_page

pytestmark = pytest.mark.unit


def test_result_page_structure():
    html = render_page("result.html", error_message=None, received_power="-56.00", previous_calculation=None)
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "<h1>RF Link Budget Result</h1>" in html
    assert "<p>Received Power: -56.00 dBm</p>" in html
    assert '<a href="/index.html">Go Back</a>' in html
    assert html.rstrip().endswith("</html>")


def test_error_message_is_fully_escaped(xss_payload):
    html = render_page("result.html", error_message=xss_payload)
    assert "&lt;script&gt;&amp;&#34;&#39;&lt;/script&gt;" in html
    assert xss_payload not in html
    error_line = next(line for line in html.splitlines() if 'class="error"' in line)
    inner = error_line.split(">", 1)[1].rsplit("<", 1)[0]
    for raw in "<>\"'":
        assert raw not in inner
    assert inner.replace("&amp;", "").replace("&lt;", "").replace("&gt;", "") \
        .replace("&#34;", "").replace("&#39;", "").count("&") == 0


def test_index_lists_every_field():
    html = render_page("index.html")
    assert 'action="/calculate"' in html
    for field in LINK_BUDGET_FIELDS:
        assert f'name="{field.key}"' in html
        assert field.label in html
    assert "(-30 to 60)" in html
