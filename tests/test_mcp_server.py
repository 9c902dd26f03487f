"""Tests for the MCP tools."""

import asyncio

import pytest

from mdx_publish import mcp_server


@pytest.fixture
def documents(tmp_path):
    post = tmp_path / "post.md"
    post.write_text('---\ntitle: "T"\ndate: "d"\nauthor: "A"\n---\nHello *there*\n', encoding="utf-8")
    page = tmp_path / "about.md"
    page.write_text('---\ntitle: "About"\nauthor: "A"\n---\n~~old~~ new\n', encoding="utf-8")
    return post, page


class TestTools:
    """Tests for the post/page tools."""

    def test_post_tool(self, documents, tmp_path):
        post, _ = documents
        html = asyncio.run(mcp_server.post(str(post), str(tmp_path)))
        assert html.strip() == "<p>Hello <em>there</em></p>"

    def test_page_tool(self, documents, tmp_path):
        _, page = documents
        html = asyncio.run(mcp_server.page(str(page), str(tmp_path)))
        assert "<del>old</del> new" in html

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            asyncio.run(mcp_server.post(str(tmp_path / "missing.md")))
