"""Tests for the boundform CLI."""

import yaml
from click.testing import CliRunner

from boundform.cli import cli, make_record


def _write(tmp_path, description):
    path = tmp_path / "form.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(description, f)
    return str(path)


class TestRenderCommand:
    def test_renders_record_form(self, tmp_path):
        path = _write(tmp_path, {
            "record": {"type": "Article", "id": 5, "attributes": {"title": "Hi"}},
            "fields": [{"path": "title"}],
        })
        result = CliRunner().invoke(cli, ["render", path, "--token", "tok"])

        assert result.exit_code == 0, result.output
        assert '<form action="/articles/5" method="post"' in result.output
        assert '<input name="_method" type="hidden" value="put">' in result.output
        assert '<input name="authenticity_token" type="hidden" value="tok">' in result.output
        assert 'name="article[title]" value="Hi"' in result.output

    def test_renders_url_form(self, tmp_path):
        path = _write(tmp_path, {"url": "/search", "method": "get", "fields": [{"path": "q"}]})
        result = CliRunner().invoke(cli, ["render", path])

        assert result.exit_code == 0, result.output
        assert '<form action="/search" method="get">' in result.output
        assert '<input type="text" id="q" name="q">' in result.output

    def test_nested_parents(self, tmp_path):
        path = _write(tmp_path, {
            "parents": [{"type": "Article", "id": 5}],
            "record": {"type": "Comment"},
        })
        result = CliRunner().invoke(cli, ["render", path])

        assert result.exit_code == 0, result.output
        assert 'action="/articles/5/comments"' in result.output

    def test_select_options(self, tmp_path):
        path = _write(tmp_path, {
            "record": {"type": "Article", "attributes": {"category_id": 2}},
            "fields": [{"path": "category_id", "kind": "select", "options": [["News", 1], ["Blog", 2]]}],
        })
        result = CliRunner().invoke(cli, ["render", path])

        assert '<option value="2" selected="selected">Blog</option>' in result.output

    def test_missing_options_reported(self, tmp_path):
        path = _write(tmp_path, {"url": "/x", "fields": [{"path": "category_id", "kind": "select"}]})
        result = CliRunner().invoke(cli, ["render", path])

        assert result.exit_code != 0
        assert "no options" in result.output

    def test_unknown_field_key_reported(self, tmp_path):
        path = _write(tmp_path, {"url": "/x", "fields": [{"path": "a", "colour": "red"}]})
        result = CliRunner().invoke(cli, ["render", path])

        assert result.exit_code != 0
        assert "Invalid field" in result.output

    def test_description_needs_target(self, tmp_path):
        path = _write(tmp_path, {"fields": []})
        result = CliRunner().invoke(cli, ["render", path])

        assert result.exit_code != 0


class TestIdentifyCommand:
    def test_new_record(self):
        result = CliRunner().invoke(cli, ["identify", "BlogPost"])
        assert result.exit_code == 0
        assert result.output.strip() == "POST /blog_posts"

    def test_persisted_record(self):
        result = CliRunner().invoke(cli, ["identify", "Article", "--id", "5"])
        assert result.output.strip() == "PUT /articles/5"


class TestMakeRecord:
    def test_builds_named_record(self):
        record = make_record("Article", 3, {"title": "Hi"})
        assert record.model_name == "article"
        assert record.is_new is False
        assert record.get_attribute("title") == "Hi"
