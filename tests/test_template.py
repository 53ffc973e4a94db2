"""Tests for the Jinja2 form helpers."""

import jinja2
import pytest

from boundform.config import Settings
from boundform.forms.core import FormRenderer
from boundform.forms.records import Record
from boundform.lib.template import register_helpers


class Article(Record):
    title: str = ""


@pytest.fixture
def environment():
    env = jinja2.Environment(autoescape=True)
    register_helpers(env, FormRenderer(settings=Settings()))
    return env


class TestRegisterHelpers:
    def test_globals_installed(self, environment):
        for name in ("form_builder", "form_tag", "options_for_select", "hidden_field_tag"):
            assert name in environment.globals

    def test_form_tag_with_builder(self, environment):
        template = environment.from_string(
            '{% set f = form_builder(article) %}'
            '{{ form_tag(article, f.text_field("title"), anti_forgery_token=token) }}'
        )
        html = template.render(article=Article(id=5, title="Hi"), token="tok")
        assert html == (
            '<form action="/articles/5" method="post" id="edit_article_5" class="edit_article">\n'
            '<input name="_method" type="hidden" value="put">\n'
            '<input name="authenticity_token" type="hidden" value="tok">\n'
            '<input type="text" id="article_title" name="article[title]" value="Hi">\n'
            "</form>"
        )

    def test_options_not_double_escaped(self, environment):
        template = environment.from_string(
            "<select>{{ options_for_select([('A & B', 1)], 1) }}</select>"
        )
        assert template.render() == (
            '<select><option value="1" selected="selected">A &amp; B</option></select>'
        )

    def test_url_form(self, environment):
        template = environment.from_string('{{ form_tag("/search", method="get") }}')
        assert template.render() == '<form action="/search" method="get">\n</form>'
