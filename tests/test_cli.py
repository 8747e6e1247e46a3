import json

import pytest
from click.testing import CliRunner

from conftest import ARTICLE_PAGE, EMPTY_BODY_PAGE
from inky_reader.cli import main
from inky_reader.config import set_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def article_file(tmp_path):
    path = tmp_path / "story.html"
    path.write_text(ARTICLE_PAGE, encoding="utf-8")
    return path


def test_extract_json(runner, article_file):
    result = runner.invoke(main, ["extract", str(article_file)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data['title'] == "Open Graph Title"
    assert data['byline'] == "By Jane Doe"
    assert data['siteName'] == "Inky Times"
    assert data['extractor'] == "heuristic"
    assert "Hidden teaser" not in data['content']


def test_extract_markdown_to_file(runner, article_file, tmp_path):
    output = tmp_path / "story.md"

    result = runner.invoke(main, ["extract", str(article_file), "-f", "markdown", "-o", str(output)])

    assert result.exit_code == 0, result.output
    markdown = output.read_text(encoding="utf-8")
    assert markdown.startswith("# Open Graph Title\n")
    assert "First paragraph of the story." in markdown


def test_extract_failure_exits_nonzero(runner, tmp_path):
    path = tmp_path / "empty.html"
    path.write_text(EMPTY_BODY_PAGE, encoding="utf-8")

    result = runner.invoke(main, ["extract", str(path)])

    assert result.exit_code == 1
    assert "No readable content found" in result.output


def test_read_writes_reader_page(runner, article_file, tmp_path):
    output = tmp_path / "reader.html"

    result = runner.invoke(main, ["read", str(article_file), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "阅读模式已启用" in result.output
    page = output.read_text(encoding="utf-8")
    assert 'id="reader-container"' in page
    assert 'id="eink-filter-style"' in page


def test_read_remembers_state(runner, article_file, tmp_path, config):
    state_path = tmp_path / "state.yml"
    config.set('state.path', str(state_path))
    set_config(config)

    result = runner.invoke(main, ["read", str(article_file), "-o", str(tmp_path / "out.html"),
                                  "--remember"])

    assert result.exit_code == 0, result.output
    assert "readerActive: true" in state_path.read_text()


def test_read_failure_reports_message(runner, tmp_path):
    path = tmp_path / "empty.html"
    path.write_text(EMPTY_BODY_PAGE, encoding="utf-8")

    result = runner.invoke(main, ["read", str(path), "-o", str(tmp_path / "out.html")])

    assert result.exit_code == 1
    assert "无法提取文章内容" in result.output
    assert not (tmp_path / "out.html").exists()


def test_missing_source(runner, tmp_path):
    result = runner.invoke(main, ["extract", str(tmp_path / "nope.html")])

    assert result.exit_code == 1
    assert "Error loading page" in result.output


def test_info(runner):
    result = runner.invoke(main, ["info"])

    assert result.exit_code == 0, result.output
    assert "heuristic" in result.output
