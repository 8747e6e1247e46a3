"""
Reading view markup for inky-reader.

Builds the elements injected into a page while reader mode is active: the
full-screen container with the article, the exit button and the page-wide
filter stylesheet.
"""

from typing import Tuple

from bs4 import BeautifulSoup, Tag

from ..models import Article

READER_CONTAINER_ID = 'reader-container'
READER_CONTENT_ID = 'reader-content'
READER_BACK_BUTTON_ID = 'reader-back-btn'
PAGE_FILTER_STYLE_ID = 'eink-filter-style'

# Everything present() adds, in the order restore() removes it
READER_ELEMENT_IDS = (READER_CONTAINER_ID, READER_BACK_BUTTON_ID, PAGE_FILTER_STYLE_ID)

BACK_BUTTON_LABEL = '← 返回'

CONTAINER_STYLE = (
    "position: fixed; top: 0; left: 0; right: 0; bottom: 0; "
    "z-index: 2147483647; background: #f9f9f5; padding: 20px; "
    "overflow-y: auto; font-family: 'Georgia', 'Times New Roman', serif;"
)

BACK_BUTTON_STYLE = (
    "position: fixed; top: 10px; left: 10px; z-index: 2147483648; "
    "background: rgba(0,0,0,0.7); color: white; border: none; "
    "padding: 8px 16px; border-radius: 4px; cursor: pointer; font-size: 14px;"
)

CONTENT_STYLE = (
    "max-width: 700px; margin: 0 auto; padding: 20px 0; "
    "line-height: 1.6; color: #333;"
)

TITLE_STYLE = "font-size: 28px; margin-bottom: 20px; line-height: 1.3;"

META_STYLE = "font-size: 14px; color: #666; margin-bottom: 30px;"

READER_STYLESHEET = """
#reader-content p { margin-bottom: 20px; font-size: 18px; }
#reader-content h2 { font-size: 24px; margin: 30px 0 15px; font-weight: bold; }
#reader-content h3 { font-size: 20px; margin: 25px 0 10px; font-weight: bold; }
#reader-content img { max-width: 100%; height: auto; margin: 20px 0; }
#reader-content a { color: #1a73e8; text-decoration: none; }
#reader-content a:hover { text-decoration: underline; }
"""


def page_filter_css(filter_value: str) -> str:
    """
    Build the stylesheet that applies a filter to the whole viewport.

    Args:
        filter_value: CSS filter functions, e.g. ``grayscale(1)``

    Returns:
        Stylesheet text targeting :root
    """
    return (f":root{{filter:{filter_value} !important;"
            f"-webkit-filter:{filter_value} !important;}}")


def build_reading_view(document: BeautifulSoup, article: Article) -> Tuple[Tag, Tag]:
    """
    Create the reading view elements for an article.

    The elements are created detached; the caller decides where they go.

    Args:
        document: Live document that will own the new elements
        article: Article to present

    Returns:
        Tuple of (container, back button)
    """
    container = document.new_tag('div', attrs={'id': READER_CONTAINER_ID, 'style': CONTAINER_STYLE})
    content = document.new_tag('div', attrs={'id': READER_CONTENT_ID, 'style': CONTENT_STYLE})
    container.append(content)

    if article.title:
        title = document.new_tag('h1', attrs={'style': TITLE_STYLE})
        title.string = article.title
        content.append(title)

    if article.meta_line:
        meta = document.new_tag('p', attrs={'class': 'reader-meta', 'style': META_STYLE})
        meta.string = article.meta_line
        content.append(meta)

    fragment = BeautifulSoup(article.content, 'html.parser')
    for node in list(fragment.contents):
        content.append(node.extract())

    stylesheet = document.new_tag('style')
    stylesheet.string = READER_STYLESHEET
    content.append(stylesheet)

    back_button = document.new_tag('button', attrs={'id': READER_BACK_BUTTON_ID, 'style': BACK_BUTTON_STYLE})
    back_button.string = BACK_BUTTON_LABEL

    return container, back_button
