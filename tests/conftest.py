import pytest

from inky_reader.config import Config, set_config
from inky_reader.extractors.snapshot import DocumentSnapshot
from inky_reader.models import SavedPageState
from inky_reader.reader.notifier import Notifier
from inky_reader.reader.page_view import PageView


ARTICLE_PAGE = """<html>
<head>
<title>  Plain   Title </title>
<meta property="og:title" content="Open Graph Title">
<meta name="description" content="A short summary of the story.">
<meta property="og:site_name" content="Inky Times">
<script>var tracking = true;</script>
<style>body { color: red; }</style>
</head>
<body>
<header><h1>Site banner</h1></header>
<nav><a href="/">Home</a></nav>
<article>
<p class="byline">By Jane Doe</p>
<time datetime="2024-03-03T10:00:00Z">March 3, 2024</time>
<p>First paragraph of the story.</p>
<div><div>   </div></div>
<p style="display:none">Hidden teaser</p>
<p>Second paragraph of the story.</p>
<figure><img src="photo.jpg"></figure>
</article>
<aside>Related links</aside>
<footer>Copyright</footer>
</body>
</html>"""

EMPTY_BODY_PAGE = "<html><head><title>Empty page</title></head><body>   </body></html>"


@pytest.fixture
def config(tmp_path):
    """Defaults only; no user config file is picked up."""
    return Config(config_file=str(tmp_path / "missing.yml"))


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path):
    set_config(Config(config_file=str(tmp_path / "missing.yml")))
    yield
    set_config(None)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.messages = []

    def notify(self, text):
        self.messages.append(text)


class FakePageView(PageView):
    """Page view that records what the session asks of it."""

    def __init__(self, html=ARTICLE_PAGE, title="Original", fail_present=False):
        self.html = html
        self.current_title = title
        self.fail_present = fail_present
        self.presented = []
        self.restored = []
        self.captures = 0

    @property
    def title(self):
        return self.current_title

    def capture_state(self):
        self.captures += 1
        return SavedPageState(html=self.html, title=self.current_title)

    def snapshot(self):
        return DocumentSnapshot.from_html(self.html, "https://news.example.com/story")

    def present(self, article):
        if self.fail_present:
            raise RuntimeError("render failed")
        self.presented.append(article)
        self.current_title = "Reading: " + article.title

    def restore(self, state):
        self.restored.append(state)
        self.current_title = state.title

    def has_reader_artifacts(self):
        return len(self.presented) > len(self.restored)


class ManualScheduler:
    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return ManualScheduler()
