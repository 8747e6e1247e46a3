"""
Tests for the reader session state machine.
"""

from conftest import ARTICLE_PAGE, EMPTY_BODY_PAGE, FakePageView
from inky_reader.extractors.extractor_factory import ExtractorFactory
from inky_reader.models import ToggleResult
from inky_reader.reader.page_view import HtmlPageView
from inky_reader.reader.reading_view import READER_CONTAINER_ID
from inky_reader.reader.session import ReaderSession
from inky_reader.reader.state_store import MemoryStateStore


def _session(config, page_view, notifier, **kwargs):
    kwargs.setdefault("factory", ExtractorFactory(config))
    return ReaderSession(page_view, notifier=notifier, messages=config.get_messages(), **kwargs)


class TestStateMachine:
    def test_toggle_cycle(self, config, notifier):
        view = FakePageView()
        session = _session(config, view, notifier)

        assert session.is_active() is False
        assert session.toggle() == ToggleResult(success=True, active=True)
        assert session.is_active() is True
        assert session.current_article.title == "Open Graph Title"

        assert session.toggle() == ToggleResult(success=True, active=False)
        assert session.is_active() is False
        assert session.current_article is None
        assert session.saved_state is None
        assert notifier.messages == ["📝 阅读模式已启用", "❌ 阅读模式已关闭"]

    def test_failed_extraction_leaves_state_unchanged(self, config, notifier):
        view = FakePageView(html=EMPTY_BODY_PAGE)
        session = _session(config, view, notifier)

        result = session.toggle()

        assert result == ToggleResult(success=False, active=False)
        assert session.is_active() is False
        assert session.saved_state is None
        assert view.presented == []
        assert view.restored == []
        assert notifier.messages == ["无法提取文章内容"]

    def test_missing_components(self, config, notifier):
        session = _session(config, FakePageView(), notifier, factory=None)

        assert session.toggle() == ToggleResult(success=False, active=False)
        assert notifier.messages == ["无法加载阅读模式组件"]

    def test_unloadable_engine(self, config, notifier):
        config.set("extractors.engine", "bogus")
        view = FakePageView()
        session = _session(config, view, notifier)

        assert session.toggle().success is False
        assert view.presented == []
        assert notifier.messages == ["无法加载阅读模式组件"]

    def test_present_error_rolls_back(self, config, notifier):
        view = FakePageView(fail_present=True)
        session = _session(config, view, notifier)

        result = session.toggle()

        assert result == ToggleResult(success=False, active=False)
        assert session.saved_state is None
        assert len(view.restored) == 1
        assert notifier.messages == ["阅读模式初始化失败"]

    def test_restore_uses_saved_title(self, config, notifier):
        view = FakePageView(title="Before reading")
        session = _session(config, view, notifier)

        session.toggle()
        assert view.title != "Before reading"
        session.toggle()

        assert view.title == "Before reading"

    def test_saved_state_captured_once_per_cycle(self, config, notifier):
        view = FakePageView()
        session = _session(config, view, notifier)

        session.toggle()
        saved = session.saved_state
        session.ensure_active()

        assert session.saved_state is saved
        assert view.captures == 1
        assert len(view.presented) == 1

    def test_ensure_active_activates_when_inactive(self, config, notifier):
        session = _session(config, FakePageView(), notifier)

        assert session.ensure_active() == ToggleResult(success=True, active=True)
        assert session.is_active()

    def test_state_is_persisted(self, config, notifier):
        store = MemoryStateStore()
        session = _session(config, FakePageView(), notifier, state_store=store)

        session.toggle()
        assert store.get_reader_active() is True
        session.toggle()
        assert store.get_reader_active() is False

    def test_failure_does_not_persist(self, config, notifier):
        store = MemoryStateStore()
        session = _session(config, FakePageView(html=EMPTY_BODY_PAGE), notifier, state_store=store)

        session.toggle()

        assert store.get_reader_active() is False

    def test_restore_errors_are_tolerated(self, config, notifier):
        view = FakePageView()
        session = _session(config, view, notifier)
        session.toggle()

        def broken_restore(state):
            raise RuntimeError("element already gone")

        view.restore = broken_restore
        result = session.toggle()

        assert result == ToggleResult(success=True, active=False)
        assert session.is_active() is False


class TestWithHtmlPage:
    def test_round_trip_restores_page(self, config, notifier):
        view = HtmlPageView.from_html(ARTICLE_PAGE)
        session = _session(config, view, notifier)
        title_before = view.title

        session.toggle()
        assert view.document.find(id=READER_CONTAINER_ID) is not None
        session.toggle()

        assert view.title == title_before
        assert view.document.find(id=READER_CONTAINER_ID) is None
        assert not view.has_reader_artifacts()

    def test_failed_toggle_does_not_touch_page(self, config, notifier):
        view = HtmlPageView.from_html(EMPTY_BODY_PAGE)
        before = view.to_html()
        session = _session(config, view, notifier)

        result = session.toggle()

        assert result.success is False
        assert view.to_html() == before
        assert session.is_active() is False


class FailingStateStore(MemoryStateStore):
    def set_reader_active(self, active):
        raise RuntimeError("storage quota exceeded")


class FailingNotifier:
    def notify(self, text):
        raise RuntimeError("toast host gone")


class UnserializablePageView(FakePageView):
    def capture_state(self):
        raise RuntimeError("page serialization failed")


class TestContainedFailures:
    def test_state_store_errors_do_not_escape(self, config, notifier):
        session = _session(config, FakePageView(), notifier, state_store=FailingStateStore())

        assert session.toggle() == ToggleResult(success=True, active=True)
        assert session.toggle() == ToggleResult(success=True, active=False)
        assert notifier.messages == ["📝 阅读模式已启用", "❌ 阅读模式已关闭"]

    def test_notifier_errors_do_not_escape(self, config):
        session = ReaderSession(FakePageView(), ExtractorFactory(config),
                                notifier=FailingNotifier(), messages=config.get_messages())

        assert session.toggle() == ToggleResult(success=True, active=True)
        assert session.is_active() is True

    def test_capture_error_is_an_init_failure(self, config, notifier):
        view = UnserializablePageView()
        session = _session(config, view, notifier)

        result = session.toggle()

        assert result == ToggleResult(success=False, active=False)
        assert session.saved_state is None
        assert view.presented == []
        assert notifier.messages == ["阅读模式初始化失败"]
