import io
from concurrent.futures import Future

import pytest
from PIL import Image

from controller import FrameCanvasApp
from ingest import ImageSource


class FakeSurface:
    """In-memory stand-in for TkSurface; the canvas origin sits at screen (10, 20)."""

    def __init__(self, width=1000, height=700, origin=(10, 20)):
        self.width = width
        self.height = height
        self.origin = origin
        self.objects = []
        self.removed = []
        self.render_count = 0
        self._active = None

    def add(self, obj):
        if obj not in self.objects:
            self.objects.append(obj)

    def remove(self, obj):
        if obj in self.objects:
            self.objects.remove(obj)
        self.removed.append(obj)
        if self._active is obj:
            self._active = None

    def render_all(self):
        self.render_count += 1

    def get_active_object(self):
        return self._active

    def set_active_object(self, obj):
        self._active = obj

    def client_to_local(self, x_root, y_root):
        return x_root - self.origin[0], y_root - self.origin[1]

    def call_soon(self, fn):
        fn()


class InlineRunner:
    """Runs work immediately on the calling thread."""

    def __init__(self):
        self.shutdown_called = False

    def submit(self, work, on_done):
        job = Future()
        try:
            job.set_result(work())
        except Exception as e:
            job.set_exception(e)
        on_done(job)

    def shutdown(self):
        self.shutdown_called = True


class ManualRunner:
    """Queues work until the test completes (or cancels) it, in any order."""

    def __init__(self):
        self.jobs = []
        self.shutdown_called = False

    def submit(self, work, on_done):
        self.jobs.append((work, on_done, Future()))

    def complete(self, index):
        work, on_done, job = self.jobs[index]
        try:
            job.set_result(work())
        except Exception as e:
            job.set_exception(e)
        on_done(job)

    def cancel(self, index):
        _work, on_done, job = self.jobs[index]
        job.cancel()
        on_done(job)

    def shutdown(self):
        self.shutdown_called = True


def make_png(width, height, color=(200, 30, 30)):
    buf = io.BytesIO()
    Image.new('RGB', (width, height), color).save(buf, format='PNG')
    return buf.getvalue()


def png_source(width, height, name='test.png'):
    return ImageSource(name=name, media_type='image/png', data=make_png(width, height))


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def inline_runner():
    return InlineRunner()


@pytest.fixture
def manual_runner():
    return ManualRunner()


@pytest.fixture
def failures():
    return []


@pytest.fixture
def clipboard():
    """Entries the fake clipboard reader hands out; tests fill it in."""
    return []


@pytest.fixture
def dialog_paths():
    """Paths the fake file dialog returns, one per activation ('' = cancelled)."""
    return []


@pytest.fixture
def fake_dialog_factory(dialog_paths):
    opened = []

    class FakeDialog:
        def __init__(self, master):
            self.master = master
            self.released = False

        def show(self):
            return dialog_paths.pop(0) if dialog_paths else ''

    from contextlib import contextmanager

    @contextmanager
    def factory(master):
        dialog = FakeDialog(master)
        opened.append(dialog)
        try:
            yield dialog
        finally:
            dialog.released = True

    factory.opened = opened
    return factory


def _make_app(surface, runner, failures, clipboard, fake_dialog_factory, fetch=None):
    kwargs = {}
    if fetch is not None:
        kwargs['fetch'] = fetch
    app = FrameCanvasApp(surface, runner=runner, dialog_factory=fake_dialog_factory,
                         read_clipboard=lambda: list(clipboard), **kwargs)
    app.add_failure_observer(failures.append)
    return app


@pytest.fixture
def app(surface, inline_runner, failures, clipboard, fake_dialog_factory):
    return _make_app(surface, inline_runner, failures, clipboard, fake_dialog_factory)


@pytest.fixture
def manual_app(surface, manual_runner, failures, clipboard, fake_dialog_factory):
    return _make_app(surface, manual_runner, failures, clipboard, fake_dialog_factory)


@pytest.fixture
def make_app(surface, inline_runner, failures, clipboard, fake_dialog_factory):
    """Builds an app with a custom fetch function."""
    def factory(fetch=None):
        return _make_app(surface, inline_runner, failures, clipboard, fake_dialog_factory, fetch=fetch)
    return factory
