# strapkit/window/webwidget.py
import logging
import sys
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QUrl, Slot
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineCore import QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from ..exceptions import StrapkitError

if TYPE_CHECKING:
    from ..core import Form

logger = logging.getLogger(__name__)

BRIDGE_NAME = "strapkit_bridge"

# Routes the page runtime through the web channel instead of http.
CHANNEL_SCRIPT = """
<script src="qrc:///qtwebchannel/qwebchannel.js"></script>
<script>
new QWebChannel(qt.webChannelTransport, function (channel) {
    var bridge = channel.objects.%(bridge)s;
    strapkit.transport = function (event) { bridge.dispatch(JSON.stringify(event)); };
    strapkit.submit = function (event) { bridge.postback(JSON.stringify(event)); };
});
</script>
"""


class Bridge(QObject):
    """
    The object the page talks to over the web channel.

    AJAX events come back as a patch script run in the page; postbacks
    replace the whole page.
    """

    def __init__(self, form: "Form", window: "PreviewWindow"):
        super().__init__()
        self.form = form
        self.window = window

    @Slot(str)
    def dispatch(self, payload: str):
        try:
            event = self.form.event_from_json(payload)
            result = self.form.handle_ajax(event)
        except (StrapkitError, AttributeError, ValueError) as exc:
            logger.error("Event %s failed: %s", payload, exc)
            return
        logger.debug("Applying %d patches, %d commands", len(result.patches), len(result.commands))
        if result:
            self.window.evaluate_js(result.to_script())

    @Slot(str)
    def postback(self, payload: str):
        try:
            event = self.form.event_from_json(payload)
            page = self.form.handle_postback(event)
        except (StrapkitError, AttributeError, ValueError) as exc:
            logger.error("Postback %s failed: %s", payload, exc)
            return
        self.window.load_page(page)


class DebugWindow(QWebEngineView):
    """A separate window for inspecting the page."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Debug Window")
        self.resize(800, 600)


class PreviewWindow(QWidget):
    def __init__(self, form: "Form", width: int = 1024, height: int = 768):
        super().__init__()
        self.form = form
        self.setWindowTitle(form.title)
        self.setGeometry(100, 100, width, height)

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.webview = QWebEngineView(self)
        settings = self.webview.settings()
        settings.setAttribute(QWebEngineSettings.LocalContentCanAccessRemoteUrls, True)
        settings.setAttribute(QWebEngineSettings.LocalContentCanAccessFileUrls, True)
        self.layout.addWidget(self.webview)

        # Setup QWebChannel
        self.bridge = Bridge(form, self)
        self.channel = QWebChannel()
        self.channel.registerObject(BRIDGE_NAME, self.bridge)
        self.webview.page().setWebChannel(self.channel)

        # Developer Tools
        self.debug_window = DebugWindow()
        self.webview.page().setDevToolsPage(self.debug_window.page())
        self.debug_window.hide()

        shortcut = QShortcut(QKeySequence("Ctrl+R"), self)
        shortcut.activated.connect(self.reload)
        shortcut_debug = QShortcut(QKeySequence("F12"), self)
        shortcut_debug.activated.connect(self.toggle_debug_window)

        self.reload()

    def load_page(self, page: str) -> None:
        html = page.replace("</body>", CHANNEL_SCRIPT % {"bridge": BRIDGE_NAME} + "</body>", 1)
        self.webview.setHtml(html, QUrl("qrc:///"))

    def reload(self) -> None:
        """Render the form from scratch and show it."""
        self.load_page(self.form.render())

    def evaluate_js(self, script: str) -> None:
        # a callback keeps the call non-blocking
        self.webview.page().runJavaScript(script, lambda result: None)

    def toggle_debug_window(self) -> None:
        if self.debug_window.isVisible():
            self.debug_window.hide()
        else:
            self.debug_window.show()

    def closeEvent(self, event):
        self.debug_window.close()
        super().closeEvent(event)


def run_preview(form: "Form", width: int = 1024, height: int = 768, debug: bool = False) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    window = PreviewWindow(form, width, height)
    window.show()
    if debug:
        window.toggle_debug_window()
    logger.info("Previewing %s", form)
    return app.exec()
