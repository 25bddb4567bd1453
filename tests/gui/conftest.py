import gc

import pytest
from PyQt6 import sip
from PyQt6.QtWidgets import QApplication


@pytest.fixture(autouse=True)
def _enforce_widget_cleanup():
    """Error if a test leaks gdviz.* widgets without cleanup.

    Only flags top-level widgets (parent=None) from gdviz.* modules,
    ignoring transient Qt/pyqtgraph internals.
    """
    app = QApplication.instance()
    if app is None:
        yield
        return

    before = set(id(w) for w in app.allWidgets())
    yield

    # gc.collect() releases Python refs so Qt C++ destructors can run,
    # then processEvents() handles the deferred delete events.
    gc.collect()
    app.processEvents()
    app.processEvents()

    leaked = [
        w for w in app.allWidgets()
        if id(w) not in before
        and w.parent() is None
        and not sip.isdeleted(w)
        and type(w).__module__.startswith("gdviz.")
        and w.isVisible()
    ]
    if leaked:
        names = [type(w).__name__ for w in leaked]
        for w in leaked:
            w.close()
            w.deleteLater()
        app.processEvents()
        pytest.fail(
            f"Leaked {len(leaked)} widget(s) without cleanup: {names}. "
            "Add qtbot.addWidget(w) and close/deleteLater/processEvents "
            "in fixture teardown.",
            pytrace=False,
        )
