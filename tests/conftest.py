import pytest


@pytest.fixture(scope="session")
def qt_core_app():
    """A QCoreApplication for tests that create Qt objects."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
