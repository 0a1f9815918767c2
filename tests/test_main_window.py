import pytest
from PySide6.QtWidgets import QMessageBox

from rainbox.core.config import ConfigManager
from rainbox.core.scheduler import ManualScheduler
from rainbox.ui.main_window import RUNNING_LABEL, START_LABEL, RainMainWindow


@pytest.fixture
def window(qapp, tmp_path):
    schedulers = []

    def scheduler_factory():
        schedulers.append(ManualScheduler())
        return schedulers[-1]

    win = RainMainWindow(ConfigManager(str(tmp_path / "missing.json")), scheduler_factory)
    win.schedulers = schedulers
    yield win
    win.close()


def test_malformed_landscape_shows_message(window, monkeypatch):
    messages = []
    monkeypatch.setattr(QMessageBox, "warning",
                        lambda parent, title, text: messages.append(text))
    window.landscape_edit.setText("a,b")
    window.start_btn.click()

    assert len(messages) == 1
    assert messages[0].startswith("Cannot parse 'a' as number: ")
    assert window.schedulers == []
    assert window.start_btn.isEnabled()
    assert window.start_btn.text() == START_LABEL


def test_zero_rain_ends_immediately(window):
    window.landscape_edit.setText("2 1 3")
    window.rain_edit.setText("0")
    window.start_btn.click()

    assert not window.schedulers[0].pending
    assert window.schedulers[0].requests == 0
    assert window.start_btn.isEnabled()
    assert window.start_btn.text() == START_LABEL
    assert (window.canvas.width, window.canvas.height) == (90, 90)


def test_button_is_locked_while_raining(window):
    window.landscape_edit.setText("1 0 1")
    window.rain_edit.setText("1")
    window.start_btn.click()

    assert window.start_btn.text() == RUNNING_LABEL
    assert not window.start_btn.isEnabled()
    assert window.display_label.pixmap().width() == 90

    window.schedulers[0].run(250.0)
    assert window.start_btn.text() == START_LABEL
    assert window.start_btn.isEnabled()
