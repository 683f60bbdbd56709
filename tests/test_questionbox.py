import pytest

from modbase.questionbox import Button, QuestionBoxMemory, button_to_string


class Store:
    def __init__(self):
        self.windows = {}
        self.files = {}

    def get(self, window, file_name):
        if file_name and (window, file_name) in self.files:
            return self.files[(window, file_name)]
        return self.windows.get(window, Button.NO_BUTTON)

    def set_window(self, window, button):
        self.windows[window] = button

    def set_file(self, window, file_name, button):
        self.files[(window, file_name)] = button


@pytest.fixture
def store():
    s = Store()
    QuestionBoxMemory.set_callbacks(s.get, s.set_window, s.set_file)
    yield s
    QuestionBoxMemory.set_callbacks(None, None, None)


def answering(button, remember=False, remember_file=False):
    calls = []

    def ask(file_name):
        calls.append(file_name)
        return button, remember, remember_file

    return ask, calls


def test_button_to_string_known():
    assert button_to_string(Button.OK) == "'ok' (0x400)"
    assert button_to_string(Button.NO_BUTTON) == "'none' (0x0)"
    assert button_to_string(Button.RESTORE_DEFAULTS) == "'restoredefaults' (0x8000000)"


def test_button_to_string_combination_is_hex_only():
    text = button_to_string(Button.YES | Button.NO)
    assert text.startswith("0x")
    assert "'" not in text
    assert int(text, 16) == int(Button.YES | Button.NO)


def test_query_asks_when_nothing_remembered(store):
    ask, calls = answering(Button.YES)
    assert QuestionBoxMemory.query("win", ask) == Button.YES
    assert calls == [None]
    assert store.windows == {}


def test_query_remembers_for_window(store):
    ask, calls = answering(Button.NO, remember=True)
    assert QuestionBoxMemory.query("win", ask) == Button.NO
    assert store.windows == {"win": Button.NO}

    again, again_calls = answering(Button.YES)
    assert QuestionBoxMemory.query("win", again) == Button.NO
    assert again_calls == []


def test_query_remembers_for_file(store):
    ask, calls = answering(Button.YES, remember_file=True)
    assert QuestionBoxMemory.query("win", ask, "a.ini") == Button.YES
    assert calls == ["a.ini"]
    assert store.files == {("win", "a.ini"): Button.YES}
    assert store.windows == {}

    other, other_calls = answering(Button.NO)
    assert QuestionBoxMemory.query("win", other, "b.ini") == Button.NO
    assert other_calls == ["b.ini"]
    assert QuestionBoxMemory.get_memory("win", "a.ini") == Button.YES


def test_file_choice_ignored_without_file(store):
    ask, _ = answering(Button.YES, remember_file=True)
    QuestionBoxMemory.query("win", ask)
    assert store.files == {}


def test_cancel_is_never_remembered(store):
    ask, _ = answering(Button.CANCEL, remember=True, remember_file=True)
    assert QuestionBoxMemory.query("win", ask, "a.ini") == Button.CANCEL
    assert store.windows == {}
    assert store.files == {}


def test_direct_memory_round_trip(store):
    QuestionBoxMemory.set_window_memory("w", Button.IGNORE)
    QuestionBoxMemory.set_file_memory("w", "f", Button.ABORT)
    assert QuestionBoxMemory.get_memory("w", "") == Button.IGNORE
    assert QuestionBoxMemory.get_memory("w", "f") == Button.ABORT


def test_missing_callbacks_raise():
    QuestionBoxMemory.set_callbacks(None, None, None)
    with pytest.raises(RuntimeError):
        QuestionBoxMemory.get_memory("w", "")
    with pytest.raises(RuntimeError):
        QuestionBoxMemory.set_window_memory("w", Button.OK)
    with pytest.raises(RuntimeError):
        QuestionBoxMemory.set_file_memory("w", "f", Button.OK)