from __future__ import annotations

import pytest

from enlighten.exceptions import CallbackNotFoundError
from enlighten.services.dispatch import DEFAULT_POPUP, ClickDispatcher, DefaultPopup
from enlighten.services.glossary import GlossaryStore


def test_default_popup_shows_entry(store: GlossaryStore) -> None:
    popup = DefaultPopup()
    dispatcher = ClickDispatcher(store.get, popup.show)
    dispatcher.dispatch(54)
    assert popup.visible
    assert popup.current.title == "Gender"
    assert popup.current.text == "Socially constructed roles."
    popup.close()
    assert not popup.visible


def test_named_callback_receives_entry(store: GlossaryStore) -> None:
    calls: list[tuple[int, str, str]] = []
    dispatcher = ClickDispatcher(store.get, DefaultPopup().show)
    dispatcher.register("popup", lambda *args: calls.append(args))
    dispatcher.dispatch(69, "popup")
    assert calls == [(69, "Age", "Time lived.")]


def test_unregistered_callback(store: GlossaryStore) -> None:
    dispatcher = ClickDispatcher(store.get, DefaultPopup().show)
    dispatcher.register("popup", print)
    dispatcher.unregister("popup")
    with pytest.raises(CallbackNotFoundError):
        dispatcher.dispatch(69, "popup")


def test_unknown_entry_is_ignored(store: GlossaryStore) -> None:
    popup = DefaultPopup()
    dispatcher = ClickDispatcher(store.get, popup.show)
    assert dispatcher.dispatch(12345) is None
    assert not popup.visible


def test_reference_validation(store: GlossaryStore) -> None:
    dispatcher = ClickDispatcher(store.get, DefaultPopup().show)
    assert dispatcher.reference(None) == DEFAULT_POPUP
    assert dispatcher.reference("window.app.show") == "window.app.show"
    with pytest.raises(ValueError):
        dispatcher.reference('bad"name')
    with pytest.raises(ValueError):
        dispatcher.register("not valid", print)
    with pytest.raises(ValueError):
        ClickDispatcher(store.get, print, function_name="1abc")
