"""Tests for the event dispatcher and command registry."""

from __future__ import annotations

from typing import Any

import pytest

from nodepath.exceptions import (
    CommandNotFoundError,
    CommandUnavailableError,
    DispatchError,
)
from nodepath.models import Document
from nodepath.modules.events import CommandRegistry, Event, EventDispatcher


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def commands(dispatcher: EventDispatcher) -> CommandRegistry:
    return CommandRegistry(dispatcher)


class TestEvent:
    def test_key_identifies_event(self) -> None:
        event = Event(source="show-tree", name="describe")
        assert event.key == ("show-tree", "describe")
        assert event.payload == {}


class TestEventDispatcher:
    def test_broadcast_calls_subscribers_in_order(self, dispatcher: EventDispatcher) -> None:
        calls: list[str] = []
        dispatcher.subscribe("a", "go", lambda e: calls.append("first") or 1)
        dispatcher.subscribe("a", "go", lambda e: calls.append("second") or 2)

        results = dispatcher.broadcast(Event("a", "go"))

        assert calls == ["first", "second"]
        assert results == [1, 2]

    def test_broadcast_only_reaches_matching_key(self, dispatcher: EventDispatcher) -> None:
        seen: list[tuple[str, str]] = []
        dispatcher.subscribe("a", "go", lambda e: seen.append(e.key))
        dispatcher.subscribe("b", "go", lambda e: seen.append(e.key))

        dispatcher.broadcast(Event("b", "go"))

        assert seen == [("b", "go")]

    def test_one_handler_many_events(self, dispatcher: EventDispatcher) -> None:
        seen: list[tuple[str, str]] = []

        def handler(event: Event) -> None:
            seen.append(event.key)

        dispatcher.subscribe("a", "one", handler)
        dispatcher.subscribe("a", "two", handler)
        dispatcher.broadcast(Event("a", "two"))
        dispatcher.broadcast(Event("a", "one"))

        assert seen == [("a", "two"), ("a", "one")]

    def test_no_subscribers_returns_empty(self, dispatcher: EventDispatcher) -> None:
        assert dispatcher.broadcast(Event("nobody", "listens")) == []

    def test_duplicate_subscription_is_ignored(self, dispatcher: EventDispatcher) -> None:
        def handler(event: Event) -> str:
            return "x"

        dispatcher.subscribe("a", "go", handler)
        dispatcher.subscribe("a", "go", handler)
        assert dispatcher.broadcast(Event("a", "go")) == ["x"]

    def test_handler_errors_propagate(self, dispatcher: EventDispatcher) -> None:
        def boom(event: Event) -> None:
            raise RuntimeError("handler failed")

        dispatcher.subscribe("a", "go", boom)
        with pytest.raises(RuntimeError, match="handler failed"):
            dispatcher.broadcast(Event("a", "go"))

    def test_unsubscribe(self, dispatcher: EventDispatcher) -> None:
        def handler(event: Event) -> str:
            return "x"

        dispatcher.subscribe("a", "go", handler)
        dispatcher.unsubscribe("a", "go", handler)
        assert dispatcher.broadcast(Event("a", "go")) == []
        assert dispatcher.subscriptions() == []

    def test_unsubscribe_unknown_raises(self, dispatcher: EventDispatcher) -> None:
        with pytest.raises(DispatchError, match="not subscribed"):
            dispatcher.unsubscribe("a", "go", lambda e: None)

    def test_subscriptions_sorted(self, dispatcher: EventDispatcher) -> None:
        dispatcher.subscribe("b", "x", lambda e: None)
        dispatcher.subscribe("a", "y", lambda e: None)
        assert dispatcher.subscriptions() == [("a", "y"), ("b", "x")]

    def test_subscribers_in_order(self, dispatcher: EventDispatcher) -> None:
        def first(event: Event) -> None:
            return None

        def second(event: Event) -> None:
            return None

        dispatcher.subscribe("a", "go", first)
        dispatcher.subscribe("a", "go", second)
        assert dispatcher.subscribers("a", "go") == [first, second]
        assert dispatcher.subscribers("a", "stop") == []


class TestCommandRegistry:
    def test_unregister(self, commands: CommandRegistry) -> None:
        commands.register("go", "a", "go")
        commands.unregister("go")
        assert commands.list_commands() == []
        with pytest.raises(CommandNotFoundError):
            commands.get("go")

    def test_unregister_unknown(self, commands: CommandRegistry) -> None:
        with pytest.raises(CommandNotFoundError, match="Unknown command"):
            commands.unregister("ghost")

    def test_invoke_raises_event_with_document(
        self, dispatcher: EventDispatcher, commands: CommandRegistry
    ) -> None:
        received: list[Event] = []
        dispatcher.subscribe("mod", "evt", received.append)
        commands.register("cmd", "mod", "evt")
        doc = Document(content_type="python", text="x = 1\n")

        commands.invoke("cmd", doc)

        assert len(received) == 1
        assert received[0].key == ("mod", "evt")
        assert received[0].document is doc
        assert received[0].payload == {"command": "cmd"}

    def test_invoke_returns_handler_results(
        self, dispatcher: EventDispatcher, commands: CommandRegistry
    ) -> None:
        dispatcher.subscribe("mod", "evt", lambda e: "done")
        commands.register("cmd", "mod", "evt")
        assert commands.invoke("cmd", Document()) == ["done"]

    def test_unknown_command(self, commands: CommandRegistry) -> None:
        with pytest.raises(CommandNotFoundError, match="Unknown command 'nope'"):
            commands.invoke("nope", Document())

    def test_duplicate_registration(self, commands: CommandRegistry) -> None:
        commands.register("cmd", "mod", "evt")
        with pytest.raises(DispatchError, match="already registered"):
            commands.register("cmd", "mod", "other")

    def test_content_type_restriction(
        self, dispatcher: EventDispatcher, commands: CommandRegistry
    ) -> None:
        calls: list[Any] = []
        dispatcher.subscribe("mod", "evt", calls.append)
        commands.register("cmd", "mod", "evt", content_types=["norg"])

        with pytest.raises(CommandUnavailableError, match="'python'"):
            commands.invoke("cmd", Document(content_type="python"))
        assert calls == []

        commands.invoke("cmd", Document(content_type="norg"))
        assert len(calls) == 1

    def test_restricted_command_rejects_unknown_content_type(
        self, commands: CommandRegistry
    ) -> None:
        commands.register("cmd", "mod", "evt", content_types=["norg"])
        with pytest.raises(CommandUnavailableError, match="'unknown'"):
            commands.invoke("cmd", Document())

    def test_available_for(self, commands: CommandRegistry) -> None:
        commands.register("everywhere", "mod", "a")
        commands.register("norg-only", "mod", "b", content_types=["norg"])
        assert commands.available_for("norg") == ["everywhere", "norg-only"]
        assert commands.available_for("python") == ["everywhere"]

    def test_list_commands(self, commands: CommandRegistry) -> None:
        commands.register("everywhere", "mod", "a")
        commands.register("norg-only", "mod", "b", content_types=["norg", "md"])
        assert commands.list_commands() == [
            {"name": "everywhere", "event": "mod.a", "content_types": "*"},
            {"name": "norg-only", "event": "mod.b", "content_types": "norg, md"},
        ]
