"""Tests for the event emitter."""

from twentyone.game.events import EventEmitter, EventType, GameEvent


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_type_specific_handler(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.BET_PLACED)

        emitter.emit_new(EventType.BET_PLACED, amount=50)
        emitter.emit_new(EventType.PLAYER_HIT)

        assert [e.event_type for e in received] == [EventType.BET_PLACED]
        assert received[0].data == {"amount": 50}

    def test_catch_all_handler(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit_new(EventType.BET_PLACED)
        emitter.emit_new(EventType.PUSH)

        assert len(received) == 2

    def test_history_keeps_most_recent(self):
        emitter = EventEmitter(history_size=2)
        emitter.emit_new(EventType.BET_PLACED)
        emitter.emit_new(EventType.PLAYER_HIT)
        last = emitter.emit_new(EventType.PLAYER_STAND)

        assert [e.event_type for e in emitter.history] == [EventType.PLAYER_HIT, EventType.PLAYER_STAND]
        assert emitter.history[-1] is last

    def test_history(self):
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.ROUND_ENDED, chips=1000)

        assert emitter.history == [event]
        emitter.history.clear()
        assert emitter.history == [event]

        emitter.clear_history()
        assert emitter.history == []

    def test_event_str(self):
        event = GameEvent(EventType.DEALER_HITS, {"hand_value": 15})
        assert str(event) == "DEALER_HITS: {'hand_value': 15}"
