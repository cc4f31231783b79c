"""
Unit tests for the pure state commands.
"""

from core.domain.models import Activity, ActivityStatus, Client, EventState
from core.services import event_state


class TestClientCommands:
    """add/update/delete over the client collection."""

    def test_add_appends_at_end(self, clients):
        state = EventState(clients=tuple(clients))
        new = Client(id="c3", name="Nuevo")

        result = event_state.add_client(state, new)

        assert [c.id for c in result.clients] == ["c1", "c2", "c3"]
        assert len(state.clients) == 2

    def test_update_replaces_in_place(self, clients):
        state = EventState(clients=tuple(clients))
        edited = clients[0].model_copy(update={"name": "Ana María"})

        result = event_state.update_client(state, edited)

        assert [c.id for c in result.clients] == ["c1", "c2"]
        assert result.clients[0].name == "Ana María"

    def test_update_unknown_id_is_noop(self, clients):
        state = EventState(clients=tuple(clients))

        result = event_state.update_client(state, Client(id="nope", name="X"))

        assert result is state
        assert event_state.delete_client(state, "nope") is state

    def test_delete_twice_is_idempotent(self, clients):
        state = EventState(clients=tuple(clients))

        once = event_state.delete_client(state, "c1")
        twice = event_state.delete_client(once, "c1")

        assert [c.id for c in once.clients] == ["c2"]
        assert twice.clients == once.clients

    def test_toggle_confirmation(self, clients):
        state = EventState(clients=tuple(clients))

        result = event_state.toggle_confirmation(state, "c2")

        assert event_state.find_client(result, "c2").is_confirmed is True
        assert event_state.toggle_confirmation(state, "missing") is state


class TestActivityCommands:
    """add/update/delete over the activity collection."""

    def test_add_update_delete(self, activities):
        state = EventState(activities=tuple(activities[:2]))

        state = event_state.add_activity(state, activities[2])
        assert [a.id for a in state.activities] == ["a1", "a2", "a3"]

        state = event_state.update_activity(state, activities[1].model_copy(update={"cost": 75.0}))
        assert state.activities[1].cost == 75.0

        state = event_state.delete_activity(state, "a1")
        assert [a.id for a in state.activities] == ["a2", "a3"]

    def test_update_unknown_id_is_noop(self, activities):
        state = EventState(activities=tuple(activities))

        result = event_state.update_activity(state, Activity(id="zzz", name="X"))

        assert result is state
        assert event_state.delete_activity(state, "zzz") is state

    def test_set_status(self, activities):
        state = EventState(activities=tuple(activities))

        result = event_state.set_activity_status(state, "a3", ActivityStatus.FINALIZADA)

        assert event_state.find_activity(result, "a3").status is ActivityStatus.FINALIZADA
        assert event_state.find_activity(result, "a1") == activities[0]

    def test_set_status_unknown_id_is_noop(self, activities):
        state = EventState(activities=tuple(activities))

        assert event_state.set_activity_status(state, "x", ActivityStatus.FINALIZADA) is state
