"""Tests for the session gateway, driven with in-memory connections."""

import asyncio

from battleship.engine.state_machine import GameStateMachine
from battleship.models import RoomStatus
from battleship.server.gateway import SessionGateway
from battleship.server.registry import RoomRegistry
from battleship.utils import GameRNG

# One ship per even row, flush left; no two ships touch
FLEET_LAYOUT = [
    ("carrier", 0, 0, 5),
    ("battleship", 0, 2, 4),
    ("cruiser", 0, 4, 3),
    ("submarine", 0, 6, 3),
    ("destroyer", 0, 8, 2),
]
SHIP_CELLS = [(x0 + i, y) for _, x0, y, size in FLEET_LAYOUT for i in range(size)]


class FakeConnection:
    """Records every frame sent to it."""

    def __init__(self):
        self.sent = []

    async def send_json(self, data):
        self.sent.append(data)

    def events(self) -> list[str]:
        return [message["event"] for message in self.sent]

    def last(self, event: str) -> dict:
        return next(m["data"] for m in reversed(self.sent) if m["event"] == event)


class BrokenConnection(FakeConnection):
    async def send_json(self, data):
        raise RuntimeError("connection reset")


def make_gateway(seed: int = 42) -> SessionGateway:
    return SessionGateway(
        registry=RoomRegistry(rng=GameRNG(seed)),
        machine=GameStateMachine(rng=GameRNG(seed)),
    )


async def open_room(gateway: SessionGateway):
    """Connect two participants and put them in one room."""
    alice, bob = FakeConnection(), FakeConnection()
    alice_id = await gateway.connect(alice)
    bob_id = await gateway.connect(bob)

    await gateway.handle(alice_id, {"event": "create-room", "data": {"name": "Alice"}})
    code = alice.last("room-created")["roomCode"]
    await gateway.handle(bob_id, {"event": "join-room", "data": {"name": "Bob", "roomCode": code}})
    return alice, bob, alice_id, bob_id, code


async def place_fleet(gateway: SessionGateway, participant_id: str):
    for ship, x, y, _ in FLEET_LAYOUT:
        await gateway.handle(
            participant_id,
            {
                "event": "place-ship",
                "data": {"shipId": ship, "startX": x, "startY": y, "orientation": "horizontal"},
            },
        )


async def battle_room(gateway: SessionGateway):
    """Room in battle with FLEET_LAYOUT on both boards."""
    alice, bob, alice_id, bob_id, code = await open_room(gateway)
    await gateway.handle(alice_id, {"event": "start-game", "data": {"roomCode": code}})
    for participant_id in (alice_id, bob_id):
        await place_fleet(gateway, participant_id)
        await gateway.handle(participant_id, {"event": "player-ready"})
    return alice, bob, alice_id, bob_id, code


def test_connect_assigns_id():
    async def scenario():
        gateway = make_gateway()
        connection = FakeConnection()
        participant_id = await gateway.connect(connection)

        assert connection.sent == [{"event": "connected", "data": {"playerId": participant_id}}]
        assert participant_id in gateway.connections

    asyncio.run(scenario())


def test_create_and_join():
    """Test room-created, room-joined and player-joined frames."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)

        created = alice.last("room-created")
        assert [p["name"] for p in created["players"]] == ["Alice"]

        joined = bob.last("room-joined")
        assert joined["roomCode"] == code
        assert joined["status"] == "placing"
        assert [p["name"] for p in joined["players"]] == ["Alice", "Bob"]

        assert alice.last("player-joined")["playerId"] == bob_id
        assert "player-joined" not in bob.events()

    asyncio.run(scenario())


def test_join_unknown_room():
    """Test errors go to the sender only."""

    async def scenario():
        gateway = make_gateway()
        alice, bob = FakeConnection(), FakeConnection()
        alice_id = await gateway.connect(alice)
        bob_id = await gateway.connect(bob)
        await gateway.handle(alice_id, {"event": "create-room", "data": {"name": "Alice"}})

        await gateway.handle(bob_id, {"event": "join-room", "data": {"name": "Bob", "roomCode": "ZZZZZZ"}})

        assert bob.last("error") == {"message": "Room does not exist"}
        assert "error" not in alice.events()

    asyncio.run(scenario())


def test_join_while_in_room():
    """Test membership is checked before the room code is looked up."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)

        await gateway.handle(alice_id, {"event": "join-room", "data": {"name": "Alice", "roomCode": "ZZZZZZ"}})
        assert alice.last("error") == {"message": "You are already in a room"}

        await gateway.handle(alice_id, {"event": "join-room", "data": {"name": "Alice", "roomCode": code}})
        assert alice.last("error") == {"message": "You are already in a room"}
        assert gateway.registry.get_room_of(alice_id) == code

    asyncio.run(scenario())


def test_invalid_frames():
    async def scenario():
        gateway = make_gateway()
        connection = FakeConnection()
        participant_id = await gateway.connect(connection)

        await gateway.handle(participant_id, {"event": "surrender"})
        assert connection.last("error") == {"message": "Unknown or missing event"}

        await gateway.handle(participant_id, {"event": "create-room", "data": {"name": ""}})
        assert connection.last("error")["message"].startswith("Invalid name")

        await gateway.handle(participant_id, ["not", "an", "object"])
        assert connection.events()[-1] == "error"
        assert gateway.registry.rooms == {}

    asyncio.run(scenario())


def test_start_game_broadcasts_views():
    """Test game-started goes to both, followed by each participant's own view."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)

        await gateway.handle(alice_id, {"event": "start-game", "data": {"roomCode": code}})

        for connection in (alice, bob):
            assert connection.events()[-2:] == ["game-started", "game-update"]
            assert connection.last("game-started") == {"roomCode": code}
            assert connection.last("game-update")["status"] == "placing"

    asyncio.run(scenario())


def test_start_game_requires_membership():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)
        carol = FakeConnection()
        carol_id = await gateway.connect(carol)

        await gateway.handle(carol_id, {"event": "start-game", "data": {"roomCode": code}})

        assert carol.last("error") == {"message": "You are not in this room"}
        assert not gateway.registry.get_room(code).boards_ready

    asyncio.run(scenario())


def test_place_ship_updates_sender_only():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)
        await gateway.handle(alice_id, {"event": "start-game", "data": {"roomCode": code}})
        bob_frames = len(bob.sent)

        await gateway.handle(
            alice_id,
            {
                "event": "place-ship",
                "data": {"shipId": 1, "startX": 0, "startY": 0, "orientation": "horizontal"},
            },
        )

        assert alice.events()[-1] == "game-update"
        assert alice.last("game-update")["placedShips"] == ["carrier"]
        assert len(bob.sent) == bob_frames

    asyncio.run(scenario())


def test_rejected_placement_sends_reason_and_view():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)
        await gateway.handle(alice_id, {"event": "start-game", "data": {"roomCode": code}})

        await gateway.handle(
            alice_id,
            {
                "event": "place-ship",
                "data": {"shipId": "carrier", "startX": 8, "startY": 0, "orientation": "horizontal"},
            },
        )

        assert alice.events()[-2:] == ["error", "game-update"]
        assert alice.last("error") == {"message": "Ship does not fit on the board"}
        assert alice.last("game-update")["placedShips"] == []

    asyncio.run(scenario())


def test_ready_flow():
    """Test all-players-ready is broadcast once, when the second fleet locks in."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)
        await gateway.handle(alice_id, {"event": "start-game", "data": {"roomCode": code}})

        await gateway.handle(alice_id, {"event": "player-ready"})
        assert alice.last("error") == {"message": "Place all your ships before getting ready"}

        await gateway.handle(alice_id, {"event": "randomize-ships"})
        await gateway.handle(alice_id, {"event": "player-ready"})
        assert "all-players-ready" not in alice.events()
        assert bob.last("game-update")["players"][0]["ready"] is True

        await gateway.handle(bob_id, {"event": "randomize-ships"})
        await gateway.handle(bob_id, {"event": "player-ready"})
        await gateway.handle(bob_id, {"event": "player-ready"})

        for connection in (alice, bob):
            assert connection.events().count("all-players-ready") == 1
            assert connection.last("game-update")["status"] == "playing"

    asyncio.run(scenario())


def test_attack_out_of_turn():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)
        room = gateway.registry.get_room(code)
        waiting_id = bob_id if room.current_turn == alice_id else alice_id
        waiting = bob if waiting_id == bob_id else alice
        other = alice if waiting is bob else bob
        other_frames = len(other.sent)

        await gateway.handle(waiting_id, {"event": "attack", "data": {"x": 9, "y": 9}})

        assert waiting.last("error") == {"message": "It is not your turn"}
        assert len(other.sent) == other_frames

    asyncio.run(scenario())


def test_full_game():
    """Test the turn holder sweeps the enemy fleet and both see game-over."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)
        room = gateway.registry.get_room(code)
        attacker_id = room.current_turn
        attacker, defender = (alice, bob) if attacker_id == alice_id else (bob, alice)
        winner_name = "Alice" if attacker_id == alice_id else "Bob"

        for x, y in SHIP_CELLS:
            await gateway.handle(attacker_id, {"event": "attack", "data": {"x": x, "y": y}})

        assert "error" not in attacker.events()
        for connection in (attacker, defender):
            assert connection.events()[-2:] == ["game-update", "game-over"]
            assert connection.last("game-over")["winner"]["name"] == winner_name
            view = connection.last("game-update")
            assert view["status"] == "finished"
            assert view["winner"] == attacker_id
            assert view["lastAttack"]["gameOver"] is True

        assert sorted(attacker.last("game-update")["enemySunkShips"]) == sorted(
            ship for ship, *_ in FLEET_LAYOUT
        )
        assert room.status == RoomStatus.FINISHED

        await gateway.handle(attacker_id, {"event": "attack", "data": {"x": 9, "y": 9}})
        assert attacker.last("error") == {"message": "The game is over"}

    asyncio.run(scenario())


def test_ready_after_game_over():
    """Test a late ready is rejected and all-players-ready is not sent again."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)
        room = gateway.registry.get_room(code)
        attacker_id = room.current_turn
        for x, y in SHIP_CELLS:
            await gateway.handle(attacker_id, {"event": "attack", "data": {"x": x, "y": y}})
        assert room.status == RoomStatus.FINISHED

        for participant_id in (alice_id, bob_id):
            await gateway.handle(participant_id, {"event": "player-ready"})

        for connection in (alice, bob):
            assert connection.events().count("all-players-ready") == 1
            assert connection.last("error") == {"message": "The game is over"}
        assert room.status == RoomStatus.FINISHED

    asyncio.run(scenario())


def test_enemy_board_hidden_in_updates():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)

        for connection in (alice, bob):
            for message in connection.sent:
                if message["event"] == "game-update":
                    assert "ship" not in str(message["data"]["enemyBoard"])

    asyncio.run(scenario())


def test_leave_and_disconnect():
    """Test leaving notifies the rest and the last departure deletes the room."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await open_room(gateway)

        await gateway.handle(bob_id, {"event": "leave-room"})
        left = alice.last("player-left")
        assert left["playerId"] == bob_id
        assert [p["name"] for p in left["players"]] == ["Alice"]

        await gateway.handle(bob_id, {"event": "leave-room"})
        assert bob.last("error") == {"message": "You are not in a room"}

        await gateway.disconnect(alice_id)
        assert code not in gateway.registry.rooms
        assert code not in gateway._room_locks
        assert alice_id not in gateway.connections

    asyncio.run(scenario())


def test_opponent_leaves_mid_battle():
    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)

        await gateway.disconnect(bob_id)

        room = gateway.registry.get_room(code)
        assert room.current_turn == alice_id
        assert alice.last("game-update")["yourTurn"] is True

        await gateway.handle(alice_id, {"event": "attack", "data": {"x": 0, "y": 0}})
        assert alice.last("error") == {"message": "There is no opponent"}

    asyncio.run(scenario())


def test_unexpected_error_is_generic():
    """Test internal failures are logged and reported without detail."""

    async def scenario():
        gateway = make_gateway()
        alice, bob, alice_id, bob_id, code = await battle_room(gateway)

        def explode(*args, **kwargs):
            raise RuntimeError("board exploded")

        gateway.machine.attack = explode
        await gateway.handle(alice_id, {"event": "attack", "data": {"x": 0, "y": 0}})

        assert alice.last("error") == {"message": "Internal server error"}

    asyncio.run(scenario())


def test_failed_send_does_not_block_others():
    async def scenario():
        gateway = make_gateway()
        alice, broken = FakeConnection(), BrokenConnection()
        alice_id = await gateway.connect(alice)
        broken_id = await gateway.connect(broken)
        await gateway.handle(alice_id, {"event": "create-room", "data": {"name": "Alice"}})
        code = alice.last("room-created")["roomCode"]

        await gateway.handle(broken_id, {"event": "join-room", "data": {"name": "Bob", "roomCode": code}})

        assert alice.last("player-joined")["playerId"] == broken_id
        assert gateway.registry.get_room_of(broken_id) == code

    asyncio.run(scenario())
