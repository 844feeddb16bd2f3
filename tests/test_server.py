"""End-to-end tests for the FastAPI app."""

from fastapi.testclient import TestClient

from battleship.server.main import app


def test_health():
    with TestClient(app) as client:
        assert client.get("/api/health").json() == {"status": "ok"}

        status = client.get("/api").json()
        assert status["service"] == "Battleship"
        assert status["status"] == "operational"


def test_websocket_room_flow():
    """Test two sockets can create, join and start a room."""
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as alice, client.websocket_connect("/ws") as bob:
            assert alice.receive_json()["event"] == "connected"
            assert bob.receive_json()["event"] == "connected"

            alice.send_json({"event": "create-room", "data": {"name": "Alice"}})
            created = alice.receive_json()
            assert created["event"] == "room-created"
            code = created["data"]["roomCode"]

            bob.send_json({"event": "join-room", "data": {"name": "Bob", "roomCode": code.lower()}})
            joined = bob.receive_json()
            assert joined["event"] == "room-joined"
            assert joined["data"]["status"] == "placing"
            assert alice.receive_json()["event"] == "player-joined"

            bob.send_json({"event": "start-game", "data": {"roomCode": code}})
            for socket in (alice, bob):
                assert socket.receive_json()["event"] == "game-started"
                update = socket.receive_json()
                assert update["event"] == "game-update"
                assert update["data"]["shipsToPlace"] == [
                    "carrier",
                    "battleship",
                    "cruiser",
                    "submarine",
                    "destroyer",
                ]


def test_malformed_json():
    """Test a non-JSON frame is answered with an error and the socket stays open."""
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as socket:
            socket.receive_json()

            socket.send_text("{not json")
            assert socket.receive_json() == {"event": "error", "data": {"message": "Malformed JSON"}}

            socket.send_json({"event": "attack", "data": {"x": 0, "y": 0}})
            assert socket.receive_json() == {
                "event": "error",
                "data": {"message": "You are not in a room"},
            }
