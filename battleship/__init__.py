"""Battleship game rooms: board engine, turn state machine and realtime gateway."""
