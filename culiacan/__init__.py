"""Simulation core for a real-time strategy game: state, saves, politics, multiplayer, pathing and view helpers."""

__version__ = "0.2.0"