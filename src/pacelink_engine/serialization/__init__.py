"""Serialization module — export expanded workouts as backend rows."""

from pacelink_engine.serialization.payload import block_to_dict, to_workout_payload

__all__ = ["block_to_dict", "to_workout_payload"]
