"""Workout builder — expands coach form state into ordered training blocks."""

from pacelink_engine.workout_builder.builder import expand_workout

__all__ = ["expand_workout"]
