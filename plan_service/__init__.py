"""Workout plan generation and mutation service."""
