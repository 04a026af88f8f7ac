"""Workout plans: document model, generation, mutation and action history."""
