"""
Services module - Application business logic layer.

Modules:
- stats: Profile statistics and streak computation
- workouts: Database stores for users, exercises and workouts
"""
