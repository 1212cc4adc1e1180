"""
Application Layer for the lifting log.

This package contains:
- ports/: Store interfaces the use cases depend on (local + remote snapshot stores)
- use_cases/: Startup sync, write-through propagation and the recent-workouts view
"""
