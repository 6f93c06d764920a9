"""
Persistence adapters.

These modules encapsulate how users, cars and leases are stored/retrieved.
Services depend on the repository rather than building queries themselves,
except inside the lease transactions which share one session.
"""
