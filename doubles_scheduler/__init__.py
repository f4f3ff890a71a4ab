"""
Doubles Court Scheduling System.

Assigns players to time slots and courts for a doubles session: two teams of
two per court plus an umpire and two line judges, under teammate, opponent
and rest limits.
"""

__version__ = "1.0.0"
