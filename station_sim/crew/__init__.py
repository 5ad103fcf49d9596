"""
Station Sim — Crew Package
Crew roster and training.
"""

from .crew_model import CrewMember, CrewRole, create_default_crew

__all__ = ['CrewMember', 'CrewRole', 'create_default_crew']
