"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.customer_mapper import CustomerMapper
from domain.mappers.message_mapper import MessageMapper
from domain.mappers.habit_mapper import HabitMapper

__all__ = ["CustomerMapper", "MessageMapper", "HabitMapper"]
