"""Service modules"""
from .calculator import CalculatorSession, build_session

__all__ = ["CalculatorSession", "build_session"]
