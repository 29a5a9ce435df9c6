"""Intake pipeline components."""

from .intake import IntakeSession, LetterIntake, SourceDocument

__all__ = ["IntakeSession", "LetterIntake", "SourceDocument"]
