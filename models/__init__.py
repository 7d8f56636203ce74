#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Journal - Models Package
Data models, enums and operation results for the mood journal
"""

from .enums import (
    MoodCategory,
    Consistency,
    MOOD_EMOJI
)

from .mood import (
    MoodEntry,
    MoodValidationError
)

from .results import (
    OperationResult,
    Ok,
    ValidationFailure,
    LoadFailure,
    SaveFailure,
    DeleteFailure,
    ClearFailure
)

__all__ = [
    # Enums
    'MoodCategory',
    'Consistency',
    'MOOD_EMOJI',

    # Mood models
    'MoodEntry',
    'MoodValidationError',

    # Results
    'OperationResult',
    'Ok',
    'ValidationFailure',
    'LoadFailure',
    'SaveFailure',
    'DeleteFailure',
    'ClearFailure'
]
