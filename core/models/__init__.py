#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字格局数据模型
"""

from .chart import POSITIONS, Chart, ChartValidationError, Pillar
from .results import (
    ForceMatrix,
    InteractionRecord,
    NormalPattern,
    PatternResult,
    SpecialPattern,
    StrengthResult,
    Undeterminable,
)

__all__ = [
    'POSITIONS',
    'Chart',
    'ChartValidationError',
    'Pillar',
    'ForceMatrix',
    'InteractionRecord',
    'NormalPattern',
    'PatternResult',
    'SpecialPattern',
    'StrengthResult',
    'Undeterminable',
]
