#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字分析器

- InteractionAnalyzer: 刑冲合会
- ForceAnalyzer: 五行力量矩阵
- WangShuaiAnalyzer: 日主旺衰
- GejuAnalyzer: 格局
"""

from .force_analyzer import ForceAnalyzer
from .geju_analyzer import GejuAnalyzer
from .interaction_analyzer import InteractionAnalyzer
from .wangshuai_analyzer import WangShuaiAnalyzer

__all__ = ['ForceAnalyzer', 'GejuAnalyzer', 'InteractionAnalyzer', 'WangShuaiAnalyzer']
