#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""核心计算配置"""

from .geju_config import GejuWeights, get_weights, reload_weights

__all__ = ['GejuWeights', 'get_weights', 'reload_weights']
