#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字核心计算模块

提供八字计算的核心功能：
- 五行生克关系
- 十神计算
- 十二长生
"""

from .element_relations import (
    ELEMENT_RELATIONS,
    ally_elements,
    dominated_by,
    dominates,
    generated_by,
    generates,
    get_element_relation,
    opposing_elements,
)
from .ten_gods import (
    CATEGORY_NAMES,
    get_branch_ten_god,
    get_branch_ten_gods,
    get_ten_god,
    get_ten_god_category,
)
from .twelve_stages import (
    LU_BRANCH,
    STRONG_STAGES,
    TWELVE_STAGES,
    YANGREN_BRANCH,
    get_life_stage,
    is_strong_stage,
)

__all__ = [
    'ELEMENT_RELATIONS',
    'ally_elements',
    'dominated_by',
    'dominates',
    'generated_by',
    'generates',
    'get_element_relation',
    'opposing_elements',
    'CATEGORY_NAMES',
    'get_branch_ten_god',
    'get_branch_ten_gods',
    'get_ten_god',
    'get_ten_god_category',
    'LU_BRANCH',
    'STRONG_STAGES',
    'TWELVE_STAGES',
    'YANGREN_BRANCH',
    'get_life_stage',
    'is_strong_stage',
]
