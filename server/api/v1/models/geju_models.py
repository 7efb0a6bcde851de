#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局分析请求/响应模型
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.data.stems_branches import UNKNOWN_SYMBOL, is_branch, is_stem


def _check_ganzhi(v: str, label: str) -> str:
    if not v or len(v) != 2:
        raise ValueError(f'{label}必须为两个字的干支，如 甲子')
    if not is_stem(v[0]):
        raise ValueError(f'{label}天干非法: {v[0]}')
    if not is_branch(v[1]):
        raise ValueError(f'{label}地支非法: {v[1]}')
    return v


class GejuRequest(BaseModel):
    """格局分析请求 - 四柱干支由排盘服务给出"""
    year: str = Field(..., description="年柱干支", example="甲子")
    month: str = Field(..., description="月柱干支", example="丙寅")
    day: str = Field(..., description="日柱干支", example="戊午")
    hour: Optional[str] = Field(None, description="时柱干支，时辰未知时留空或传 '-'", example="庚申")
    commanding_stem: Optional[str] = Field(None, description="当日司令藏干（可选，由节气天数决定）", example="甲")
    is_hour_unknown: bool = Field(False, description="时辰未知，为 true 时时柱不参与计算")

    @field_validator('year')
    @classmethod
    def validate_year(cls, v):
        return _check_ganzhi(v, '年柱')

    @field_validator('month')
    @classmethod
    def validate_month(cls, v):
        return _check_ganzhi(v, '月柱')

    @field_validator('day')
    @classmethod
    def validate_day(cls, v):
        return _check_ganzhi(v, '日柱')

    @field_validator('hour')
    @classmethod
    def validate_hour(cls, v):
        """时柱可为空或 '-'"""
        if v is None or v in ('', UNKNOWN_SYMBOL):
            return None
        return _check_ganzhi(v, '时柱')

    @field_validator('commanding_stem')
    @classmethod
    def validate_commanding_stem(cls, v):
        if v is None or v == '':
            return None
        if not is_stem(v):
            raise ValueError(f'司令藏干必须为天干: {v}')
        return v


class GejuResponse(BaseModel):
    """格局分析响应"""
    success: bool
    data: Optional[dict] = None
    error: Optional[str] = None
