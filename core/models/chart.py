#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
四柱命盘模型

Chart 由排盘方一次性构造，之后只读；时柱可以缺失（None）或用 '-' 占位。
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.data.stems_branches import (
    STEM_ELEMENTS,
    STEM_YINYANG,
    UNKNOWN_SYMBOL,
    is_branch,
    is_stem,
)

POSITIONS: Tuple[str, ...] = ('year', 'month', 'day', 'hour')

POSITION_NAMES = {
    'year': '年柱',
    'month': '月柱',
    'day': '日柱',
    'hour': '时柱',
}


class ChartValidationError(ValueError):
    """命盘数据缺失或格式错误"""


@dataclass(frozen=True)
class Pillar:
    """单柱（天干 + 地支 + 柱位）"""
    stem: str
    branch: str
    position: str

    @property
    def is_unknown(self) -> bool:
        return self.stem == UNKNOWN_SYMBOL or self.branch == UNKNOWN_SYMBOL

    @property
    def ganzhi(self) -> str:
        return f"{self.stem}{self.branch}"

    def to_dict(self) -> Dict[str, str]:
        return {'stem': self.stem, 'branch': self.branch}


@dataclass(frozen=True)
class Chart:
    """
    四柱命盘

    日柱天干为日主（参照干），所有十神/旺衰/格局均相对日主计算。
    """
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Optional[Pillar] = None

    @classmethod
    def from_ganzhi(cls, year: str, month: str, day: str, hour: Optional[str] = None) -> 'Chart':
        """
        从干支字符串构造，如 Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申')

        hour 为 None、'' 或 '-' 时视为时辰未知。
        """
        values = {'year': year, 'month': month, 'day': day}
        pillars = {}
        for position, value in values.items():
            if not value or len(value) != 2:
                raise ChartValidationError(f"{POSITION_NAMES[position]}格式错误: {value!r}")
            pillars[position] = Pillar(value[0], value[1], position)

        hour_pillar = None
        if hour and hour != UNKNOWN_SYMBOL:
            if len(hour) != 2:
                raise ChartValidationError(f"{POSITION_NAMES['hour']}格式错误: {hour!r}")
            hour_pillar = Pillar(hour[0], hour[1], 'hour')
        return cls(hour=hour_pillar, **pillars)

    @classmethod
    def from_pillars(cls, bazi_pillars: Mapping[str, Any]) -> 'Chart':
        """
        从排盘结果的 bazi_pillars 结构构造

        Args:
            bazi_pillars: {'year': {'stem': '甲', 'branch': '子'}, ...}
        """
        pillars = {}
        for position in POSITIONS:
            data = bazi_pillars.get(position)
            if not data:
                if position == 'hour':
                    continue
                raise ChartValidationError(f"缺少{POSITION_NAMES[position]}")
            pillars[position] = Pillar(data.get('stem', ''), data.get('branch', ''), position)
        return cls(**pillars)

    @property
    def day_master(self) -> str:
        """日主（日干）"""
        return self.day.stem

    @property
    def day_master_element(self) -> str:
        return STEM_ELEMENTS.get(self.day.stem, '')

    @property
    def day_master_polarity(self) -> str:
        return STEM_YINYANG.get(self.day.stem, '')

    @property
    def has_hour(self) -> bool:
        return self.hour is not None and not self.hour.is_unknown

    def pillars(self, include_hour: bool = True) -> List[Pillar]:
        """按 年/月/日/时 顺序返回已知柱位，时辰未知时不含时柱"""
        result = [self.year, self.month, self.day]
        if include_hour and self.has_hour:
            result.append(self.hour)
        return result

    def stems(self, include_hour: bool = True) -> List[str]:
        return [p.stem for p in self.pillars(include_hour)]

    def branches(self, include_hour: bool = True) -> List[str]:
        return [p.branch for p in self.pillars(include_hour)]

    def symbols(self) -> Tuple[List[str], List[str]]:
        """四柱天干、地支（时柱未知时用 '-' 占位），供刑冲合会检测使用"""
        hour = self.hour if self.has_hour else None
        stems = [self.year.stem, self.month.stem, self.day.stem, hour.stem if hour else UNKNOWN_SYMBOL]
        branches = [self.year.branch, self.month.branch, self.day.branch,
                    hour.branch if hour else UNKNOWN_SYMBOL]
        return stems, branches

    def validate(self) -> None:
        """
        校验命盘

        Raises:
            ChartValidationError: 年/月/日柱干支非法，或时柱给出了非法干支
        """
        for pillar in (self.year, self.month, self.day):
            if not isinstance(pillar, Pillar):
                raise ChartValidationError("柱数据缺失")
            if not is_stem(pillar.stem):
                raise ChartValidationError(f"{POSITION_NAMES[pillar.position]}天干非法: {pillar.stem!r}")
            if not is_branch(pillar.branch):
                raise ChartValidationError(f"{POSITION_NAMES[pillar.position]}地支非法: {pillar.branch!r}")
        if self.has_hour:
            if not is_stem(self.hour.stem) or not is_branch(self.hour.branch):
                raise ChartValidationError(f"时柱干支非法: {self.hour.ganzhi!r}")

    def without_hour(self) -> 'Chart':
        return Chart(self.year, self.month, self.day, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            position: (getattr(self, position).to_dict() if getattr(self, position) else None)
            for position in POSITIONS
        }
