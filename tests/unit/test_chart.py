#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""命盘模型单元测试"""

import pytest

from core.models import Chart, ChartValidationError, Pillar


class TestFromGanzhi:
    def test_basic(self):
        chart = Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申')
        assert chart.day_master == '戊'
        assert chart.day_master_element == '土'
        assert chart.day_master_polarity == '阳'
        assert chart.has_hour
        assert chart.stems() == ['甲', '丙', '戊', '庚']
        assert chart.branches() == ['子', '寅', '午', '申']

    @pytest.mark.parametrize("hour", [None, '', '-'])
    def test_unknown_hour(self, hour):
        chart = Chart.from_ganzhi('甲子', '丙寅', '戊午', hour)
        assert chart.hour is None
        assert not chart.has_hour
        assert chart.symbols() == (['甲', '丙', '戊', '-'], ['子', '寅', '午', '-'])

    @pytest.mark.parametrize("args", [
        ('甲', '丙寅', '戊午'),
        ('甲子', '', '戊午'),
        ('甲子', '丙寅', '戊午', '庚申酉'),
    ])
    def test_bad_length(self, args):
        with pytest.raises(ChartValidationError):
            Chart.from_ganzhi(*args)

    def test_immutable(self):
        chart = Chart.from_ganzhi('甲子', '丙寅', '戊午')
        with pytest.raises(AttributeError):
            chart.day = Pillar('甲', '子', 'day')


class TestFromPillars:
    def test_bazi_pillars_shape(self):
        chart = Chart.from_pillars({
            'year': {'stem': '甲', 'branch': '子'},
            'month': {'stem': '丙', 'branch': '寅'},
            'day': {'stem': '戊', 'branch': '午'},
            'hour': {'stem': '庚', 'branch': '申'},
        })
        assert chart.hour.ganzhi == '庚申'
        assert chart.to_dict()['day'] == {'stem': '戊', 'branch': '午'}

    def test_missing_pillar(self):
        with pytest.raises(ChartValidationError):
            Chart.from_pillars({'year': {'stem': '甲', 'branch': '子'}})

    def test_sentinel_hour_pillar(self):
        chart = Chart.from_pillars({
            'year': {'stem': '甲', 'branch': '子'},
            'month': {'stem': '丙', 'branch': '寅'},
            'day': {'stem': '戊', 'branch': '午'},
            'hour': {'stem': '-', 'branch': '-'},
        })
        assert not chart.has_hour
        assert len(chart.pillars()) == 3
        chart.validate()


class TestValidate:
    def test_valid(self):
        Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申').validate()

    @pytest.mark.parametrize("pillars", [
        ('甲子', '丙寅', 'X午'),
        ('甲子', '丙?', '戊午'),
        ('甲子', '丙寅', '戊午', '庚X'),
    ])
    def test_invalid(self, pillars):
        with pytest.raises(ChartValidationError):
            Chart.from_ganzhi(*pillars).validate()
