#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
权重配置与应用配置单元测试
"""

import json
import os
from unittest.mock import patch

import pytest

from core.config import geju_config
from core.config.geju_config import GejuWeights, get_weights, reload_weights
from server.config.app_config import AppConfig, get_config, reload_config


class TestGejuWeights:
    """权重配置测试类"""

    def test_defaults(self):
        weights = GejuWeights()
        assert weights.commanding_bonus == 1.5
        assert weights.stem_weights['day'] == 0.0
        assert weights.branch_weights['month'] > weights.branch_weights['day']
        assert weights.clash_retain['vault'] > weights.clash_retain['peak']
        assert weights.partial_with_peak_ratio > weights.partial_without_peak_ratio

    def test_rootedness_order(self):
        rootedness = GejuWeights().rootedness
        assert rootedness['month'] > rootedness['day'] > rootedness['hour'] > rootedness['none']
        assert rootedness['year'] == rootedness['hour']

    def test_merged_nested(self):
        weights = GejuWeights().merged({'clash_retain': {'peak': 0.5}, 'seat_bonus': 2})
        assert weights.clash_retain['peak'] == 0.5
        assert weights.clash_retain['vault'] == 0.85
        assert weights.seat_bonus == 2.0
        assert isinstance(weights.seat_bonus, float)

    def test_merged_keeps_int_fields(self):
        weights = GejuWeights().merged({'strong_command_days': 18})
        assert weights.strong_command_days == 18
        assert isinstance(weights.strong_command_days, int)

    def test_merged_ignores_unknown(self):
        weights = GejuWeights().merged({'no_such_key': 1, 'clash_retain': {'nowhere': 0.1}})
        assert weights == GejuWeights()

    def test_merged_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            GejuWeights().merged({'clash_retain': 0.5})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GejuWeights().base_unit = 2.0

    def test_to_dict(self):
        data = GejuWeights().to_dict()
        assert data['branch_weights']['month'] == 2.5
        assert json.loads(json.dumps(data)) == data

    def test_from_env_without_file(self):
        with patch.dict(os.environ, {}, clear=True):
            assert GejuWeights.from_env() == GejuWeights()

    def test_from_env_with_file(self, tmp_path):
        path = tmp_path / 'weights.json'
        path.write_text(json.dumps({'commanding_bonus': 2.0}), encoding='utf-8')
        with patch.dict(os.environ, {'GEJU_WEIGHTS_FILE': str(path)}):
            weights = GejuWeights.from_env()
        assert weights.commanding_bonus == 2.0

    def test_from_env_bad_file_falls_back(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{not json', encoding='utf-8')
        with patch.dict(os.environ, {'GEJU_WEIGHTS_FILE': str(path)}):
            assert GejuWeights.from_env() == GejuWeights()

    def test_from_env_missing_file_falls_back(self, tmp_path):
        with patch.dict(os.environ, {'GEJU_WEIGHTS_FILE': str(tmp_path / 'missing.json')}):
            assert GejuWeights.from_env() == GejuWeights()

    def test_singleton_and_reload(self, tmp_path):
        path = tmp_path / 'weights.json'
        path.write_text(json.dumps({'seat_bonus': 3.0}), encoding='utf-8')
        try:
            with patch.dict(os.environ, {'GEJU_WEIGHTS_FILE': str(path)}):
                reloaded = reload_weights()
                assert reloaded.seat_bonus == 3.0
                assert get_weights() is reloaded
        finally:
            geju_config._weights = None


class TestAppConfig:
    """应用配置测试类"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig.from_env()
        assert config.env == 'local'
        assert config.debug is False
        assert config.log_level == 'INFO'
        assert config.port == 8001
        assert config.weights_file is None

    def test_from_env(self):
        with patch.dict(os.environ, {
            'ENV': 'prod',
            'DEBUG': 'true',
            'LOG_LEVEL': 'debug',
            'PORT': '9000',
            'GEJU_WEIGHTS_FILE': '/etc/geju/weights.json',
        }):
            config = AppConfig.from_env()
        assert config.env == 'production'
        assert config.is_production
        assert config.debug is True
        assert config.log_level == 'DEBUG'
        assert config.port == 9000
        assert config.weights_file == '/etc/geju/weights.json'

    def test_app_env_fallback(self):
        with patch.dict(os.environ, {'APP_ENV': 'stage'}, clear=True):
            assert AppConfig.from_env().env == 'staging'

    def test_singleton(self):
        first = get_config()
        assert get_config() is first
        assert reload_config() is not first
