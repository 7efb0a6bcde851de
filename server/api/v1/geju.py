#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局分析API路由
"""

import logging
from typing import Any, Callable, Dict

from fastapi import APIRouter, HTTPException

from server.api.v1.models.geju_models import GejuRequest, GejuResponse
from server.services.geju_service import GejuService

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(action: str, result: Dict[str, Any]) -> GejuResponse:
    """服务结果 -> 响应；输入错误 400，其余失败 500"""
    if not result['success']:
        status_code = 400 if result.get('invalid_input') else 500
        logger.error(f"❌ {action}失败: {result.get('error')}")
        raise HTTPException(status_code=status_code, detail=result.get('error', '计算失败'))
    logger.info(f"✅ {action}成功，返回结果")
    return GejuResponse(success=True, data=result['data'])


def _handle(action: str, call: Callable[[], Dict[str, Any]]) -> GejuResponse:
    try:
        return _respond(action, call())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ {action}API异常: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"计算异常: {str(e)}")


@router.post("/bazi/geju/interactions", response_model=GejuResponse, summary="检测原局刑冲合会")
async def detect_interactions(request: GejuRequest):
    """
    检测四柱刑冲合会

    - 六冲（旺地/生地/库地，库地冲开库）
    - 三合、三会（全合 / 含旺支半合 / 无旺支半合）
    - 六合、天干五合（只看相邻柱）
    - 三刑、相刑、自刑
    """
    logger.info(f"📥 收到刑冲合会请求: {request.year} {request.month} {request.day} {request.hour or '-'}")
    return _handle('刑冲合会检测', lambda: GejuService.detect_interactions(
        request.year, request.month, request.day, request.hour, request.is_hour_unknown,
    ))


@router.post("/bazi/geju/force", response_model=GejuResponse, summary="计算五行力量矩阵")
async def compute_force(request: GejuRequest):
    """
    计算五行力量矩阵

    - **commanding_stem**: 当日司令藏干，等于月令本气时给予司令加成
    """
    logger.info(f"📥 收到五行力量请求: {request.year} {request.month} {request.day} {request.hour or '-'}")
    return _handle('五行力量计算', lambda: GejuService.compute_force(
        request.year, request.month, request.day, request.hour,
        request.commanding_stem, request.is_hour_unknown,
    ))


@router.post("/bazi/geju/strength", response_model=GejuResponse, summary="判断日主旺衰")
async def classify_strength(request: GejuRequest):
    """
    判断日主旺衰：得令、得地、帮身/耗身、通根，
    最终判定 极旺 / 身旺 / 中和 / 身弱 / 极弱
    """
    logger.info(f"📥 收到旺衰请求: {request.year} {request.month} {request.day} {request.hour or '-'}")
    return _handle('旺衰判断', lambda: GejuService.classify_strength(
        request.year, request.month, request.day, request.hour,
        request.commanding_stem, request.is_hour_unknown,
    ))


@router.post("/bazi/geju/pattern", response_model=GejuResponse, summary="判断格局")
async def classify_pattern(request: GejuRequest):
    """
    判断格局，优先级：专旺格 → 化气格 → 从格 → 正格

    无法判定时 data.kind 为 undeterminable，并给出原因
    """
    logger.info(f"📥 收到格局请求: {request.year} {request.month} {request.day} {request.hour or '-'}")
    return _handle('格局判断', lambda: GejuService.classify_pattern(
        request.year, request.month, request.day, request.hour, request.is_hour_unknown,
    ))


@router.post("/bazi/geju/analyze", response_model=GejuResponse, summary="完整命盘分析")
async def analyze(request: GejuRequest):
    """刑冲合会 + 五行力量 + 旺衰 + 格局"""
    logger.info(f"📥 收到完整分析请求: {request.year} {request.month} {request.day} {request.hour or '-'}")
    return _handle('命盘分析', lambda: GejuService.analyze(
        request.year, request.month, request.day, request.hour,
        request.commanding_stem, request.is_hour_unknown,
    ))
