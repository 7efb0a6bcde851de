#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字静态数据表

天干、地支、五行、阴阳、藏干及刑冲合会表，进程启动时初始化一次，只读共享。
"""
