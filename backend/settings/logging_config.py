# settings/logging_config.py
# -*- coding: utf-8 -*-
"""
统一日志配置。
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import Settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    配置 root logger（只在进程入口调用一次，例如 api.main）。
    """
    settings = settings or Settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
