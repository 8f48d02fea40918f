"""WSGI entry point, e.g. ``gunicorn article_rewriter.wsgi:app``.

Reads ``REWRITER_CONFIG`` for an optional YAML config path and loads .env.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from .app import create_app
from .config import load_config
from .logging_utils import setup_llm_logger, setup_logging
from .runner import build_service

load_dotenv()

_cfg = load_config(os.getenv("REWRITER_CONFIG"))
setup_logging(_cfg.logging)

app = create_app(_cfg, build_service(_cfg, llm_logger=setup_llm_logger(_cfg.logging)))
