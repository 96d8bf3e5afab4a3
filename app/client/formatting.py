"""列表视图的展示文案."""

from __future__ import annotations

from datetime import date, datetime

from app.core.types.listing import PageMeta
from app.utils.time_utils import time_utils


def format_registration_date(value: str | date | datetime | None) -> str:
    """注册时间展示, 例如 ``21st March 2025``; 无法解析时返回空字符串."""
    return time_utils.format_ordinal_date(value)


def page_label(meta: PageMeta) -> str:
    return f"Page {meta.current_page} of {meta.last_page}"


def range_label(meta: PageMeta) -> str:
    return f"{meta.from_} to {meta.to} of {meta.total} users"


__all__ = ["format_registration_date", "page_label", "range_label"]
