"""用户目录列表的分页与筛选常量.

服务端默认值与客户端控件选项共用同一份定义,避免两端口径漂移.
"""

from __future__ import annotations

from typing import Final

DEFAULT_PAGE: Final[int] = 1
DEFAULT_PAGE_SIZE: Final[int] = 10

# 每页条数选择器可选项
PAGINATION_SIZES: Final[tuple[int, ...]] = (10, 25, 50, 100)

# 页码按钮窗口: 当前页前后各显示的页数
PAGINATION_WINDOW_RADIUS: Final[int] = 2

# 搜索输入防抖静默期(秒)
SEARCH_DEBOUNCE_SECONDS: Final[float] = 0.6
