"""统一时间处理工具模块.

基于 zoneinfo 提供一致的时间解析与格式化功能. 数据库中的无时区时间按 UTC 处理.
"""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from app.utils.structlog_config import get_system_logger

UTC_TZ = ZoneInfo("UTC")

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}
_TEENS = range(11, 14)


class TimeFormats:
    """时间格式常量."""

    DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
    DATE_FORMAT = "%Y-%m-%d"
    LONG_DATE_FORMAT = "%B %Y"


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间.

        Returns:
            带 UTC 时区信息的当前时间.

        """
        return datetime.now(UTC)

    @staticmethod
    def to_utc(dt: str | date | datetime | None) -> datetime | None:
        """将时间转换为 UTC 时区.

        Args:
            dt: 待转换的时间,可以是 ISO8601 字符串、date 或 datetime 对象.

        Returns:
            转换后的 UTC 时区时间,转换失败时返回 None.

        """
        if not dt:
            return None

        try:
            if isinstance(dt, str):
                if dt.endswith("Z"):
                    dt = dt[:-1] + "+00:00"
                dt = datetime.fromisoformat(dt)
            elif isinstance(dt, date) and not isinstance(dt, datetime):
                dt = datetime.combine(dt, datetime.min.time())

            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC_TZ)

            return dt.astimezone(UTC_TZ)
        except (ValueError, TypeError) as e:
            get_system_logger().warning("时间转换错误", error=str(e))
            return None

    @staticmethod
    def format_ordinal_date(dt: str | date | datetime | None) -> str:
        """格式化为带序数后缀的英文长日期, 例如 ``1st January 2025``.

        Args:
            dt: 时间值.

        Returns:
            格式化结果,无法解析时返回空字符串.

        """
        parsed = TimeUtils.to_utc(dt)
        if parsed is None:
            return ""
        day = parsed.day
        suffix = "th" if day in _TEENS else _ORDINAL_SUFFIXES.get(day % 10, "th")
        return f"{day}{suffix} {parsed.strftime(TimeFormats.LONG_DATE_FORMAT)}"

    @staticmethod
    def to_json_serializable(dt: str | date | datetime | None) -> str | None:
        """转换时间对象为 JSON 可序列化的 ISO 字符串.

        Args:
            dt: 字符串、date 或 datetime 实例.

        Returns:
            ISO 格式字符串;若无法转换则返回 None.

        """
        if not dt:
            return None

        if isinstance(dt, str):
            return dt
        if isinstance(dt, datetime):
            return dt.isoformat()
        if isinstance(dt, date):
            return dt.isoformat()
        return None


time_utils = TimeUtils()
