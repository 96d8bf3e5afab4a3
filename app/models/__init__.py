"""数据模型模块.

主要模型:
- User: 用户模型(只读, 由用户目录查询)
"""

from app.models.user import User

__all__ = ["User"]
