"""用户目录 - 用户模型."""

from __future__ import annotations

from app import db
from app.utils.time_utils import time_utils


class User(db.Model):
    """用户模型.

    用户目录只读取该表, 不提供新增/修改/删除接口.

    Attributes:
        id: 用户 ID,主键.
        name: 姓名.
        email: 邮箱,唯一索引.
        created_at: 注册时间.

    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=time_utils.now)

    def to_dict(self) -> dict[str, object]:
        """转换为字典.

        Returns:
            dict: 用户信息字典, `created_at` 为 ISO8601 字符串.

        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": time_utils.to_json_serializable(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.email}>"
