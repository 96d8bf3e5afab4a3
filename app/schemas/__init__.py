"""Pydantic schemas.

集中维护读路径的 query schema, 用于:
- 类型转换与默认值
- 字段级校验与错误文案
- 转换为不可变的领域类型
"""
