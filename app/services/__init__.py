"""服务层模块.

主要模块:
- users: 用户目录列表编排与分页整形
"""
