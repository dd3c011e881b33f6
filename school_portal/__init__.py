"""School Portal 后端：家长 / 教师 / 管理员三角色的学校管理 API。"""

__version__ = "0.1.0"
