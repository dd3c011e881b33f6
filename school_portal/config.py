"""应用配置管理。

使用 Pydantic Settings 统一读取环境变量，便于在本地/生产之间切换。
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """核心配置项。

    - ``database_url``：默认使用本地 SQLite，便于快速启动。
    - ``jwt_secret`` / ``jwt_algorithm``：访问令牌签名参数。
    - ``admin_signup_code``：管理员注册所需的共享口令。
    """

    database_url: str = Field(
        default="sqlite:///./storage/school.db", description="SQLAlchemy 数据库 URL"
    )
    jwt_secret: str = Field(
        default="school-portal-dev-secret", description="JWT 签名密钥"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT 签名算法")
    token_expire_hours: int = Field(default=24, description="访问令牌有效期（小时）")
    admin_signup_code: str = Field(
        default="HIGHSPEED8", description="管理员注册口令"
    )
    log_level: str = Field(default="INFO", description="日志级别")

    model_config = {
        "env_prefix": "SCHOOL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """缓存后的全局配置实例。"""

    return Settings()
