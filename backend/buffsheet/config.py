"""
配置管理模块
"""
import os
from pydantic import BaseModel
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()


class Settings(BaseModel):
    """应用配置"""

    # 默认参考等级（展示/CLI 查询时用）
    reference_level: int = int(os.getenv("BUFFSHEET_REFERENCE_LEVEL", "37"))

    # 本地花名册文件
    roster_path: str = os.getenv("BUFFSHEET_ROSTER_PATH", "data/units.json")

    # CLI 日志级别
    log_level: str = os.getenv("BUFFSHEET_LOG_LEVEL", "WARNING")


# 全局配置实例
settings = Settings()
