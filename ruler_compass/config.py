# ruler_compass/config.py

"""
================================================================================
 引擎配置 (ruler_compass/config.py)
================================================================================

集中存放可以在运行时调整的参数，以及日志初始化。

注意: 求交用的数值阈值不在这里。它们是 kernels.py 中的模块常量，
决定了相切/平行的判定和拾取顺序，不允许在运行时修改。

环境变量 (均为可选):
- `RULER_COMPASS_SEED_A` / `RULER_COMPASS_SEED_B`: 种子点坐标，格式 "x,y"。
- `RULER_COMPASS_POINT_MARKER_RADIUS`: 绘制点标记的半径。
- `RULER_COMPASS_DEFAULT_TOOL`: 拖动手势默认构造的对象，'circle' 或 'line'。
- `RULER_COMPASS_LOG_LEVEL`: loguru 日志级别。
"""
import os
import sys
from typing import Literal, Tuple

from loguru import logger
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "RULER_COMPASS_"

LOG_FORMAT = "<level>{level: <8}</level> | {message}"


class EngineSettings(BaseModel):
    """作图引擎的运行参数。"""
    seed_a: Tuple[float, float] = Field((500.0, 400.0), description="第一个种子点，也是种子圆的圆心。")
    seed_b: Tuple[float, float] = Field((700.0, 400.0), description="第二个种子点，决定种子圆的半径。")
    point_marker_radius: float = Field(3.0, gt=0, description="绘制点标记时使用的小圆半径。")
    default_tool: Literal["circle", "line"] = Field("circle", description="拖动手势默认构造的对象类型。")
    log_level: str = Field("INFO", description="loguru 日志级别。")

    @field_validator("seed_a", "seed_b", mode="before")
    @classmethod
    def _parse_coords(cls, value):
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",")]
            if len(parts) != 2:
                raise ValueError(f"坐标格式应为 'x,y'，实际为 '{value}'")
            return (float(parts[0]), float(parts[1]))
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value):
        return value.upper()


def load_settings(environ=None):
    """从环境变量读取配置，未设置的字段使用默认值。"""
    environ = os.environ if environ is None else environ
    values = {}
    for name in EngineSettings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return EngineSettings(**values)


def configure_logging(level="INFO"):
    """用单个 stderr 输出替换 loguru 的默认输出。"""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
