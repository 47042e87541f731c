# ruler_compass/api/schemas.py

"""
================================================================================
 API数据结构手册 (ruler_compass/api/schemas.py)
================================================================================

致API使用者（尤其是前端工程师）：

这个文件精确定义了你需要发送给后端以及从后端接收的所有JSON对象的格式。

约定:
- 所有的点都通过它在会话点列表中的**下标**来引用。点列表只增不减，
  所以一个下标一旦出现就永远有效，并且永远指向同一个点。
- 对象（直线、圆）同样按构造顺序排列。直线的两个端点可能会因为后续的交点而
  延伸，因此请以每次响应中的最新数据为准。
- `commands` 是一帧完整的绘制命令，按顺序执行即可在画布上重现当前画面。
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

# ==============================================================================
# 1. 请求体模型 (Request Body Models)
# ==============================================================================

class LineRequest(BaseModel):
    """通过两个已有点构造一条直线。"""
    p0: int = Field(..., ge=0, description="第一个端点的下标。")
    p1: int = Field(..., ge=0, description="第二个端点的下标。")

class CircleRequest(BaseModel):
    """以一个已有点为圆心、经过另一个已有点构造一个圆。"""
    center: int = Field(..., ge=0, description="圆心点的下标。")
    through: int = Field(..., ge=0, description="圆周上一点的下标，决定半径。")

class PointerEvent(BaseModel):
    """一个指针事件，坐标与画布坐标系一致。"""
    event: Literal["press", "move", "release"]
    x: float
    y: float

# ==============================================================================
# 2. 响应体模型 (Response Body Models)
# ==============================================================================

class PointOut(BaseModel):
    x: float
    y: float

class LineOut(BaseModel):
    type: Literal["line"] = "line"
    p0: PointOut
    p1: PointOut

class CircleOut(BaseModel):
    type: Literal["circle"] = "circle"
    x: float
    y: float
    r: float

ShapeOut = Union[LineOut, CircleOut]

class DrawCommandOut(BaseModel):
    """一条绘制命令。op 为 'clear'、'point'、'segment' 或 'circle'。"""
    op: str
    args: List[float]

class SceneResponse(BaseModel):
    session_id: str
    points: List[PointOut]
    shapes: List[ShapeOut]
    commands: List[DrawCommandOut]

class ConstructionResponse(BaseModel):
    """一次构造的结果。"""
    shape_index: int
    shape: ShapeOut
    new_point_indices: List[int] = Field(..., description="本次构造新发现的交点下标。")

class NearestPointResponse(BaseModel):
    index: int
    point: Optional[PointOut] = None

class PointerResponse(BaseModel):
    armed: bool = Field(..., description="事件处理后手势是否处于就绪状态。")
    anchor: int
    candidate: int
    committed: Optional[ShapeOut] = Field(None, description="松开时提交的新对象（如果有）。")
    commands: List[DrawCommandOut] = Field(..., description="本次事件绘制出的完整一帧。")
