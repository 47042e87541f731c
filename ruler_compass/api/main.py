# ruler_compass/api/main.py

"""
================================================================================
 API端点手册 (ruler_compass/api/main.py)
================================================================================

致API使用者（尤其是前端工程师）：

这个文件是尺规作图服务的入口点。它使用FastAPI框架定义所有HTTP端点。
浏览器负责捕获鼠标事件并在 canvas 上执行绘制命令；所有几何计算都在这里完成。

交互式文档 (Swagger UI):
服务运行时，在浏览器中打开 http://127.0.0.1:8000/docs 即可浏览并调试所有端点。

核心端点:
- **`POST /sessions`**: 创建一个新的作图会话，已包含种子点、种子直线和种子圆。
- **`POST /sessions/{id}/pointer`**: 转发按下/移动/松开事件，返回需要绘制的一帧。
- **`POST /sessions/{id}/lines`**、**`POST /sessions/{id}/circles`**: 直接构造对象。
- **`DELETE /sessions/{id}`**: 结束会话并释放它占用的内存。

会话只保存在内存中，服务重启后全部丢失。

并发约定:
端点是普通的 `def` 函数，FastAPI 会在线程池中执行它们。同一个会话上的
所有操作都在该会话的锁内串行执行，保证构造图的插入顺序和手势状态不会被
并发请求打乱。不同会话之间互不阻塞。
"""
import threading
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response
from loguru import logger

from ruler_compass.config import configure_logging, load_settings
from ruler_compass.construction.graph import ConstructionGraph, InvalidConstructionError
from ruler_compass.construction.interaction import DragController, nearest_point
from ruler_compass.construction.rendering import DrawCommandRecorder
from ruler_compass.geometry.primitives import Line
from .schemas import (
    CircleOut, CircleRequest, ConstructionResponse, DrawCommandOut, LineOut, LineRequest,
    NearestPointResponse, PointerEvent, PointerResponse, PointOut, SceneResponse,
)

settings = load_settings()


@asynccontextmanager
async def lifespan(app):
    # 日志只在服务启动时配置，导入本模块不会改动进程级的 loguru 输出
    configure_logging(settings.log_level)
    yield


app = FastAPI(
    title="尺规作图引擎 (Ruler & Compass Construction Engine)",
    description="增量式尺规作图：自动求出新对象与已有对象的全部交点，并作为后续作图的锚点。",
    version="1.0.0",
    lifespan=lifespan,
)


class Session:
    """一个作图会话：构造图、绘制记录器、拖动手势的状态，以及保护它们的锁。"""

    def __init__(self, session_id):
        self.id = session_id
        self.lock = threading.Lock()
        self.graph = ConstructionGraph.seeded(settings)
        self.recorder = DrawCommandRecorder()
        self.controller = DragController(
            self.graph, self.recorder,
            tool=settings.default_tool, marker_radius=settings.point_marker_radius,
        )
        self.controller.redraw()


sessions = {}
sessions_lock = threading.Lock()


def _get_session(session_id):
    with sessions_lock:
        try:
            return sessions[session_id]
        except KeyError:
            raise HTTPException(status_code=404, detail=f"会话不存在: '{session_id}'")


def _get_point(session, index):
    if index >= len(session.graph.points):
        raise HTTPException(
            status_code=422,
            detail=f"点下标越界: {index}（当前共有 {len(session.graph.points)} 个点）",
        )
    return session.graph.points[index]


# ------------------------------------------------------------------------------
# 数据解组 (Unmarshalling): 内部对象 -> 响应模型
# ------------------------------------------------------------------------------

def _point_out(p):
    return PointOut(x=p.x, y=p.y)


def _shape_out(shape):
    if isinstance(shape, Line):
        return LineOut(p0=_point_out(shape.p0), p1=_point_out(shape.p1))
    return CircleOut(x=shape.x, y=shape.y, r=shape.r)


def _commands_out(recorder):
    return [DrawCommandOut(op=cmd.op, args=list(cmd.args)) for cmd in recorder.commands]


def _scene(session):
    return SceneResponse(
        session_id=session.id,
        points=[_point_out(p) for p in session.graph.points],
        shapes=[_shape_out(s) for s in session.graph.shapes],
        commands=_commands_out(session.recorder),
    )


def _construct(session, build):
    first_new = len(session.graph.points)
    try:
        shape, new_points = build()
    except InvalidConstructionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    session.controller.redraw()
    return ConstructionResponse(
        shape_index=len(session.graph.shapes) - 1,
        shape=_shape_out(shape),
        new_point_indices=list(range(first_new, first_new + len(new_points))),
    )


# ------------------------------------------------------------------------------
# 端点
# ------------------------------------------------------------------------------

@app.post("/sessions", response_model=SceneResponse, tags=["Session"])
def create_session():
    """创建一个新的、已完成初始化的作图会话。"""
    session = Session(uuid.uuid4().hex)
    with sessions_lock:
        sessions[session.id] = session
    logger.info(f"Session {session.id} created")
    with session.lock:
        return _scene(session)


@app.get("/sessions/{session_id}", response_model=SceneResponse, tags=["Session"])
def get_scene(session_id: str):
    """返回会话的全部点、对象，以及最近一次完整重绘的绘制命令。"""
    session = _get_session(session_id)
    with session.lock:
        return _scene(session)


@app.delete("/sessions/{session_id}", status_code=204, tags=["Session"])
def delete_session(session_id: str):
    """结束会话并释放其全部状态。会话不存在时返回 HTTP 404。"""
    with sessions_lock:
        if sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=404, detail=f"会话不存在: '{session_id}'")
    logger.info(f"Session {session_id} deleted")
    return Response(status_code=204)


@app.post("/sessions/{session_id}/lines", response_model=ConstructionResponse, tags=["Construction"])
def add_line(session_id: str, request: LineRequest):
    """
    通过两个已有点构造直线。

    **错误响应**:
    - **HTTP 404**: 会话不存在。
    - **HTTP 422**: 点下标越界，或两个点重合（零长度直线）。
    """
    session = _get_session(session_id)
    with session.lock:
        p0 = _get_point(session, request.p0)
        p1 = _get_point(session, request.p1)
        return _construct(session, lambda: session.graph.add_line(p0, p1))


@app.post("/sessions/{session_id}/circles", response_model=ConstructionResponse, tags=["Construction"])
def add_circle(session_id: str, request: CircleRequest):
    """
    以 center 为圆心、经过 through 构造圆。两点重合（零半径）时返回 HTTP 422。
    """
    session = _get_session(session_id)
    with session.lock:
        center = _get_point(session, request.center)
        through = _get_point(session, request.through)
        return _construct(session, lambda: session.graph.add_circle(center, through))


@app.get("/sessions/{session_id}/nearest", response_model=NearestPointResponse, tags=["Interaction"])
def get_nearest(session_id: str, x: float, y: float):
    session = _get_session(session_id)
    with session.lock:
        index = nearest_point(session.graph.points, x, y)
        point = _point_out(session.graph.points[index]) if index >= 0 else None
    return NearestPointResponse(index=index, point=point)


@app.post("/sessions/{session_id}/pointer", response_model=PointerResponse, tags=["Interaction"])
def pointer_event(session_id: str, event: PointerEvent):
    """
    转发一个指针事件给拖动手势状态机。

    - `press`: 选定锚点。
    - `move`: 若候选点不同于锚点，返回的一帧中最后一条命令就是预览对象。
    - `release`: 提交构造（如果有），`committed` 为新对象。
    """
    session = _get_session(session_id)
    controller = session.controller
    committed = None
    with session.lock:
        if event.event == "press":
            controller.press(event.x, event.y)
        elif event.event == "move":
            controller.move(event.x, event.y)
        else:
            shape = controller.release(event.x, event.y)
            if shape is not None:
                committed = _shape_out(shape)
        return PointerResponse(
            armed=controller.armed,
            anchor=controller.anchor,
            candidate=controller.candidate,
            committed=committed,
            commands=_commands_out(session.recorder),
        )


@app.get("/", include_in_schema=False)
def root():
    """根路径，用于简单的健康检查或服务发现。"""
    return {"message": "尺规作图服务正在运行。请访问 /docs 查看API文档。"}
