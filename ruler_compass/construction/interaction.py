# ruler_compass/construction/interaction.py

"""
================================================================================
 交互与拾取 (ruler_compass/construction/interaction.py)
================================================================================

模块功能:
把按下/移动/松开三种指针事件翻译成构造图上的操作。

拖动手势的状态机（构造圆）:
- **空闲 -> 就绪 (press)**: 找到离按下位置最近的已有点，作为锚点。只要图中
  至少有一个点，就一定能找到锚点。
- **就绪 -> 就绪 (move)**: 再次拾取最近点作为候选点；若与锚点不同，则完整
  重绘并叠加一个预览圆（以锚点为圆心、经过候选点，不写入构造图）。
- **就绪 -> 空闲 (release)**: 若已找到与锚点不同的候选点，则提交这个圆并重绘；
  否则丢弃，构造图不变。

注意: 松开时使用的是最后一次 move 拾取到的候选点，而不是松开位置。

可选扩展: 显式传入 `tool='line'` 时，同一手势改为预览并构造直线。
默认值始终是 'circle'。
"""
from loguru import logger

from ruler_compass.construction.graph import InvalidConstructionError
from ruler_compass.geometry.primitives import Circle, Line

TOOLS = ('circle', 'line')


def nearest_point(points, x, y):
    """
    返回离 (x, y) 最近的点的下标；距离相同时取先出现的点。
    `points` 为空时返回 -1。
    """
    best = -1
    best_dist = 0.0
    for i, point in enumerate(points):
        dist = point.distance(x, y)
        if best < 0 or dist < best_dist:
            best_dist = dist
            best = i
    return best


class DragController:

    def __init__(self, graph, renderer, tool='circle', marker_radius=3.0):
        if tool not in TOOLS:
            raise ValueError(f"未知的工具: {tool}")
        self.graph = graph
        self.renderer = renderer
        self.tool = tool
        self.marker_radius = marker_radius
        self.anchor = -1
        self.candidate = -1

    @property
    def armed(self):
        return self.anchor >= 0

    def _has_candidate(self):
        return self.anchor >= 0 and self.candidate >= 0 and self.candidate != self.anchor

    def _preview_shape(self):
        p0 = self.graph.points[self.anchor]
        p1 = self.graph.points[self.candidate]
        if self.tool == 'line':
            return Line(p0, p1)
        return Circle(p0, p0.distance(p1.x, p1.y))

    def redraw(self):
        self.graph.draw_all(self.renderer, self.marker_radius)

    def press(self, x, y):
        self.anchor = nearest_point(self.graph.points, x, y)
        self.candidate = -1
        return self.anchor

    def move(self, x, y):
        """拾取候选点；若与锚点不同则绘制预览。返回是否绘制了预览。"""
        if not self.armed:
            return False
        self.candidate = nearest_point(self.graph.points, x, y)
        if self.candidate == self.anchor:
            return False
        preview = self._preview_shape()
        self.redraw()
        preview.draw(self.renderer)
        return True

    def release(self, x, y):
        """
        结束手势。提交成功时返回新对象，否则返回 None。
        """
        shape = None
        try:
            if self._has_candidate():
                p0 = self.graph.points[self.anchor]
                p1 = self.graph.points[self.candidate]
                try:
                    if self.tool == 'line':
                        shape, _ = self.graph.add_line(p0, p1)
                    else:
                        shape, _ = self.graph.add_circle(p0, p1)
                except InvalidConstructionError as e:
                    logger.warning(f"[DragController] Gesture discarded: {e}")
                else:
                    self.redraw()
        finally:
            self.anchor = -1
            self.candidate = -1
        return shape
