# ruler_compass/construction/graph.py

"""
================================================================================
 构造图模块 (ruler_compass/construction/graph.py)
================================================================================

模块功能:
`ConstructionGraph` 保存一次作图会话中的全部状态：
- `shapes`: 按构造顺序排列的直线和圆。
- `points`: 按发现顺序排列的点（先是种子点，然后是每个交点）。

核心流程 (add_shape):
1.  新对象依次与每个已有对象求交（严格按插入顺序）。
2.  每次求交得到的交点按产生顺序追加到 `points`。
3.  全部检查完毕之后，才把新对象追加到 `shapes`。
这样新对象永远不会与自身求交，并且总是与完整的历史状态求交。图是只增不减的：
对象和点都不会被删除，也不会回头与之后添加的对象重新求交。

重合点不做合并：两个对象在（数值上）同一位置相交时，`points` 中会出现
两个几乎相同的点。这是预期行为。
"""
import math

from loguru import logger

from ruler_compass.geometry.primitives import Circle, Line, Point


class InvalidConstructionError(ValueError):
    """构造参数退化（零长度直线、零半径圆或非有限坐标）。"""


def _check_finite(*points):
    for p in points:
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            raise InvalidConstructionError(f"坐标必须是有限数: {p!r}")


class ConstructionGraph:

    def __init__(self):
        self.shapes = []
        self.points = []

    @classmethod
    def seeded(cls, settings=None):
        """按配置（默认 A=(500,400)、B=(700,400)）创建并初始化一个构造图。"""
        graph = cls()
        if settings is None:
            graph.seed()
        else:
            graph.seed(Point(*settings.seed_a), Point(*settings.seed_b))
        return graph

    def seed(self, a=Point(500.0, 400.0), b=Point(700.0, 400.0)):
        """
        初始状态: 种子点 A、B，直线 AB，以 A 为圆心、|AB| 为半径的圆。
        """
        self.add_point(a)
        self.add_point(b)
        self.add_line(a, b)
        self.add_circle(a, b)
        logger.debug(f"[ConstructionGraph] Seeded: {len(self.points)} points, {len(self.shapes)} shapes")

    def add_point(self, p):
        _check_finite(p)
        self.points.append(p)
        return p

    def add_shape(self, candidate):
        """
        把新对象加入构造图，返回本次新发现的交点列表。
        """
        new_points = []
        for existing in self.shapes:
            new_points.extend(candidate.intersect(existing))
        self.points.extend(new_points)
        self.shapes.append(candidate)
        logger.debug(f"[ConstructionGraph] Added {candidate!r}: {len(new_points)} new points "
                     f"(total {len(self.points)} points, {len(self.shapes)} shapes)")
        return new_points

    def add_line(self, p0, p1):
        """通过两个点构造一条直线。"""
        _check_finite(p0, p1)
        if p0.x == p1.x and p0.y == p1.y:
            raise InvalidConstructionError(f"直线的两个端点重合: {p0!r}")
        line = Line(p0, p1)
        return line, self.add_shape(line)

    def add_circle(self, center, through):
        """以 center 为圆心、经过 through 构造一个圆。"""
        _check_finite(center, through)
        r = center.distance(through.x, through.y)
        if r <= 0:
            raise InvalidConstructionError(f"圆的半径为零: 圆心 {center!r}")
        circle = Circle(center, r)
        return circle, self.add_shape(circle)

    def draw_all(self, renderer, marker_radius=3.0):
        """完整重绘: 清空画面，先画所有对象，再画所有点。"""
        renderer.clear()
        for shape in self.shapes:
            shape.draw(renderer)
        for point in self.points:
            point.draw(renderer, marker_radius)
