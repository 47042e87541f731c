# ruler_compass/geometry/primitives.py

"""
================================================================================
 几何图元模块 (ruler_compass/geometry/primitives.py)
================================================================================

模块功能:
本模块定义作图引擎中的三种几何对象，并把它们与 kernels.py 中的求交内核
连接起来：
1.  **点 (Point)**: 不可变的坐标对。
2.  **直线 (Line)**: 由两个端点定义的无限长直线，但绘制和拾取时只使用
    两个端点之间的线段。端点可以被“替换”（见下文的自动延伸规则）。
3.  **圆 (Circle)**: 圆心与半径，构造后不可变。

`Line` 和 `Circle` 共同构成一个封闭的和类型 `Shape`，只支持两种能力:
`intersect`（求交）和 `draw`（绘制）。

直线的自动延伸规则 (Line.update):
- 当一个新交点落在直线上、但在当前线段之外时，直线会把对应的端点替换成
  这个新点，使画出的线段始终覆盖其上的所有构造点。线段只会变长，不会变短。
- 这个规则只作用于 `intersect` 的调用者（接收者），从不作用于参数一方。
  因此两条直线求交时，只有其中一条会延伸。

别名风险:
`update` 是直接替换 `p0` / `p1` 的引用，而不是修改点本身。其他代码不应
假设一条直线的端点在创建之后保持同一个对象。
"""
import math
from abc import ABC, abstractmethod
from collections import namedtuple

import numpy as np
from loguru import logger

from ruler_compass.geometry import kernels


def _points_from_results(results, count):
    return [Point(float(results[i, 0]), float(results[i, 1])) for i in range(count)]


class Point(namedtuple('Point', ['x', 'y'])):
    """平面上的一个点，创建后不可变。"""
    __slots__ = ()

    def distance(self, qx, qy):
        """返回到坐标 (qx, qy) 的欧氏距离。"""
        dx = self.x - qx
        dy = self.y - qy
        return math.sqrt(dx * dx + dy * dy)

    def draw(self, renderer, radius):
        renderer.draw_point(self.x, self.y, radius)


class Shape(ABC):
    """构造图中的基本单元：直线或圆。"""

    kind = None

    @abstractmethod
    def intersect(self, other):
        """
        与另一个 Shape 求交，按内核给出的顺序返回交点列表（0、1 或 2 个点）。
        """

    @abstractmethod
    def draw(self, renderer):
        pass

    @abstractmethod
    def as_array(self):
        """返回内核使用的 NumPy 表示。"""


class Line(Shape):
    kind = 'line'

    def __init__(self, p0, p1):
        self.p0 = p0
        self.p1 = p1

    def __repr__(self):
        return f"Line({self.p0!r}, {self.p1!r})"

    def as_array(self):
        return np.array([self.p0.x, self.p0.y, self.p1.x, self.p1.y], dtype=np.float64)

    def draw(self, renderer):
        renderer.draw_segment(self.p0.x, self.p0.y, self.p1.x, self.p1.y)

    def update(self, p):
        """
        把一个已知落在直线上的点 p 纳入线段的覆盖范围。

        将 p 投影到参数化 p0 + t*(p1 - p0) 上，dd 为未归一化的投影量，
        d0 = |p1 - p0|^2:
        - dd < 0:   p 在 p0 之前，用 p 替换 p0（向后延伸）。
        - dd > d0:  p 在 p1 之后，用 p 替换 p1（向前延伸）。
        - 否则:      p 已在线段内，不做修改。

        Returns:
            bool: 线段是否发生了延伸。
        """
        dx = self.p1.x - self.p0.x
        dy = self.p1.y - self.p0.y
        d0 = dx * dx + dy * dy
        dd = (p.x - self.p0.x) * dx + (p.y - self.p0.y) * dy
        if dd < 0:
            logger.debug(f"[Line] Extend p0 {self.p0!r} -> {p!r}")
            self.p0 = p
            return True
        if dd > d0:
            logger.debug(f"[Line] Extend p1 {self.p1!r} -> {p!r}")
            self.p1 = p
            return True
        return False

    def intersect(self, other):
        if isinstance(other, Line):
            results, count = kernels.intersect_line_line(self.as_array(), other.as_array())
        elif isinstance(other, Circle):
            results, count = kernels.intersect_line_circle(self.as_array(), other.as_array())
        else:
            raise TypeError(f"不支持的对象类型: {type(other).__name__}")

        points = _points_from_results(results, count)
        # 内核给出的顺序就是延伸顺序：直线-圆时先 p_minus 后 p_plus
        for point in points:
            self.update(point)
        return points


class Circle(Shape):
    kind = 'circle'

    def __init__(self, center, r):
        self._x = float(center.x)
        self._y = float(center.y)
        self._r = float(r)

    def __repr__(self):
        return f"Circle(x={self._x!r}, y={self._y!r}, r={self._r!r})"

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def r(self):
        return self._r

    @property
    def center(self):
        return Point(self._x, self._y)

    def as_array(self):
        return np.array([self._x, self._y, self._r], dtype=np.float64)

    def draw(self, renderer):
        renderer.draw_circle(self._x, self._y, self._r)

    def intersect(self, other):
        if isinstance(other, Line):
            # 唯一的实现在 Line 一侧，这里原样返回它的结果
            return other.intersect(self)
        if isinstance(other, Circle):
            results, count = kernels.intersect_circle_circle(self.as_array(), other.as_array())
            return _points_from_results(results, count)
        raise TypeError(f"不支持的对象类型: {type(other).__name__}")
